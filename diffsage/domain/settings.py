"""Analyzer settings.

Thresholds and caps used by the change detectors. Defaults reproduce the
stock behavior; a YAML file can override any subset of them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

DEFAULT_MOVE_MAX_BLOCK = 20
DEFAULT_MOVE_MIN_SUBSTANTIVE = 3
DEFAULT_MOVE_MIN_DISTANCE = 2
DEFAULT_TRY_CATCH_LOOKAHEAD = 200
DEFAULT_TRY_CATCH_MIN_SIMILARITY = 0.5
DEFAULT_MERGE_GAP = 10
DEFAULT_PAIRING_CANDIDATE_LIMIT = 50
DEFAULT_REPLACE_MAX_SIZE_RATIO = 7.0
DEFAULT_REPLACE_MAX_DISTANCE = 100
DEFAULT_REPLACE_CONTEXT_RADIUS = 5
DEFAULT_REPLACE_MIN_CONTEXT_SCORE = 0.6

SETTINGS_SECTION = "analyzer"


class SettingsError(ValueError):
    """Raised when analyzer settings are invalid or cannot be loaded."""

    pass


@dataclass(frozen=True)
class AnalyzerSettings:
    """Tunable thresholds for one analyzer.

    Attributes:
        move_max_block: Largest block size tried by move detection
        move_min_substantive: Substantive lines a moved block needs
        move_min_distance: Offsets at or below this are treated as in place
        try_catch_lookahead: Lines scanned after a ``try`` before giving up
        try_catch_min_similarity: Body similarity for a replaced wrapper
        merge_gap: Blank/comment lines allowed between merged blocks
        pairing_candidate_limit: Additions tried per deletion when pairing lines
        replace_max_size_ratio: Largest size ratio between replacement blocks
        replace_max_distance: Largest line distance between replacement blocks
        replace_context_radius: Lines compared before and after each block
        replace_min_context_score: Context score a replacement needs
        feature_cache_size: LRU bound of the feature cache (None = unbounded)
    """

    move_max_block: int = DEFAULT_MOVE_MAX_BLOCK
    move_min_substantive: int = DEFAULT_MOVE_MIN_SUBSTANTIVE
    move_min_distance: int = DEFAULT_MOVE_MIN_DISTANCE
    try_catch_lookahead: int = DEFAULT_TRY_CATCH_LOOKAHEAD
    try_catch_min_similarity: float = DEFAULT_TRY_CATCH_MIN_SIMILARITY
    merge_gap: int = DEFAULT_MERGE_GAP
    pairing_candidate_limit: int = DEFAULT_PAIRING_CANDIDATE_LIMIT
    replace_max_size_ratio: float = DEFAULT_REPLACE_MAX_SIZE_RATIO
    replace_max_distance: int = DEFAULT_REPLACE_MAX_DISTANCE
    replace_context_radius: int = DEFAULT_REPLACE_CONTEXT_RADIUS
    replace_min_context_score: float = DEFAULT_REPLACE_MIN_CONTEXT_SCORE
    feature_cache_size: int | None = None

    def __post_init__(self) -> None:
        for name in ("move_max_block", "move_min_substantive", "try_catch_lookahead",
                     "pairing_candidate_limit"):
            if getattr(self, name) < 1:
                raise SettingsError(f"{name} must be at least 1, got {getattr(self, name)}")
        for name in ("move_min_distance", "merge_gap", "replace_max_distance",
                     "replace_context_radius"):
            if getattr(self, name) < 0:
                raise SettingsError(f"{name} must not be negative, got {getattr(self, name)}")
        for name in ("try_catch_min_similarity", "replace_min_context_score"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise SettingsError(f"{name} must be between 0 and 1, got {value}")
        if self.replace_max_size_ratio < 1.0:
            raise SettingsError(
                f"replace_max_size_ratio must be at least 1, got {self.replace_max_size_ratio}"
            )
        if self.move_min_substantive > self.move_max_block:
            raise SettingsError("move_min_substantive cannot exceed move_max_block")
        if self.feature_cache_size is not None and self.feature_cache_size < 1:
            raise SettingsError(
                f"feature_cache_size must be at least 1, got {self.feature_cache_size}"
            )

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> AnalyzerSettings:
        """Create settings from a mapping, validating keys and value types.

        Raises:
            SettingsError: On unknown keys or values of the wrong type
        """
        if not isinstance(data, dict):
            raise SettingsError(f"Settings must be a mapping, got {type(data).__name__}")

        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise SettingsError(
                f"Unknown setting(s): {', '.join(unknown)}. "
                f"Valid settings: {', '.join(known)}"
            )

        values = {}
        for key, value in data.items():
            values[key] = _coerce(key, value, cls._expected_type(key))
        return cls(**values)

    @classmethod
    def from_file(cls, path: str | Path) -> AnalyzerSettings:
        """Load settings from a YAML file.

        The file may hold the settings at top level or under an
        ``analyzer:`` section. An empty file yields the defaults.

        Raises:
            SettingsError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SettingsError(f"Cannot read settings file {path}: {e}")

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"Malformed YAML in {path}: {e}")

        if isinstance(data, dict) and SETTINGS_SECTION in data:
            data = data[SETTINGS_SECTION] or {}
        return cls.from_dict(data)

    @staticmethod
    def _expected_type(key: str) -> type:
        if key in ("try_catch_min_similarity", "replace_max_size_ratio",
                   "replace_min_context_score"):
            return float
        return int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)


def _coerce(key: str, value, expected: type):
    if key == "feature_cache_size" and value is None:
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise SettingsError(f"{key} must be a number, got {value!r}")
    if expected is float and isinstance(value, (int, float)):
        return float(value)
    if expected is int and isinstance(value, int):
        return value
    raise SettingsError(f"{key} must be {expected.__name__}, got {value!r}")
