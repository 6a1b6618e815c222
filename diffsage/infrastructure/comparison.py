"""Shared state of one source/changed comparison.

A ``Comparison`` bundles both line sequences, their signature indices and
the claim tracker so every detector phase sees the claims left by the
phases before it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from diffsage.infrastructure.claims import ClaimTracker
from diffsage.infrastructure.line_features import LineFeatureExtractor, LineFeatures
from diffsage.infrastructure.line_index import LineIndex, build_line_index


@dataclass
class Comparison:
    """Both sides of an analysis plus the claims made so far."""

    source: list[LineFeatures]
    changed: list[LineFeatures]
    source_index: LineIndex
    changed_index: LineIndex
    claims: ClaimTracker = field(default_factory=ClaimTracker)

    @classmethod
    def build(
        cls,
        source_lines: list[str],
        changed_lines: list[str],
        extractor: LineFeatureExtractor,
    ) -> Comparison:
        source = extractor.features_for(source_lines)
        changed = extractor.features_for(changed_lines)
        return cls(
            source=source,
            changed=changed,
            source_index=build_line_index(source),
            changed_index=build_line_index(changed),
        )

    def in_changed(self, signature: str) -> bool:
        return signature in self.changed_index

    def in_source(self, signature: str) -> bool:
        return signature in self.source_index

    def source_texts(self, start: int, end: int) -> tuple[str, ...]:
        """Raw source lines for an inclusive 0-based range."""
        return tuple(line.text for line in self.source[start : end + 1])

    def changed_texts(self, start: int, end: int) -> tuple[str, ...]:
        """Raw changed lines for an inclusive 0-based range."""
        return tuple(line.text for line in self.changed[start : end + 1])
