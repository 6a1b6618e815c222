"""Line feature extraction.

Pure, line-oriented pattern analysis: every structural property the change
detectors look at is derived from a single line of text. Features are
computed lazily and memoized per ``LineFeatures`` instance; the extractor
keeps one instance per distinct line in a bounded LRU cache so repeated
lines across both texts are analyzed once.
"""

from __future__ import annotations

import re
from collections import OrderedDict
from dataclasses import dataclass
from functools import cached_property

COMMENT_PREFIXES = ("//", "#", "/*", "*")
IMPORT_PREFIXES = ("import ", "from ", "require(", "include ", "using ")
CONTROL_KEYWORDS = ("else if", "if", "while", "for", "switch")

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION_ONLY = re.compile(r"^[\s}\])\"'`;,]+$")

_STRING = r"\"(?:\\.|[^\"\\])*\"|'(?:\\.|[^'\\])*'|`(?:\\.|[^`\\])*`"
_NUMBER = r"\b\d+(?:\.\d+)?\b"
_BOOLEAN = r"\b(?:true|false|True|False|TRUE|FALSE)\b"
_IDENTIFIER = r"\b[A-Za-z_]\w*\b"

_STRINGS = re.compile(_STRING)
_LITERALS = re.compile(f"{_STRING}|{_BOOLEAN}|{_NUMBER}")
_IDENTIFIERS = re.compile(_IDENTIFIER)
_SKELETON_TOKENS = re.compile(f"(?P<str>{_STRING})|(?P<num>{_NUMBER})|(?P<id>{_IDENTIFIER})")
_SKELETON_NAMES = {"str": "STR", "num": "NUM", "id": "ID"}

_OPERATORS = re.compile(r"===|!==|==|!=|>=|<=|&&|\|\||>|<|!")

_CONTROL = re.compile(r"^(else\s+if|if|while|for|switch)(?=\(|\s)")

_IMPORT_PATHS = (
    re.compile(r"from\s+['\"]([^'\"]+)['\"]"),
    re.compile(r"^import\s+['\"]([^'\"]+)['\"]"),
    re.compile(r"require\(\s*['\"]([^'\"]+)['\"]\s*\)"),
    re.compile(r"^from\s+([\w.]+)\s+import\b"),
    re.compile(r"^import\s+([\w.]+)"),
)

# Declaration shapes, first match wins.
_FUNCTION_SHAPES = (
    re.compile(r"\basync\s+function\s*\*?\s*(\w+)\s*\(([^)]*)\)"),
    re.compile(r"\bfunction\s*\*?\s*(\w+)\s*\(([^)]*)\)"),
    re.compile(r"\b(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?function\s*\*?\s*\w*\s*\(([^)]*)\)"),
    re.compile(r"\b(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s*)?\(([^)]*)\)\s*=>"),
    re.compile(r"\b(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?(\w+)\s*=>"),
    re.compile(r"^(?:async\s+)?def\s+(\w+)\s*\(([^)]*)\)"),
)

_COMPOUND_OPERATOR_CHARS = "+-*/%&|^"


@dataclass(frozen=True)
class FunctionSignature:
    """A function declaration's name and raw parameter list."""

    name: str
    params: str


@dataclass(frozen=True)
class Assignment:
    """A line split at its assignment operator."""

    lhs: str
    operator: str
    rhs: str


def normalize_signature(line: str) -> str:
    """Strip and collapse whitespace runs; the identity key of a line."""
    return _WHITESPACE.sub(" ", line.strip())


def extract_condition(line: str) -> str | None:
    """Text inside the first balanced parenthesis group, or None."""
    start = line.find("(")
    if start == -1:
        return None
    depth = 0
    for i in range(start, len(line)):
        char = line[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return line[start + 1 : i].strip()
    return None


def split_assignment(line: str) -> Assignment | None:
    """Split ``lhs = rhs`` (compound operators allowed) or ``key: value``."""
    text = line.strip()
    for i, char in enumerate(text):
        if char != "=":
            continue
        prev_char = text[i - 1] if i > 0 else ""
        next_char = text[i + 1] if i + 1 < len(text) else ""
        if next_char in ("=", ">") or prev_char in ("=", "!", "<", ">"):
            continue
        if prev_char and prev_char in _COMPOUND_OPERATOR_CHARS:
            return _make_assignment(text[: i - 1], prev_char + "=", text[i + 1 :])
        return _make_assignment(text[:i], "=", text[i + 1 :])

    for i, char in enumerate(text):
        if char != ":":
            continue
        if text[i + 1 : i + 2] == ":" or text[i - 1 : i] == ":":
            continue
        return _make_assignment(text[:i], ":", text[i + 1 :])
    return None


def _make_assignment(lhs: str, operator: str, rhs: str) -> Assignment | None:
    lhs = lhs.strip()
    rhs = rhs.strip().rstrip(";,").strip()
    if not lhs or not rhs:
        return None
    return Assignment(lhs=lhs, operator=operator, rhs=rhs)


def find_identifiers(text: str) -> tuple[str, ...]:
    """Word tokens in order, duplicates kept, string contents excluded."""
    return tuple(_IDENTIFIERS.findall(_STRINGS.sub(" ", text)))


def find_literals(text: str) -> tuple[str, ...]:
    """String, boolean and number tokens in order of appearance."""
    return tuple(match.group(0) for match in _LITERALS.finditer(text))


@dataclass(frozen=True)
class LineFeatures:
    """Structural properties of one line of text.

    Each property is computed on first access and memoized on the instance.
    """

    text: str

    @cached_property
    def stripped(self) -> str:
        return self.text.strip()

    @cached_property
    def signature(self) -> str:
        return normalize_signature(self.text)

    @cached_property
    def is_blank(self) -> bool:
        return not self.stripped

    @cached_property
    def is_comment(self) -> bool:
        return self.stripped.startswith(COMMENT_PREFIXES) or "<!--" in self.stripped

    @cached_property
    def is_import(self) -> bool:
        return self.stripped.startswith(IMPORT_PREFIXES)

    @cached_property
    def import_path(self) -> str | None:
        for pattern in _IMPORT_PATHS:
            match = pattern.search(self.stripped)
            if match:
                return match.group(1)
        return None

    @cached_property
    def is_substantive(self) -> bool:
        if self.is_blank or self.is_comment:
            return False
        return not _PUNCTUATION_ONLY.match(self.stripped)

    @cached_property
    def literals(self) -> tuple[str, ...]:
        return find_literals(self.text)

    @cached_property
    def identifiers(self) -> tuple[str, ...]:
        return find_identifiers(self.text)

    @cached_property
    def skeleton(self) -> str:
        """Token-shape of the line: strings, numbers and names abstracted."""
        shaped = _SKELETON_TOKENS.sub(lambda m: _SKELETON_NAMES[m.lastgroup], self.text)
        return normalize_signature(shaped)

    @cached_property
    def function_signature(self) -> FunctionSignature | None:
        for pattern in _FUNCTION_SHAPES:
            match = pattern.search(self.stripped)
            if match:
                return FunctionSignature(name=match.group(1), params=match.group(2).strip())
        return None

    @cached_property
    def control_keyword(self) -> str | None:
        match = _CONTROL.match(self.stripped.lstrip("}").lstrip())
        if not match:
            return None
        return normalize_signature(match.group(1))

    @cached_property
    def condition(self) -> str | None:
        return extract_condition(self.text)

    @cached_property
    def operators(self) -> tuple[str, ...]:
        if self.condition is None:
            return ()
        return tuple(_OPERATORS.findall(self.condition))

    @cached_property
    def assignment(self) -> Assignment | None:
        return split_assignment(self.text)


# ============================================================
# Extractor
# ============================================================


class LineFeatureExtractor:
    """Hands out memoized ``LineFeatures`` keyed by the raw line.

    The cache is an LRU bounded by ``max_entries`` (unbounded when None).
    Evicting an entry only costs recomputation.
    """

    def __init__(self, max_entries: int | None = None):
        self.max_entries = max_entries
        self._cache: OrderedDict[str, LineFeatures] = OrderedDict()

    def features(self, line: str) -> LineFeatures:
        cached = self._cache.get(line)
        if cached is not None:
            self._cache.move_to_end(line)
            return cached

        features = LineFeatures(line)
        self._cache[line] = features
        if self.max_entries is not None and len(self._cache) > self.max_entries:
            self._cache.popitem(last=False)
        return features

    def features_for(self, lines: list[str]) -> list[LineFeatures]:
        return [self.features(line) for line in lines]

    def clear(self) -> None:
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)
