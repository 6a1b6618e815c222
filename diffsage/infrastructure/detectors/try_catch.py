"""Try/catch wrapper detection.

Parses brace-delimited ``try { ... } catch (...) { ... } finally { ... }``
constructs with a small token scanner, then pairs wrappers that exist on
only one side of the comparison:

- deleted and added wrappers around similar bodies become ``replaced``
- a wrapper only in the changed text is ``added``
- a wrapper only in the source text is ``deleted``
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from diffsage.domain.changes import (
    TryCatchAdded,
    TryCatchDeleted,
    TryCatchReplaced,
)
from diffsage.domain.settings import AnalyzerSettings
from diffsage.infrastructure.claims import ClaimTracker
from diffsage.infrastructure.comparison import Comparison
from diffsage.infrastructure.detectors.blocks import addition_block, deletion_block
from diffsage.infrastructure.line_features import LineFeatures, normalize_signature
from diffsage.infrastructure.line_index import LineIndex, occurrences

_TRY_START = re.compile(r"^try\b")
_STRINGS = re.compile(r"\"(?:\\.|[^\"\\])*\"|'(?:\\.|[^'\\])*'|`(?:\\.|[^`\\])*`")
_LINE_COMMENT = re.compile(r"//.*$")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/")
_TOKENS = re.compile(r"[{}]|\w+|[^\w\s{}]+")
_KEYWORDS = ("try", "catch", "finally")


@dataclass(frozen=True)
class _Token:
    value: str
    line: int


@dataclass(frozen=True)
class TryBlock:
    """A parsed try/catch construct on one side (0-based positions).

    Attributes:
        start: Line holding the ``try`` keyword
        end: Line holding the construct's last closing brace
        body_start: First line strictly inside the try braces
        body_end: Last line strictly inside the try braces
        marker_lines: Lines holding try/catch/finally keywords
    """

    start: int
    end: int
    body_start: int
    body_end: int
    marker_lines: tuple[int, ...]

    def positions(self) -> range:
        return range(self.start, self.end + 1)

    def body_positions(self) -> range:
        return range(self.body_start, self.body_end + 1)


# ============================================================
# Parsing
# ============================================================


def _tokenize(lines: list[LineFeatures], start: int, limit: int) -> list[_Token]:
    """Brace and keyword tokens for ``limit`` lines from ``start``.

    String literals and comments are dropped; any other word or symbol run
    becomes an ``x`` token.
    """
    tokens: list[_Token] = []
    for position in range(start, min(start + limit, len(lines))):
        text = _STRINGS.sub(" ", lines[position].text)
        text = _BLOCK_COMMENT.sub(" ", text)
        text = _LINE_COMMENT.sub("", text)
        for match in _TOKENS.finditer(text):
            value = match.group(0)
            if value not in ("{", "}") and value not in _KEYWORDS:
                value = "x"
            tokens.append(_Token(value, position))
    return tokens


def _close_brace(tokens: list[_Token], open_index: int) -> int | None:
    """Index of the brace closing the one at ``open_index``."""
    depth = 0
    for index in range(open_index, len(tokens)):
        value = tokens[index].value
        if value == "{":
            depth += 1
        elif value == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def parse_try_block(lines: list[LineFeatures], start: int, lookahead: int) -> TryBlock | None:
    """Parse the construct beginning at ``start``.

    Returns None when the construct is unbalanced, has no catch or finally
    clause, or does not finish within ``lookahead`` lines.
    """
    tokens = _tokenize(lines, start, lookahead)
    if len(tokens) < 2 or tokens[0].value != "try" or tokens[1].value != "{":
        return None

    try_close = _close_brace(tokens, 1)
    if try_close is None:
        return None

    markers = [tokens[0].line]
    body_start = tokens[1].line + 1
    body_end = tokens[try_close].line - 1
    end = tokens[try_close].line
    has_handler = False
    index = try_close + 1

    while index < len(tokens):
        keyword = tokens[index].value
        if keyword == "catch":
            markers.append(tokens[index].line)
            index += 1
            while index < len(tokens) and tokens[index].value == "x":
                index += 1
            if index >= len(tokens) or tokens[index].value != "{":
                return None
        elif keyword == "finally":
            markers.append(tokens[index].line)
            index += 1
            if index >= len(tokens) or tokens[index].value != "{":
                return None
        else:
            break

        close = _close_brace(tokens, index)
        if close is None:
            return None
        end = tokens[close].line
        has_handler = True
        index = close + 1
        if keyword == "finally":
            break

    if not has_handler:
        return None

    return TryBlock(
        start=start,
        end=end,
        body_start=body_start,
        body_end=body_end,
        marker_lines=tuple(dict.fromkeys(markers)),
    )


def find_try_blocks(lines: list[LineFeatures], lookahead: int) -> list[TryBlock]:
    """All parseable try constructs on one side, outermost first."""
    blocks: list[TryBlock] = []
    for position, line in enumerate(lines):
        if not _TRY_START.match(line.stripped):
            continue
        block = parse_try_block(lines, position, lookahead)
        if block is not None:
            blocks.append(block)
    return blocks


# ============================================================
# Matching
# ============================================================


def _normalized_body(lines: list[LineFeatures], block: TryBlock) -> str:
    parts = []
    for position in block.body_positions():
        if lines[position].is_comment:
            continue
        text = _BLOCK_COMMENT.sub(" ", lines[position].text)
        parts.append(_LINE_COMMENT.sub("", text))
    return normalize_signature(" ".join(parts))


def positional_similarity(left: str, right: str) -> float:
    """Fraction of character positions holding the same character."""
    longest = max(len(left), len(right))
    if longest == 0:
        return 1.0
    same = sum(1 for a, b in zip(left, right) if a == b)
    return same / longest


def _is_candidate(
    block: TryBlock,
    lines: list[LineFeatures],
    other_index: LineIndex,
    claimed: set[int],
) -> bool:
    """A wrapper that exists on this side only and is still unclaimed."""
    if any(lines[marker].signature in other_index for marker in block.marker_lines):
        return False
    return not any(position in claimed for position in block.positions())


def _longest_body_run(
    body: list[LineFeatures],
    other: list[LineFeatures],
    other_index: LineIndex,
    other_claimed: set[int],
) -> tuple[int, int] | None:
    """Longest unclaimed run on the other side repeating body lines.

    Returns:
        Inclusive (start, end) on the other side, or None
    """
    best: tuple[int, int] | None = None
    for offset, line in enumerate(body):
        if line.is_blank:
            continue
        for start in occurrences(other_index, line.signature):
            length = 0
            while (
                offset + length < len(body)
                and start + length < len(other)
                and start + length not in other_claimed
                and body[offset + length].signature == other[start + length].signature
            ):
                length += 1
            if length and (best is None or length > best[1] - best[0] + 1):
                best = (start, start + length - 1)
    return best


def _drop_nested(blocks: list[TryBlock]) -> list[TryBlock]:
    """Keep outermost candidates; nested wrappers are part of them."""
    kept: list[TryBlock] = []
    for block in blocks:
        if kept and block.start <= kept[-1].end:
            continue
        kept.append(block)
    return kept


def detect_try_catch_changes(
    comparison: Comparison,
    settings: AnalyzerSettings,
) -> list[TryCatchAdded | TryCatchDeleted | TryCatchReplaced]:
    """Find and claim added, deleted and replaced try/catch wrappers."""
    claims: ClaimTracker = comparison.claims
    lookahead = settings.try_catch_lookahead

    deleted = _drop_nested([
        block
        for block in find_try_blocks(comparison.source, lookahead)
        if _is_candidate(block, comparison.source, comparison.changed_index, claims.source)
    ])
    added = _drop_nested([
        block
        for block in find_try_blocks(comparison.changed, lookahead)
        if _is_candidate(block, comparison.changed, comparison.source_index, claims.changed)
    ])

    changes: list[TryCatchAdded | TryCatchDeleted | TryCatchReplaced] = []

    # Replaced: best body similarity first
    bodies_deleted = {b.start: _normalized_body(comparison.source, b) for b in deleted}
    bodies_added = {b.start: _normalized_body(comparison.changed, b) for b in added}
    scored = []
    for d_order, d_block in enumerate(deleted):
        for a_order, a_block in enumerate(added):
            similarity = positional_similarity(
                bodies_deleted[d_block.start], bodies_added[a_block.start]
            )
            if similarity >= settings.try_catch_min_similarity:
                scored.append((-similarity, d_order, a_order, similarity))
    scored.sort()

    paired_deleted: set[int] = set()
    paired_added: set[int] = set()
    for _, d_order, a_order, similarity in scored:
        if d_order in paired_deleted or a_order in paired_added:
            continue
        d_block = deleted[d_order]
        a_block = added[a_order]
        change = TryCatchReplaced(
            deleted_wrapper=deletion_block(comparison.source, d_block.start, d_block.end),
            added_wrapper=addition_block(comparison.changed, a_block.start, a_block.end),
            body_similarity=similarity,
        )
        claims.claim_change(change)
        changes.append(change)
        paired_deleted.add(d_order)
        paired_added.add(a_order)

    for a_order, a_block in enumerate(added):
        if a_order in paired_added:
            continue
        body = comparison.changed[a_block.body_start : a_block.body_end + 1]
        run = _longest_body_run(body, comparison.source, comparison.source_index, claims.source)
        change = TryCatchAdded(
            wrapper=addition_block(comparison.changed, a_block.start, a_block.end),
            original_body=deletion_block(comparison.source, *run) if run else None,
        )
        claims.claim_change(change)
        changes.append(change)

    for d_order, d_block in enumerate(deleted):
        if d_order in paired_deleted:
            continue
        if claims.any_source_claimed(d_block.positions()):
            continue
        body = comparison.source[d_block.body_start : d_block.body_end + 1]
        run = _longest_body_run(body, comparison.changed, comparison.changed_index, claims.changed)
        change = TryCatchDeleted(
            wrapper=deletion_block(comparison.source, d_block.start, d_block.end),
            remaining_body=addition_block(comparison.changed, *run) if run else None,
        )
        claims.claim_change(change)
        changes.append(change)

    return changes
