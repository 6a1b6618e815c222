"""Adjacent-block merging.

Groups single-line candidates into contiguous blocks, tolerating gaps made
only of blank or comment lines (the gap lines join the block).
"""

from __future__ import annotations

from collections.abc import Callable

from diffsage.domain.changes import AdditionBlock, CommentChange, DeletionBlock
from diffsage.infrastructure.line_features import LineFeatures

DEFAULT_MERGE_GAP = 10


def gap_is_mergeable(
    lines: list[LineFeatures],
    first: int,
    last: int,
    is_claimed: Callable[[int], bool],
    max_gap: int = DEFAULT_MERGE_GAP,
) -> bool:
    """Whether the inclusive 0-based gap ``first..last`` may be absorbed.

    An empty gap always merges. Otherwise it must be at most ``max_gap``
    lines, each blank or a comment and unclaimed.
    """
    size = last - first + 1
    if size <= 0:
        return True
    if size > max_gap:
        return False
    return all(
        (lines[p].is_blank or lines[p].is_comment) and not is_claimed(p)
        for p in range(first, last + 1)
    )


def merge_into_blocks(
    positions: list[int],
    lines: list[LineFeatures],
    is_claimed: Callable[[int], bool],
    max_gap: int = DEFAULT_MERGE_GAP,
) -> list[tuple[int, int]]:
    """Group 0-based positions into inclusive (start, end) ranges.

    Returns:
        Ranges in ascending order.
    """
    ranges: list[tuple[int, int]] = []
    for position in sorted(positions):
        if ranges:
            start, end = ranges[-1]
            if gap_is_mergeable(lines, end + 1, position - 1, is_claimed, max_gap):
                ranges[-1] = (start, position)
                continue
        ranges.append((position, position))
    return ranges


def _block_fields(lines: list[LineFeatures], start: int, end: int) -> dict:
    covered = lines[start : end + 1]
    return {
        "start": start + 1,
        "end": end + 1,
        "lines": tuple(line.text for line in covered),
        "substantive_count": sum(1 for line in covered if line.is_substantive),
    }


def deletion_block(lines: list[LineFeatures], start: int, end: int) -> DeletionBlock:
    """Deletion block for an inclusive 0-based source range."""
    return DeletionBlock(**_block_fields(lines, start, end))


def addition_block(lines: list[LineFeatures], start: int, end: int) -> AdditionBlock:
    """Addition block for an inclusive 0-based changed range."""
    return AdditionBlock(**_block_fields(lines, start, end))


def merge_comment_changes(
    changes: list[CommentChange],
    source: list[LineFeatures],
    changed: list[LineFeatures],
    is_source_claimed: Callable[[int], bool],
    is_changed_claimed: Callable[[int], bool],
    max_gap: int = DEFAULT_MERGE_GAP,
) -> tuple[list[CommentChange], list[int], list[int]]:
    """Merge comment changes that sit next to each other on both sides.

    Returns:
        (merged changes in source order, absorbed source gap positions,
        absorbed changed gap positions), positions 0-based
    """
    merged: list[CommentChange] = []
    source_gaps: list[int] = []
    changed_gaps: list[int] = []

    for change in sorted(changes, key=lambda c: (c.source_line, c.changed_line)):
        if merged:
            previous = merged[-1]
            # 1-based ends/starts -> 0-based gap bounds
            source_first, source_last = previous.source_end, change.source_line - 2
            changed_first, changed_last = previous.changed_end, change.changed_line - 2
            if (
                change.changed_line > previous.changed_end
                and gap_is_mergeable(source, source_first, source_last, is_source_claimed, max_gap)
                and gap_is_mergeable(changed, changed_first, changed_last, is_changed_claimed, max_gap)
            ):
                source_gaps.extend(range(source_first, source_last + 1))
                changed_gaps.extend(range(changed_first, changed_last + 1))
                merged[-1] = _combine(previous, change, source, changed)
                continue
        merged.append(change)

    return merged, source_gaps, changed_gaps


def _combine(
    first: CommentChange,
    second: CommentChange,
    source: list[LineFeatures],
    changed: list[LineFeatures],
) -> CommentChange:
    source_lines = tuple(line.text for line in source[first.source_line - 1 : second.source_end])
    changed_lines = tuple(
        line.text for line in changed[first.changed_line - 1 : second.changed_end]
    )
    return CommentChange(
        source_line=first.source_line,
        changed_line=first.changed_line,
        source_text="\n".join(source_lines),
        changed_text="\n".join(changed_lines),
        source_end=second.source_end,
        changed_end=second.changed_end,
        source_lines=source_lines,
        changed_lines=changed_lines,
    )
