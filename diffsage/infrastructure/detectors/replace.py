"""Replacement pairing.

Pairs leftover deletion blocks with addition blocks that sit in the same
surroundings, judged by how well the lines just before and just after each
block agree.
"""

from __future__ import annotations

from dataclasses import dataclass

from diffsage.domain.changes import AdditionBlock, DeletionBlock, ReplaceBlock
from diffsage.domain.settings import AnalyzerSettings
from diffsage.infrastructure.line_features import LineFeatures


def _window_before(lines: list[LineFeatures], start: int, radius: int) -> list[str]:
    """Signatures above 0-based ``start``, nearest first."""
    return [lines[p].signature for p in range(start - 1, max(start - radius, 0) - 1, -1)]


def _window_after(lines: list[LineFeatures], end: int, radius: int) -> list[str]:
    """Signatures below 0-based ``end``, nearest first."""
    return [lines[p].signature for p in range(end + 1, min(end + radius, len(lines) - 1) + 1)]


def _window_match(left: list[str], right: list[str]) -> float:
    longest = max(len(left), len(right))
    if longest == 0:
        return 1.0
    same = sum(1 for a, b in zip(left, right) if a == b)
    return same / longest


def context_score(
    source: list[LineFeatures],
    changed: list[LineFeatures],
    deleted: DeletionBlock,
    added: AdditionBlock,
    radius: int,
) -> float:
    """Average of the before-window and after-window match fractions."""
    before = _window_match(
        _window_before(source, deleted.start - 1, radius),
        _window_before(changed, added.start - 1, radius),
    )
    after = _window_match(
        _window_after(source, deleted.end - 1, radius),
        _window_after(changed, added.end - 1, radius),
    )
    return (before + after) / 2


def is_position_aligned(deleted: DeletionBlock, added: AdditionBlock) -> bool:
    """Single lines at the same line number, left for the position sweep."""
    return deleted.size == 1 and added.size == 1 and deleted.start == added.start


@dataclass
class ReplacementResult:
    """Outcome of pairing leftover blocks."""

    replacements: list[ReplaceBlock]
    deletions: list[DeletionBlock]
    additions: list[AdditionBlock]
    aligned: list[tuple[DeletionBlock, AdditionBlock]]


def pair_replacement_blocks(
    deletions: list[DeletionBlock],
    additions: list[AdditionBlock],
    source: list[LineFeatures],
    changed: list[LineFeatures],
    settings: AnalyzerSettings,
) -> ReplacementResult:
    """Pair each deletion block with its best-scoring addition block.

    Greedy in deletion order; the first candidate wins a tie. Position-aligned
    single lines are set aside untouched.
    """
    aligned: list[tuple[DeletionBlock, AdditionBlock]] = []
    additions_by_start = {block.start: block for block in additions if block.size == 1}
    remaining_deletions: list[DeletionBlock] = []
    set_aside: set[int] = set()
    for deleted in deletions:
        partner = additions_by_start.get(deleted.start)
        if partner is not None and is_position_aligned(deleted, partner):
            aligned.append((deleted, partner))
            set_aside.add(partner.start)
        else:
            remaining_deletions.append(deleted)
    remaining_additions = [
        block for block in additions if not (block.size == 1 and block.start in set_aside)
    ]

    replacements: list[ReplaceBlock] = []
    unpaired_deletions: list[DeletionBlock] = []
    for deleted in remaining_deletions:
        best: AdditionBlock | None = None
        best_score = -1.0
        for added in remaining_additions:
            ratio = max(deleted.size, added.size) / min(deleted.size, added.size)
            if ratio > settings.replace_max_size_ratio:
                continue
            if abs(deleted.start - added.start) > settings.replace_max_distance:
                continue
            score = context_score(source, changed, deleted, added, settings.replace_context_radius)
            if score < settings.replace_min_context_score:
                continue
            if score > best_score:
                best, best_score = added, score

        if best is None:
            unpaired_deletions.append(deleted)
            continue
        replacements.append(ReplaceBlock(deleted_block=deleted, added_block=best, match_score=best_score))
        remaining_additions.remove(best)

    return ReplacementResult(
        replacements=replacements,
        deletions=unpaired_deletions,
        additions=remaining_additions,
        aligned=aligned,
    )
