"""Moved block detection.

Finds runs of identical lines that appear at a different place in the
changed text. Larger blocks are preferred; a block that also matches at
(or near) its own position is an in-place line and never a move.
"""

from __future__ import annotations

from diffsage.domain.changes import MoveBlock
from diffsage.domain.settings import AnalyzerSettings
from diffsage.infrastructure.comparison import Comparison
from diffsage.infrastructure.line_index import occurrences


def _block_matches(comparison: Comparison, i: int, j: int, size: int) -> bool:
    """Signatures agree at every offset and both ranges are in bounds."""
    if i + size > len(comparison.source) or j + size > len(comparison.changed):
        return False
    return all(
        comparison.source[i + k].signature == comparison.changed[j + k].signature
        for k in range(size)
    )


def _block_unclaimed(comparison: Comparison, i: int, j: int, size: int) -> bool:
    claims = comparison.claims
    return not (
        claims.any_source_claimed(range(i, i + size))
        or claims.any_changed_claimed(range(j, j + size))
    )


def _find_move_at(
    comparison: Comparison,
    i: int,
    candidates: list[int],
    settings: AnalyzerSettings,
) -> MoveBlock | None:
    """Largest qualifying move starting at source position ``i``."""
    max_size = min(settings.move_max_block, len(comparison.source) - i)

    for size in range(max_size, settings.move_min_substantive - 1, -1):
        block = comparison.source[i : i + size]
        substantive = sum(1 for line in block if line.is_substantive)
        if substantive < settings.move_min_substantive:
            continue

        # Smaller sizes would match in place too.
        if any(
            abs(i - j) <= settings.move_min_distance and _block_matches(comparison, i, j, size)
            for j in candidates
        ):
            return None

        for j in candidates:
            if abs(i - j) <= settings.move_min_distance:
                continue
            if not _block_matches(comparison, i, j, size):
                continue
            if not _block_unclaimed(comparison, i, j, size):
                continue
            return MoveBlock(
                source_start=i + 1,
                changed_start=j + 1,
                size=size,
                substantive_count=substantive,
                content="\n".join(line.text for line in block),
            )
    return None


def detect_moved_blocks(comparison: Comparison, settings: AnalyzerSettings) -> list[MoveBlock]:
    """Find and claim moved blocks, scanning the source top to bottom.

    Returns:
        Moves in source order.
    """
    moves: list[MoveBlock] = []
    i = 0
    while i < len(comparison.source):
        line = comparison.source[i]
        candidates = occurrences(comparison.changed_index, line.signature)
        if line.is_blank or not candidates or comparison.claims.is_source_claimed(i):
            i += 1
            continue

        move = _find_move_at(comparison, i, candidates, settings)
        if move is None:
            i += 1
            continue

        comparison.claims.claim_change(move)
        moves.append(move)
        i += move.size

    return moves
