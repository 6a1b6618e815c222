"""Claim tracking across analysis phases.

Every line position is attributed to at most one change. Phases consult the
tracker before matching and claim positions when they record a change.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diffsage.domain.changes import Change


class ClaimConflictError(Exception):
    """Raised when a position is claimed twice.

    This signals a bug in a detector, never a property of the input.
    """

    pass


class ClaimTracker:
    """Claimed 0-based positions on the source and changed side."""

    def __init__(self):
        self.source: set[int] = set()
        self.changed: set[int] = set()

    def is_source_claimed(self, position: int) -> bool:
        return position in self.source

    def is_changed_claimed(self, position: int) -> bool:
        return position in self.changed

    def any_source_claimed(self, positions: Iterable[int]) -> bool:
        return any(p in self.source for p in positions)

    def any_changed_claimed(self, positions: Iterable[int]) -> bool:
        return any(p in self.changed for p in positions)

    def claim_source(self, positions: Iterable[int]) -> None:
        self._claim(self.source, positions, "source")

    def claim_changed(self, positions: Iterable[int]) -> None:
        self._claim(self.changed, positions, "changed")

    def claim_pair(self, source_position: int, changed_position: int) -> None:
        self.claim_source([source_position])
        self.claim_changed([changed_position])

    def claim_change(self, change: Change) -> None:
        """Claim every position a recorded change covers."""
        self.claim_source(change.source_positions())
        self.claim_changed(change.changed_positions())

    @staticmethod
    def _claim(claimed: set[int], positions: Iterable[int], side: str) -> None:
        positions = set(positions)
        conflicts = positions & claimed
        if conflicts:
            raise ClaimConflictError(
                f"{side} position(s) already claimed: {sorted(conflicts)}"
            )
        claimed.update(positions)
