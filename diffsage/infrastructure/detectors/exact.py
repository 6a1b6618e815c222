"""Pure deletion and addition candidates.

A line is a pure deletion when its signature never occurs on the changed
side, and a pure addition when its signature never occurs on the source
side. Candidates are not claimed here; later phases claim them when they
record a change covering them.
"""

from __future__ import annotations

from diffsage.infrastructure.comparison import Comparison


def find_pure_deletions(comparison: Comparison) -> list[int]:
    """Unclaimed, non-blank source positions absent from the changed side."""
    claims = comparison.claims
    return [
        position
        for position, line in enumerate(comparison.source)
        if not line.is_blank
        and not claims.is_source_claimed(position)
        and not comparison.in_changed(line.signature)
    ]


def find_pure_additions(comparison: Comparison) -> list[int]:
    """Unclaimed, non-blank changed positions absent from the source side."""
    claims = comparison.claims
    return [
        position
        for position, line in enumerate(comparison.changed)
        if not line.is_blank
        and not claims.is_changed_claimed(position)
        and not comparison.in_source(line.signature)
    ]
