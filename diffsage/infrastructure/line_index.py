"""Signature index over one side of a comparison."""

from __future__ import annotations

from diffsage.infrastructure.line_features import LineFeatures

LineIndex = dict[str, list[int]]


def build_line_index(features: list[LineFeatures]) -> LineIndex:
    """Build a lookup of line positions keyed by normalized signature.

    Blank lines are excluded since they match too broadly. Positions are
    0-based and ascending within each entry.
    """
    index: LineIndex = {}
    for position, line in enumerate(features):
        if line.is_blank:
            continue
        index.setdefault(line.signature, []).append(position)
    return index


def occurrences(index: LineIndex, signature: str) -> list[int]:
    """Positions of ``signature`` in the index; empty when absent."""
    return index.get(signature, [])
