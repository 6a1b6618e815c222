"""Diff analyzer service.

Classifies the differences between two texts into change categories. The
analysis runs as a fixed sequence of phases over one ``Comparison``; each
phase only sees lines the earlier phases left unclaimed:

    INDEX -> MOVES -> TRY_CATCH -> EXACT -> LINE_PAIRING -> BLOCK_MERGE
          -> REPLACE -> SWEEP -> COMMENT_MERGE

No phase raises for unusual input: a detector that finds nothing simply
contributes nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from diffsage.domain.categories import ChangeCategory
from diffsage.domain.changes import CategorizedChanges, Change
from diffsage.domain.settings import AnalyzerSettings
from diffsage.infrastructure.comparison import Comparison
from diffsage.infrastructure.detectors import (
    LINE_DETECTORS,
    LineRule,
    addition_block,
    build_other_change,
    classify_line_pair,
    deletion_block,
    detect_moved_blocks,
    detect_try_catch_changes,
    find_pure_additions,
    find_pure_deletions,
    merge_comment_changes,
    merge_into_blocks,
    pair_replacement_blocks,
)
from diffsage.infrastructure.line_features import LineFeatureExtractor

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class AnalysisPhase(Enum):
    """Phases of one analysis, in execution order."""

    INDEX = "index"
    MOVES = "moves"
    TRY_CATCH = "try_catch"
    EXACT = "exact"
    LINE_PAIRING = "line_pairing"
    BLOCK_MERGE = "block_merge"
    REPLACE = "replace"
    SWEEP = "sweep"
    COMMENT_MERGE = "comment_merge"


def split_lines(text: str) -> list[str]:
    """Split on any line terminator; a trailing empty segment is dropped."""
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


@dataclass
class _AnalysisState:
    """Working state handed from phase to phase."""

    source_lines: list[str]
    changed_lines: list[str]
    comparison: Comparison | None = None
    result: CategorizedChanges = field(default_factory=CategorizedChanges)
    deletions: list[int] = field(default_factory=list)
    additions: list[int] = field(default_factory=list)
    deletion_ranges: list[tuple[int, int]] = field(default_factory=list)
    addition_ranges: list[tuple[int, int]] = field(default_factory=list)

    def record(self, change: Change) -> None:
        self.comparison.claims.claim_change(change)
        self.result.add(change)


class DiffAnalyzer:
    """Runs the classification phases over a pair of texts.

    The analyzer owns a feature extractor whose cache survives between
    calls; call ``clear_cache()`` when processing many unrelated file pairs.
    """

    def __init__(
        self,
        settings: AnalyzerSettings | None = None,
        extractor: LineFeatureExtractor | None = None,
        rules: tuple[LineRule, ...] = LINE_DETECTORS,
    ):
        """Initialize with dependencies.

        Args:
            settings: Thresholds and caps (defaults when None)
            extractor: Feature extractor to share (a new one when None)
            rules: Ordered single-line rules
        """
        self.settings = settings or AnalyzerSettings()
        self.extractor = extractor or LineFeatureExtractor(self.settings.feature_cache_size)
        self.rules = rules
        self._phases = {
            AnalysisPhase.INDEX: self._build_index,
            AnalysisPhase.MOVES: self._detect_moves,
            AnalysisPhase.TRY_CATCH: self._detect_try_catch,
            AnalysisPhase.EXACT: self._find_exact,
            AnalysisPhase.LINE_PAIRING: self._pair_lines,
            AnalysisPhase.BLOCK_MERGE: self._merge_blocks,
            AnalysisPhase.REPLACE: self._pair_replacements,
            AnalysisPhase.SWEEP: self._sweep,
            AnalysisPhase.COMMENT_MERGE: self._merge_comments,
        }

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def analyze(self, source_text: str, changed_text: str) -> CategorizedChanges:
        """Classify the changes between two texts."""
        return self.analyze_lines(split_lines(source_text), split_lines(changed_text))

    def analyze_lines(self, source_lines: list[str], changed_lines: list[str]) -> CategorizedChanges:
        """Classify the changes between two pre-split line sequences."""
        state = _AnalysisState(source_lines=list(source_lines), changed_lines=list(changed_lines))
        for phase in AnalysisPhase:
            self._phases[phase](state)
        return self._ordered(state.result)

    def clear_cache(self) -> None:
        self.extractor.clear()

    # --------------------------------------------------------
    # Phases
    # --------------------------------------------------------

    def _build_index(self, state: _AnalysisState) -> None:
        state.comparison = Comparison.build(state.source_lines, state.changed_lines, self.extractor)

    def _detect_moves(self, state: _AnalysisState) -> None:
        state.result.extend(detect_moved_blocks(state.comparison, self.settings))

    def _detect_try_catch(self, state: _AnalysisState) -> None:
        state.result.extend(detect_try_catch_changes(state.comparison, self.settings))

    def _find_exact(self, state: _AnalysisState) -> None:
        state.deletions = find_pure_deletions(state.comparison)
        state.additions = find_pure_additions(state.comparison)

    def _pair_lines(self, state: _AnalysisState) -> None:
        """Try each deletion against the nearest unpaired additions."""
        comparison = state.comparison
        remaining = list(state.additions)
        unpaired: list[int] = []

        for deleted in state.deletions:
            candidates = sorted(remaining, key=lambda added: (abs(added - deleted), added))
            for added in candidates[: self.settings.pairing_candidate_limit]:
                change = classify_line_pair(
                    comparison.source[deleted],
                    comparison.changed[added],
                    deleted + 1,
                    added + 1,
                    self.rules,
                )
                if change is not None:
                    state.record(change)
                    remaining.remove(added)
                    break
            else:
                unpaired.append(deleted)

        state.deletions = unpaired
        state.additions = remaining

    def _merge_blocks(self, state: _AnalysisState) -> None:
        comparison = state.comparison
        claims = comparison.claims
        state.deletion_ranges = merge_into_blocks(
            state.deletions, comparison.source, claims.is_source_claimed, self.settings.merge_gap
        )
        state.addition_ranges = merge_into_blocks(
            state.additions, comparison.changed, claims.is_changed_claimed, self.settings.merge_gap
        )

    def _pair_replacements(self, state: _AnalysisState) -> None:
        """Record replacements and the remaining pure blocks.

        Position-aligned single lines stay unclaimed for the sweep.
        """
        comparison = state.comparison
        outcome = pair_replacement_blocks(
            [deletion_block(comparison.source, s, e) for s, e in state.deletion_ranges],
            [addition_block(comparison.changed, s, e) for s, e in state.addition_ranges],
            comparison.source,
            comparison.changed,
            self.settings,
        )
        for change in outcome.replacements + outcome.deletions + outcome.additions:
            state.record(change)

    def _sweep(self, state: _AnalysisState) -> None:
        """Classify position-aligned pairs no earlier phase covered."""
        comparison = state.comparison
        claims = comparison.claims
        for position in range(min(len(comparison.source), len(comparison.changed))):
            if claims.is_source_claimed(position) or claims.is_changed_claimed(position):
                continue
            source = comparison.source[position]
            changed = comparison.changed[position]
            if source.signature == changed.signature:
                continue

            line = position + 1
            change = classify_line_pair(source, changed, line, line, self.rules)
            if change is None:
                change = build_other_change(source, changed, line, line)
            if change is not None:
                state.record(change)

    def _merge_comments(self, state: _AnalysisState) -> None:
        comparison = state.comparison
        claims = comparison.claims
        merged, source_gaps, changed_gaps = merge_comment_changes(
            state.result.get(ChangeCategory.UPDATE_COMMENT),
            comparison.source,
            comparison.changed,
            claims.is_source_claimed,
            claims.is_changed_claimed,
            self.settings.merge_gap,
        )
        claims.claim_source(source_gaps)
        claims.claim_changed(changed_gaps)
        state.result.replace(ChangeCategory.UPDATE_COMMENT, merged)

    # --------------------------------------------------------
    # Helpers
    # --------------------------------------------------------

    @staticmethod
    def _ordered(result: CategorizedChanges) -> CategorizedChanges:
        """Line-number ascending order within each category."""

        def key(change: Change) -> tuple[int, int]:
            location = change.locate()
            first = location.source_line or location.changed_line or 0
            return (first, location.changed_line or 0)

        for category in ChangeCategory:
            result.replace(category, sorted(result.get(category), key=key))
        return result


def analyze(
    source_text: str,
    changed_text: str,
    settings: AnalyzerSettings | None = None,
) -> CategorizedChanges:
    """Classify the changes between two texts with a fresh analyzer."""
    return DiffAnalyzer(settings).analyze(source_text, changed_text)
