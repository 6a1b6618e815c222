"""Tests for the DiffAnalyzer service.

Tests cover:
- End-to-end classification of a realistic edit
- Identical inputs, empty inputs and idempotence
- Each line rule reached through pairing or the position sweep
- Comment block merging across blank gaps
- Try/catch, move, replace and pure block phases
- Disjoint line coverage across all reported changes
- Settings, custom rules and the feature cache
- split_lines and result ordering
"""

from __future__ import annotations

import unittest

from diffsage import analyze
from diffsage.domain.categories import ChangeCategory
from diffsage.domain.changes import CategorizedChanges, TryCatchAdded
from diffsage.domain.settings import AnalyzerSettings
from diffsage.services.diff_analyzer import AnalysisPhase, DiffAnalyzer, split_lines


def lines_to_text(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"


def non_empty(result: CategorizedChanges) -> dict[str, int]:
    return {category.value: count for category, count in result.counts().items() if count}


SOURCE_JS = [
    "import { a } from './lib';",
    "// Compute the total",
    "function total(items, tax) {",
    "  const rate = 0.2;",
    "  if (items.length > 0) {",
    "    return items.reduce(sum) * rate;",
    "  }",
    "  return 0;",
    "}",
    "console.log('done');",
]

CHANGED_JS = [
    "import { a, b } from './lib';",
    "// Compute the grand total",
    "function total(items, tax, discount) {",
    "  const rate = 0.25;",
    "  if (items.length >= 0) {",
    "    return items.reduce(sum) * rate;",
    "  }",
    "  return 0;",
    "}",
]


class TestAnalyzeEndToEnd(unittest.TestCase):
    """End-to-end tests through analyze()."""

    def assert_disjoint(self, result: CategorizedChanges):
        """Every line position is covered by at most one change per side."""
        seen_source: set[int] = set()
        seen_changed: set[int] = set()
        for change in result.all_changes():
            source = change.source_positions()
            changed = change.changed_positions()
            self.assertFalse(seen_source & source, f"source overlap in {change}")
            self.assertFalse(seen_changed & changed, f"changed overlap in {change}")
            seen_source |= source
            seen_changed |= changed

    def test_realistic_edit(self):
        """Test that each edited line lands in its own category."""
        result = analyze(lines_to_text(SOURCE_JS), lines_to_text(CHANGED_JS))

        self.assertEqual(
            non_empty(result),
            {
                "updateImport": 1,
                "updateComment": 1,
                "updateFunctionParams": 1,
                "updateLiteral": 1,
                "updateCondition": 1,
                "deleteCode": 1,
            },
        )
        deletion = result.get(ChangeCategory.DELETE_CODE)[0]
        self.assertEqual((deletion.start, deletion.end), (10, 10))
        literal = result.get(ChangeCategory.UPDATE_LITERAL)[0]
        self.assertEqual((literal.source_value, literal.changed_value), ("0.2", "0.25"))
        self.assert_disjoint(result)

    def test_disjoint_coverage(self):
        """Test that no line is covered twice across varied edits."""
        abc = [f"const {n} = 1;" for n in "abc"]
        pqr = [f"const {n} = 1;" for n in "pqr"]
        run = ["function run() {", "  doWork();", "}"]
        wrapped = [
            "function run() {",
            "  try {",
            "    doWork();",
            "  } catch (e) {",
            "    log(e);",
            "  }",
            "}",
        ]
        cases = {
            "moves_and_try_catch": (abc + pqr + run, pqr + abc + wrapped),
            "comment_gaps": (
                ["// old one", "", "", "// old two", "code();", "// old three"],
                ["// new one", "", "", "// new two", "code();", "// new three"],
            ),
            "replacement_beside_aligned_lines": (
                ["header();", "x = 5;", "oldA();", "oldB();", "y = 1;", "footer();"],
                ["header();", "x = 6;", "newX();", "newY();", "newZ();", "y = 2;", "footer();"],
            ),
            "shift_and_swap": (
                abc + ["const x = 9;", "a();", "b();"],
                ["const x = 9;"] + abc + ["b();", "a();"],
            ),
            "one_sided": ([], abc),
            "realistic": (SOURCE_JS, CHANGED_JS),
        }
        for name, (source, changed) in cases.items():
            with self.subTest(case=name):
                result = analyze(lines_to_text(source), lines_to_text(changed))
                self.assertFalse(result.is_empty)
                self.assert_disjoint(result)

    def test_import_path_change_is_other(self):
        """Test that a changed module path falls through to other."""
        source = ["import a from 'x';", "let y = 1;", "foo();"]
        changed = ["import a from 'z';", "let y = 2;", "foo();"]

        result = analyze(lines_to_text(source), lines_to_text(changed))

        self.assertEqual(non_empty(result), {"updateLiteral": 1, "other": 1})
        other = result.get(ChangeCategory.OTHER)[0]
        self.assertEqual(other.source_line, 1)
        self.assertEqual(result.get(ChangeCategory.UPDATE_LITERAL)[0].source_line, 2)

    def test_identical_texts(self):
        """Test that identical texts produce an empty result."""
        text = lines_to_text(SOURCE_JS)
        result = analyze(text, text)
        self.assertTrue(result.is_empty)
        self.assertEqual(set(result.to_dict()), {c.value for c in ChangeCategory})

    def test_repeated_blocks_identical(self):
        """Test that repeated identical blocks are not mistaken for moves."""
        block = ["const a = 1;", "const b = 2;", "const c = 3;"]
        text = lines_to_text(block + ["", "x();"] + block)
        self.assertTrue(analyze(text, text).is_empty)

    def test_idempotent(self):
        """Test that analyzing twice with one analyzer gives the same result."""
        analyzer = DiffAnalyzer()
        first = analyzer.analyze(lines_to_text(SOURCE_JS), lines_to_text(CHANGED_JS))
        second = analyzer.analyze(lines_to_text(SOURCE_JS), lines_to_text(CHANGED_JS))
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_empty_inputs(self):
        """Test empty and one-sided inputs."""
        self.assertTrue(analyze("", "").is_empty)

        added = analyze("", "x();\ny();\n")
        self.assertEqual(non_empty(added), {"addCode": 1})
        self.assertEqual(added.get(ChangeCategory.ADD_CODE)[0].lines, ("x();", "y();"))

        deleted = analyze("x();\n", "")
        self.assertEqual(non_empty(deleted), {"deleteCode": 1})


class TestLineClassification(unittest.TestCase):
    """Tests for single-line changes through the full pipeline."""

    def test_rename(self):
        """Test that a renamed assignment target is a rename."""
        result = analyze("x = 5;\n", "y = 5;\n")
        self.assertEqual(non_empty(result), {"renameVariable": 1})

    def test_literal(self):
        """Test that a new value is a literal update."""
        result = analyze("x = 5;\n", "x = 6;\n")
        self.assertEqual(non_empty(result), {"updateLiteral": 1})

    def test_unrecognized_aligned_pair(self):
        """Test that an unrecognized edit at the same line is other."""
        result = analyze("x = 5;\n", "y = 6;\n")
        self.assertEqual(non_empty(result), {"other": 1})
        change = result.get(ChangeCategory.OTHER)[0]
        self.assertEqual((change.source_text, change.changed_text), ("x = 5;", "y = 6;"))

    def test_pairing_across_offset(self):
        """Test that pairing finds a partner at a different line number."""
        source = ["a();", "let limit = 10;", "b();"]
        changed = ["a();", "extra();", "let limit = 20;", "b();"]
        result = analyze(lines_to_text(source), lines_to_text(changed))
        literal = result.get(ChangeCategory.UPDATE_LITERAL)[0]
        self.assertEqual((literal.source_line, literal.changed_line), (2, 3))
        self.assertEqual(non_empty(result), {"updateLiteral": 1, "addCode": 1})

    def test_custom_rules(self):
        """Test that an analyzer without rules reports other changes only."""
        result = DiffAnalyzer(rules=()).analyze("x = 5;\n", "x = 6;\n")
        self.assertEqual(non_empty(result), {"other": 1})


class TestCommentMerging(unittest.TestCase):
    """Tests for comment block merging."""

    def test_merge_across_blank_line(self):
        """Test that nearby comment edits become one block change."""
        source = ["// old one", "", "// old two", "code();"]
        changed = ["// new one", "", "// new two", "code();"]

        result = analyze(lines_to_text(source), lines_to_text(changed))

        comments = result.get(ChangeCategory.UPDATE_COMMENT)
        self.assertEqual(len(comments), 1)
        self.assertEqual((comments[0].source_line, comments[0].source_end), (1, 3))
        self.assertEqual(len(comments[0].source_lines), 3)
        self.assertEqual(non_empty(result), {"updateComment": 1})

    def test_gap_limit(self):
        """Test that a gap of merge_gap blank lines merges and one more does not."""
        def comments_for(gap: int) -> int:
            source = ["// old one"] + [""] * gap + ["// old two"]
            changed = ["// new one"] + [""] * gap + ["// new two"]
            result = analyze(lines_to_text(source), lines_to_text(changed))
            return len(result.get(ChangeCategory.UPDATE_COMMENT))

        self.assertEqual(comments_for(10), 1)
        self.assertEqual(comments_for(11), 2)

    def test_configured_gap(self):
        """Test that merge_gap is taken from the settings."""
        source = ["// old one", "", "", "// old two"]
        changed = ["// new one", "", "", "// new two"]
        result = analyze(
            lines_to_text(source), lines_to_text(changed), AnalyzerSettings(merge_gap=1)
        )
        self.assertEqual(len(result.get(ChangeCategory.UPDATE_COMMENT)), 2)


class TestBlockPhases(unittest.TestCase):
    """Tests for try/catch, move, replace and pure block phases."""

    def test_try_catch_added(self):
        """Test that wrapping a call in try/catch is a single change."""
        source = ["function run() {", "  doWork();", "}"]
        changed = [
            "function run() {",
            "  try {",
            "    doWork();",
            "  } catch (e) {",
            "    log(e);",
            "  }",
            "}",
        ]

        result = analyze(lines_to_text(source), lines_to_text(changed))

        self.assertEqual(non_empty(result), {"updateTryCatch": 1})
        change = result.get(ChangeCategory.UPDATE_TRY_CATCH)[0]
        self.assertIsInstance(change, TryCatchAdded)
        self.assertEqual((change.wrapper.start, change.wrapper.end), (2, 6))

    def test_swapped_blocks(self):
        """Test that swapped blocks are reported as moves only."""
        abc = [f"const {n} = 1;" for n in "abc"]
        pqr = [f"const {n} = 1;" for n in "pqr"]

        result = analyze(lines_to_text(abc + pqr), lines_to_text(pqr + abc))

        self.assertEqual(non_empty(result), {"moveCodeBlock": 2})
        moves = result.get(ChangeCategory.MOVE_CODE_BLOCK)
        self.assertEqual([m.source_start for m in moves], [1, 4])

    def test_small_shift(self):
        """Test that a one-line block shift is left to the position sweep."""
        abc = [f"const {n} = 1;" for n in "abc"]
        x = ["const x = 9;"]
        source, changed = lines_to_text(abc + x), lines_to_text(x + abc)

        result = analyze(source, changed)

        self.assertEqual(non_empty(result), {"renameVariable": 2, "other": 2})
        others = result.get(ChangeCategory.OTHER)
        self.assertEqual([c.source_line for c in others], [1, 4])

        moved = analyze(source, changed, AnalyzerSettings(move_min_distance=0))
        self.assertEqual(non_empty(moved), {"moveCodeBlock": 1})

    def test_swapped_lines(self):
        """Test that two swapped lines are reported at their positions."""
        result = analyze("a();\nb();\n", "b();\na();\n")

        self.assertFalse(result.is_empty)
        self.assertEqual(non_empty(result), {"other": 2})
        first, second = result.get(ChangeCategory.OTHER)
        self.assertEqual((first.source_text, first.changed_text), ("a();", "b();"))
        self.assertEqual((second.source_line, second.changed_line), (2, 2))

    def test_edit_with_text_found_elsewhere(self):
        """Test that an aligned edit is reported even when both texts occur elsewhere."""
        source = ["start();", "stop();", "run();", "stop();"]
        changed = ["start();", "run();", "run();", "stop();"]

        result = analyze(lines_to_text(source), lines_to_text(changed))

        self.assertEqual(non_empty(result), {"other": 1})
        other = result.get(ChangeCategory.OTHER)[0]
        self.assertEqual((other.source_text, other.changed_text), ("stop();", "run();"))

    def test_replacement(self):
        """Test that a rewritten block between unchanged lines is a replacement."""
        source = ["header();", "setup();", "oldA();", "oldB();", "teardown();", "footer();"]
        changed = ["header();", "setup();", "newX();", "newY();", "teardown();", "footer();"]

        result = analyze(lines_to_text(source), lines_to_text(changed))

        self.assertEqual(non_empty(result), {"replaceCode": 1})
        replace = result.get(ChangeCategory.REPLACE_CODE)[0]
        self.assertEqual(replace.match_score, 1.0)
        self.assertEqual((replace.deleted_block.start, replace.deleted_block.end), (3, 4))
        self.assertEqual((replace.added_block.start, replace.added_block.end), (3, 4))

    def test_replacement_of_different_length(self):
        """Test that lines shifted by a longer replacement reach the sweep."""
        source = ["header();", "setup();", "oldA();", "oldB();", "teardown();", "footer();"]
        changed = [
            "header();",
            "setup();",
            "newX();",
            "newY();",
            "newZ();",
            "teardown();",
            "footer();",
        ]

        result = analyze(lines_to_text(source), lines_to_text(changed))

        self.assertEqual(non_empty(result), {"replaceCode": 1, "other": 1})
        replace = result.get(ChangeCategory.REPLACE_CODE)[0]
        self.assertEqual((replace.added_block.start, replace.added_block.end), (3, 5))
        other = result.get(ChangeCategory.OTHER)[0]
        self.assertEqual((other.source_text, other.changed_text), ("footer();", "teardown();"))

    def test_deletion_and_addition_blocks(self):
        """Test that unrelated removed and added code stay separate."""
        source = ["keep();", "gone1();", "gone2();", "stay();"]
        changed = ["keep();", "stay();", "fresh();"]

        result = analyze(lines_to_text(source), lines_to_text(changed))

        self.assertEqual(non_empty(result), {"deleteCode": 1, "addCode": 1})
        deletion = result.get(ChangeCategory.DELETE_CODE)[0]
        self.assertEqual(deletion.lines, ("gone1();", "gone2();"))
        addition = result.get(ChangeCategory.ADD_CODE)[0]
        self.assertEqual((addition.start, addition.end), (3, 3))


class TestDiffAnalyzer(unittest.TestCase):
    """Tests for DiffAnalyzer configuration and helpers."""

    def test_phase_order(self):
        """Test the fixed phase sequence."""
        self.assertEqual(
            [phase.value for phase in AnalysisPhase],
            [
                "index",
                "moves",
                "try_catch",
                "exact",
                "line_pairing",
                "block_merge",
                "replace",
                "sweep",
                "comment_merge",
            ],
        )

    def test_cache_survives_and_clears(self):
        """Test that the feature cache persists until cleared."""
        analyzer = DiffAnalyzer()
        analyzer.analyze("a();\nb();\n", "a();\nc();\n")
        self.assertEqual(analyzer.extractor.cache_size, 3)
        analyzer.clear_cache()
        self.assertEqual(analyzer.extractor.cache_size, 0)

    def test_cache_size_setting(self):
        """Test that feature_cache_size bounds the extractor."""
        analyzer = DiffAnalyzer(AnalyzerSettings(feature_cache_size=2))
        analyzer.analyze("a();\nb();\nc();\n", "d();\n")
        self.assertEqual(analyzer.extractor.cache_size, 2)

    def test_analyze_lines(self):
        """Test analysis of pre-split lines."""
        result = DiffAnalyzer().analyze_lines(["x = 5;"], ["x = 6;"])
        self.assertEqual(non_empty(result), {"updateLiteral": 1})

    def test_results_sorted_by_line(self):
        """Test that changes within a category are in line order."""
        source = ["a = 1;", "keep();", "b = 1;", "keep2();", "c = 1;"]
        changed = ["a = 2;", "keep();", "b = 2;", "keep2();", "c = 2;"]
        result = analyze(lines_to_text(source), lines_to_text(changed))
        literals = result.get(ChangeCategory.UPDATE_LITERAL)
        self.assertEqual([c.source_line for c in literals], [1, 3, 5])


class TestSplitLines(unittest.TestCase):
    """Tests for split_lines."""

    def test_mixed_terminators(self):
        self.assertEqual(split_lines("a\r\nb\rc\n"), ["a", "b", "c"])

    def test_trailing_segment(self):
        self.assertEqual(split_lines("a\n\n"), ["a", ""])
        self.assertEqual(split_lines("a"), ["a"])
        self.assertEqual(split_lines(""), [])


if __name__ == "__main__":
    unittest.main()
