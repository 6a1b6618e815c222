"""Tests for ChangeCategory and TextSource enums.

Tests cover:
- Category keys and display titles
- Case-insensitive parsing from string
- Invalid value handling
"""

import unittest

from diffsage.domain.categories import ChangeCategory
from diffsage.domain.text_source import TextSource


class TestChangeCategory(unittest.TestCase):
    """Tests for ChangeCategory enum."""

    def test_has_twelve_categories(self):
        """Test that every category key is present."""
        self.assertEqual(
            [c.value for c in ChangeCategory],
            [
                "moveCodeBlock",
                "updateTryCatch",
                "updateImport",
                "updateComment",
                "updateFunctionParams",
                "updateLiteral",
                "updateCondition",
                "renameVariable",
                "deleteCode",
                "addCode",
                "replaceCode",
                "other",
            ],
        )

    def test_every_category_has_title(self):
        """Test that each category has a non-empty title."""
        for category in ChangeCategory:
            self.assertTrue(category.title)
        self.assertEqual(ChangeCategory.UPDATE_TRY_CATCH.title, "Update Try-Catch")

    def test_from_string_is_case_insensitive(self):
        """Test that from_string accepts any casing of the key."""
        self.assertEqual(ChangeCategory.from_string("moveCodeBlock"), ChangeCategory.MOVE_CODE_BLOCK)
        self.assertEqual(ChangeCategory.from_string("MOVECODEBLOCK"), ChangeCategory.MOVE_CODE_BLOCK)
        self.assertEqual(ChangeCategory.from_string("other"), ChangeCategory.OTHER)

    def test_from_string_raises_on_invalid_value(self):
        """Test that from_string raises ValueError listing valid keys."""
        with self.assertRaises(ValueError) as ctx:
            ChangeCategory.from_string("reorderStatements")

        self.assertIn("Invalid change category", str(ctx.exception))
        self.assertIn("moveCodeBlock", str(ctx.exception))


class TestTextSource(unittest.TestCase):
    """Tests for TextSource enum."""

    def test_from_string_parses_values(self):
        """Test that from_string parses each source."""
        self.assertEqual(TextSource.from_string("file"), TextSource.FILE)
        self.assertEqual(TextSource.from_string("GIT"), TextSource.GIT)
        self.assertEqual(TextSource.from_string("GitHub"), TextSource.GITHUB)

    def test_from_string_raises_on_invalid_value(self):
        """Test that from_string raises ValueError for unknown sources."""
        with self.assertRaises(ValueError) as ctx:
            TextSource.from_string("svn")

        self.assertIn("Invalid text source", str(ctx.exception))
        self.assertIn("svn", str(ctx.exception))

    def test_from_string_raises_on_empty_string(self):
        """Test that from_string raises ValueError for empty string."""
        with self.assertRaises(ValueError):
            TextSource.from_string("")


if __name__ == "__main__":
    unittest.main()
