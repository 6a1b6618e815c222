"""Tests for AnalyzerSettings.

Tests cover:
- Defaults
- from_dict validation (unknown keys, types, ranges)
- YAML loading with and without the analyzer section
- Malformed and missing files
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from diffsage.domain.settings import AnalyzerSettings, SettingsError


class TestAnalyzerSettingsDefaults(unittest.TestCase):
    """Tests for default values."""

    def test_defaults(self):
        """Test that defaults match the stock thresholds."""
        settings = AnalyzerSettings()
        self.assertEqual(settings.move_max_block, 20)
        self.assertEqual(settings.move_min_substantive, 3)
        self.assertEqual(settings.move_min_distance, 2)
        self.assertEqual(settings.try_catch_lookahead, 200)
        self.assertEqual(settings.try_catch_min_similarity, 0.5)
        self.assertEqual(settings.merge_gap, 10)
        self.assertEqual(settings.pairing_candidate_limit, 50)
        self.assertEqual(settings.replace_max_size_ratio, 7.0)
        self.assertEqual(settings.replace_max_distance, 100)
        self.assertEqual(settings.replace_context_radius, 5)
        self.assertEqual(settings.replace_min_context_score, 0.6)
        self.assertIsNone(settings.feature_cache_size)

    def test_to_dict_round_trips_through_from_dict(self):
        """Test that to_dict output is accepted by from_dict."""
        settings = AnalyzerSettings(merge_gap=4, feature_cache_size=100)
        self.assertEqual(AnalyzerSettings.from_dict(settings.to_dict()), settings)


class TestAnalyzerSettingsFromDict(unittest.TestCase):
    """Tests for from_dict validation."""

    def test_overrides_subset(self):
        """Test that only given keys change."""
        settings = AnalyzerSettings.from_dict({"merge_gap": 3, "move_min_distance": 0})
        self.assertEqual(settings.merge_gap, 3)
        self.assertEqual(settings.move_min_distance, 0)
        self.assertEqual(settings.move_max_block, 20)

    def test_int_accepted_for_float_setting(self):
        """Test that integers are coerced for float settings."""
        settings = AnalyzerSettings.from_dict({"replace_min_context_score": 1})
        self.assertEqual(settings.replace_min_context_score, 1.0)
        self.assertIsInstance(settings.replace_min_context_score, float)

    def test_unknown_key_raises(self):
        """Test that unknown keys are rejected."""
        with self.assertRaises(SettingsError) as ctx:
            AnalyzerSettings.from_dict({"merge_gapp": 3})
        self.assertIn("merge_gapp", str(ctx.exception))

    def test_wrong_type_raises(self):
        """Test that values of the wrong type are rejected."""
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_dict({"merge_gap": "ten"})
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_dict({"merge_gap": 2.5})

    def test_bool_rejected(self):
        """Test that booleans are not accepted as numbers."""
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_dict({"merge_gap": True})

    def test_out_of_range_raises(self):
        """Test that range checks apply."""
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_dict({"move_max_block": 0})
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_dict({"merge_gap": -1})
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_dict({"try_catch_min_similarity": 1.5})
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_dict({"move_min_substantive": 30})

    def test_non_mapping_raises(self):
        """Test that a list is rejected."""
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_dict(["merge_gap"])

    def test_settings_error_is_value_error(self):
        """Test that SettingsError can be caught as ValueError."""
        self.assertTrue(issubclass(SettingsError, ValueError))


class TestAnalyzerSettingsFromFile(unittest.TestCase):
    """Tests for YAML loading."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.path = Path(self.temp_dir.name) / "diffsage.yaml"

    def test_loads_analyzer_section(self):
        """Test that settings under analyzer: are read."""
        self.path.write_text("analyzer:\n  merge_gap: 3\n  replace_context_radius: 2\n")
        settings = AnalyzerSettings.from_file(self.path)
        self.assertEqual(settings.merge_gap, 3)
        self.assertEqual(settings.replace_context_radius, 2)

    def test_loads_top_level_keys(self):
        """Test that settings at top level are read."""
        self.path.write_text("pairing_candidate_limit: 5\n")
        settings = AnalyzerSettings.from_file(str(self.path))
        self.assertEqual(settings.pairing_candidate_limit, 5)

    def test_empty_file_gives_defaults(self):
        """Test that an empty file yields default settings."""
        self.path.write_text("")
        self.assertEqual(AnalyzerSettings.from_file(self.path), AnalyzerSettings())

    def test_malformed_yaml_raises(self):
        """Test that unparseable YAML raises SettingsError."""
        self.path.write_text("analyzer: [unclosed\n")
        with self.assertRaises(SettingsError) as ctx:
            AnalyzerSettings.from_file(self.path)
        self.assertIn("Malformed YAML", str(ctx.exception))

    def test_missing_file_raises(self):
        """Test that a missing file raises SettingsError."""
        with self.assertRaises(SettingsError):
            AnalyzerSettings.from_file(Path(self.temp_dir.name) / "missing.yaml")


if __name__ == "__main__":
    unittest.main()
