"""Tests for utils module functionality."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from activity_ledger.utils import get_data_directory, parse_offset


class TestGetDataDirectory(unittest.TestCase):
    """Test cases for get_data_directory function."""

    def setUp(self):
        self.temp_home = tempfile.mkdtemp()

    def tearDown(self):
        import shutil

        shutil.rmtree(self.temp_home)

    def test_returns_macos_path_on_darwin(self):
        with patch("sys.platform", "darwin"), patch(
            "pathlib.Path.home", return_value=Path(self.temp_home)
        ):
            result = get_data_directory()
        self.assertIn("Library", str(result))
        self.assertIn("Application Support", str(result))
        self.assertTrue(result.exists())

    def test_uses_xdg_data_home_elsewhere(self):
        with patch("sys.platform", "linux"), patch.dict(
            os.environ, {"XDG_DATA_HOME": self.temp_home}
        ):
            result = get_data_directory()
        self.assertEqual(result, Path(self.temp_home) / "activity-ledger")
        self.assertTrue(result.is_dir())


class TestParseOffset(unittest.TestCase):
    def test_valid_offsets(self):
        test_cases = [
            ("0", 0),
            ("90", 90),
            ("-90", -90),
            ("+30m", 1800),
            ("30m", 1800),
            ("-1h", -3600),
            ("1h30m", 5400),
            ("-2h5m10s", -(7200 + 300 + 10)),
        ]
        for value, expected in test_cases:
            with self.subTest(value=value):
                self.assertEqual(parse_offset(value), expected)

    def test_invalid_offsets(self):
        for value in ["", "-", "abc", "1d", "m", "1m1h"]:
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_offset(value)


if __name__ == "__main__":
    unittest.main()
