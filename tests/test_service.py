"""Tests for the host service."""

import sqlite3
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from activity_ledger.ledger import ActivityLedger
from activity_ledger.notifications import ActivityLogger
from activity_ledger.service import NO_FILE_SELECTED, ActivityService


class TestActivityService(unittest.TestCase):
    """Test cases for ActivityService."""

    def setUp(self):
        """Set up test fixtures."""
        self.now = 1000
        self.ledger = ActivityLedger(sqlite3.connect(":memory:"), clock=lambda: self.now)
        self.ledger.initialize()
        self.logger = MagicMock(spec=ActivityLogger)
        self.service = ActivityService(self.ledger, self.logger)
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test fixtures."""
        import shutil

        self.service.close()
        shutil.rmtree(self.temp_dir)

    def test_start_and_current_activity(self):
        result = self.service.start_activity("Coding", 0)
        self.assertTrue(result.ok)
        self.assertEqual(self.service.get_current_activity().value, "Coding")
        self.logger.log_activity_started.assert_called_once_with("Coding", 0)

    def test_current_activity_empty_when_idle(self):
        result = self.service.get_current_activity()
        self.assertTrue(result.ok)
        self.assertEqual(result.value, "")

    def test_stop_activity(self):
        self.service.start_activity("Coding")
        self.now = 1100
        self.assertTrue(self.service.stop_activity(0).ok)
        self.assertEqual(self.service.get_activities_times().value, [("Coding", 100)])

    def test_stop_without_activity_is_ok(self):
        self.assertTrue(self.service.stop_activity(0).ok)
        self.assertTrue(self.service.stop_activity(0).ok)

    def test_list_activities_sorted(self):
        for name in ["b", "a", "c", "a"]:
            self.service.start_activity(name)
        self.assertEqual(self.service.list_activities().value, ["a", "b", "c"])

    def test_times_longest_first(self):
        self.service.start_activity("short")
        self.now = 1010
        self.service.start_activity("long")
        self.now = 1110
        self.service.stop_activity()
        self.assertEqual(
            self.service.get_activities_times().value,
            [("long", 100), ("short", 10)],
        )

    def test_todays_activities_tuples(self):
        self.now = 86400 * 5 + 10
        self.service.start_activity("A")
        self.assertEqual(
            self.service.todays_activities().value, [("A", 86400 * 5 + 10, None)]
        )

    def test_clear_keeps_names(self):
        self.service.start_activity("A")
        self.now = 1100
        self.assertTrue(self.service.clear_activities().ok)
        self.assertEqual(self.service.get_activities_times().value, [])
        self.assertEqual(self.service.list_activities().value, ["A"])
        self.logger.log_clear.assert_called_once_with()

    def test_hard_clear_reseeds_and_keeps_tracking(self):
        self.service.start_activity("A")
        self.assertTrue(self.service.hard_clear_activities().ok)

        self.assertEqual(self.service.list_activities().value, [])
        self.assertEqual(self.service.get_activities_times().value, [])
        self.assertEqual(len(self.ledger.clear_markers()), 1)

        self.service.start_activity("B")
        self.now = 1030
        self.assertEqual(self.service.get_activities_times().value, [("B", 30)])

    def test_hard_clear_failure_leaves_data_untouched(self):
        self.service.start_activity("A")
        self.now = 1100
        self.ledger.connection.execute(
            "CREATE TRIGGER block_seed BEFORE INSERT ON clears "
            "BEGIN SELECT RAISE(ABORT, 'seed blocked'); END"
        )

        result = self.service.hard_clear_activities()

        self.assertFalse(result.ok)
        self.assertIn("seed blocked", result.error)
        self.assertEqual(self.service.get_activities_times().value, [("A", 100)])

    def test_blank_name_reported_as_text(self):
        result = self.service.start_activity("")
        self.assertFalse(result.ok)
        self.assertIn("empty", result.error)
        self.logger.log_error.assert_called_once()

    def test_storage_error_reported_as_text(self):
        with patch.object(
            self.ledger, "aggregate_times", side_effect=sqlite3.OperationalError("disk I/O error")
        ):
            result = self.service.get_activities_times()
        self.assertFalse(result.ok)
        self.assertEqual(result.error, "disk I/O error")

    def test_lock_released_after_error(self):
        with patch.object(self.ledger, "stop", side_effect=sqlite3.OperationalError("boom")):
            self.service.stop_activity()
        self.assertFalse(self.service.lock.locked())


class TestExport(unittest.TestCase):
    """Export through the service."""

    def setUp(self):
        self.now = 1000
        self.ledger = ActivityLedger(sqlite3.connect(":memory:"), clock=lambda: self.now)
        self.ledger.initialize()
        self.service = ActivityService(self.ledger, ActivityLogger(verbose=False))
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil

        self.service.close()
        shutil.rmtree(self.temp_dir)

    def test_export_writes_csv(self):
        self.service.start_activity("Coding")
        self.now = 1000 + 3660
        self.service.stop_activity()
        target = str(Path(self.temp_dir) / "out.csv")

        result = self.service.export_activities(lambda: target)

        self.assertTrue(result.ok)
        self.assertEqual(result.value, target)
        with open(target, encoding="utf-8") as f:
            self.assertEqual(f.read(), "Activity,Time\nCoding,1h1m\n")

    def test_export_empty_ledger_writes_header(self):
        target = str(Path(self.temp_dir) / "empty.csv")
        result = self.service.export_activities(lambda: target)
        self.assertTrue(result.ok)
        with open(target, encoding="utf-8") as f:
            self.assertEqual(f.read(), "Activity,Time\n")

    def test_export_cancelled(self):
        result = self.service.export_activities(lambda: None)
        self.assertFalse(result.ok)
        self.assertTrue(result.cancelled)
        self.assertEqual(result.error, NO_FILE_SELECTED)
        self.assertEqual(list(Path(self.temp_dir).iterdir()), [])

    def test_chooser_runs_without_lock(self):
        """Tracking calls are not blocked while the user picks a file."""
        target = str(Path(self.temp_dir) / "out.csv")
        seen = {}

        def chooser():
            seen["locked"] = self.service.lock.locked()
            seen["start"] = self.service.start_activity("During export").ok
            return target

        result = self.service.export_activities(chooser)

        self.assertTrue(result.ok)
        self.assertFalse(seen["locked"])
        self.assertTrue(seen["start"])

    def test_export_uses_snapshot_taken_before_chooser(self):
        self.service.start_activity("A")
        self.now = 1060
        self.service.stop_activity()
        target = str(Path(self.temp_dir) / "out.csv")

        def chooser():
            self.service.hard_clear_activities()
            return target

        self.service.export_activities(chooser)
        with open(target, encoding="utf-8") as f:
            self.assertIn("A,0h1m", f.read())

    def test_export_write_failure(self):
        target = str(Path(self.temp_dir) / "missing" / "out.csv")
        result = self.service.export_activities(lambda: target)
        self.assertFalse(result.ok)
        self.assertFalse(result.cancelled)
        self.assertTrue(result.error)


if __name__ == "__main__":
    unittest.main()
