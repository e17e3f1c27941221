"""Tests for notifications and console logging."""

import unittest
from unittest.mock import patch

from activity_ledger.notifications import ActivityLogger, Messages


class TestMessages(unittest.TestCase):
    def test_success_and_error(self):
        messages = Messages()
        messages.success("Data cleared", now=100)
        messages.error("Failed to export data", now=101)

        (ok, _), (err, _) = messages.get_messages()
        self.assertFalse(ok.is_error)
        self.assertTrue(err.is_error)
        self.assertEqual(err.text, "Failed to export data")

    def test_remove_old_messages(self):
        messages = Messages(timeout=5)
        messages.success("old", now=100)
        messages.success("new", now=103)

        messages.remove_old_messages(now=105)

        self.assertEqual([m.text for m, _ in messages.get_messages()], ["new"])

    def test_get_messages_returns_copy(self):
        messages = Messages()
        messages.success("a", now=1)
        messages.get_messages().clear()
        self.assertEqual(len(messages.get_messages()), 1)


class TestActivityLogger(unittest.TestCase):
    @patch("builtins.print")
    def test_quiet_logger_prints_nothing(self, mock_print):
        logger = ActivityLogger(verbose=False)
        logger.log_activity_started("A", 0)
        logger.log_activity_stopped(0)
        logger.log_clear()
        logger.log_export("/tmp/x.csv", 2)
        mock_print.assert_not_called()

    @patch("builtins.print")
    def test_errors_always_printed(self, mock_print):
        ActivityLogger(verbose=False).log_error("stop", "disk I/O error")
        output = mock_print.call_args[0][0]
        self.assertIn("[ERROR] stop failed: disk I/O error", output)

    @patch("builtins.print")
    def test_verbose_start_mentions_offset(self, mock_print):
        ActivityLogger(verbose=True).log_activity_started("Coding", -600)
        output = mock_print.call_args[0][0]
        self.assertIn("Started: Coding (offset -600s)", output)
        self.assertRegex(output, r"^\[\d\d:\d\d:\d\d\]")


if __name__ == "__main__":
    unittest.main()
