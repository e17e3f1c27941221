#!/usr/bin/env python3
"""
Host service for Activity Ledger.
Owns the ledger, serializes calls into it and reduces failures to text
for the CLI and the menu bar.
"""

import sqlite3
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .export import write_csv
from .ledger import ActivityLedger
from .notifications import ActivityLogger

NO_FILE_SELECTED = "No file selected"


@dataclass
class CommandResult:
    """Outcome of a service operation."""

    ok: bool
    value: Any = None
    error: str = ""
    cancelled: bool = False


class ActivityService:
    """
    Serializes access to an ActivityLedger.

    Every operation holds the lock only for the ledger call itself. Export
    snapshots the totals, releases the lock, then asks for a path and
    writes the file, so tracking is never blocked on the user.
    """

    def __init__(self, ledger: ActivityLedger, logger: Optional[ActivityLogger] = None):
        self.ledger = ledger
        self.logger = logger or ActivityLogger(verbose=False)
        self.lock = threading.Lock()

    def _call(self, operation: str, func: Callable[[], Any]) -> CommandResult:
        try:
            with self.lock:
                value = func()
        except (sqlite3.Error, ValueError, OSError) as e:
            self.logger.log_error(operation, str(e))
            return CommandResult(ok=False, error=str(e))
        return CommandResult(ok=True, value=value)

    def start_activity(self, name: str, offset: int = 0) -> CommandResult:
        result = self._call("start", lambda: self.ledger.start(name, offset))
        if result.ok:
            self.logger.log_activity_started(name, offset)
        return result

    def stop_activity(self, offset: int = 0) -> CommandResult:
        result = self._call("stop", lambda: self.ledger.stop(offset))
        if result.ok:
            self.logger.log_activity_stopped(offset)
        return result

    def get_current_activity(self) -> CommandResult:
        """Name of the running activity, empty when nothing runs."""

        def current_name() -> str:
            current = self.ledger.current_activity()
            return current[0] if current else ""

        return self._call("current activity", current_name)

    def list_activities(self) -> CommandResult:
        return self._call(
            "list", lambda: sorted(self.ledger.list_activity_names())
        )

    def get_activities_times(self) -> CommandResult:
        """List of (name, seconds) pairs, longest first."""
        return self._call(
            "times",
            lambda: sorted(
                self.ledger.aggregate_times().items(),
                key=lambda item: (-item[1], item[0]),
            ),
        )

    def clear_activities(self) -> CommandResult:
        result = self._call("clear", self.ledger.clear)
        if result.ok:
            self.logger.log_clear()
        return result

    def hard_clear_activities(self) -> CommandResult:
        """Wipe everything, then re-seed so tracking can go on."""

        result = self._call("hard clear", lambda: self.ledger.hard_clear(reseed=True))
        if result.ok:
            self.logger.log_clear(hard=True)
        return result

    def todays_activities(self) -> CommandResult:
        """List of (name, start_time, end_time or None) for today."""
        return self._call(
            "today",
            lambda: [
                (interval.name, interval.start_time, interval.end_time)
                for interval in self.ledger.todays_activities()
            ],
        )

    def export_activities(self, choose_path: Callable[[], Optional[str]]) -> CommandResult:
        """
        Export totals to a CSV file chosen by ``choose_path``.

        Args:
            choose_path: Called without the lock held; returns the target
                         path, or None when the user cancels.
        """
        snapshot = self._call("export", self.ledger.aggregate_times)
        if not snapshot.ok:
            return snapshot

        path = choose_path()
        if not path:
            return CommandResult(ok=False, error=NO_FILE_SELECTED, cancelled=True)

        try:
            rows = write_csv(path, snapshot.value)
        except OSError as e:
            self.logger.log_error("export", str(e))
            return CommandResult(ok=False, error=str(e))

        self.logger.log_export(str(path), rows)
        return CommandResult(ok=True, value=str(path))

    def close(self) -> None:
        with self.lock:
            self.ledger.close()
