#!/usr/bin/env python3
"""
User-facing feedback for Activity Ledger.
Transient success/error messages for the presentation layer, and the
console logger used by the host service.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

MESSAGE_TIMEOUT = 5.0  # seconds


@dataclass
class Message:
    """A notification shown to the user."""

    text: str
    is_error: bool = False


class Messages:
    """Queue of recent notifications, dropped after MESSAGE_TIMEOUT."""

    def __init__(self, timeout: float = MESSAGE_TIMEOUT):
        self.timeout = timeout
        self.messages: List[Tuple[Message, float]] = []

    def success(self, text: str, now: Optional[float] = None) -> None:
        self.messages.append((Message(text), time.time() if now is None else now))

    def error(self, text: str, now: Optional[float] = None) -> None:
        self.messages.append(
            (Message(text, is_error=True), time.time() if now is None else now)
        )

    def remove_old_messages(self, now: Optional[float] = None) -> None:
        """Drop messages older than the timeout."""
        if now is None:
            now = time.time()
        self.messages = [
            (message, created)
            for message, created in self.messages
            if now - created < self.timeout
        ]

    def get_messages(self) -> List[Tuple[Message, float]]:
        return list(self.messages)


class ActivityLogger:
    """Handles console output for ledger operations."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def _log(self, text: str) -> None:
        now_str = datetime.now().strftime("%H:%M:%S")
        print(f"[{now_str}] {text}")

    def log_activity_started(self, name: str, offset: int) -> None:
        """Log activity start."""
        if not self.verbose:
            return
        suffix = f" (offset {offset:+d}s)" if offset else ""
        self._log(f"Started: {name}{suffix}")

    def log_activity_stopped(self, offset: int) -> None:
        """Log activity stop."""
        if not self.verbose:
            return
        suffix = f" (offset {offset:+d}s)" if offset else ""
        self._log(f"Stopped current activity{suffix}")

    def log_clear(self, hard: bool = False) -> None:
        if not self.verbose:
            return
        if hard:
            self._log("[CLEAR] All activities and clears deleted")
        else:
            self._log("[CLEAR] Counters reset, history kept")

    def log_export(self, path: str, rows: int) -> None:
        if not self.verbose:
            return
        self._log(f"Exported {rows} activities to {path}")

    def log_error(self, operation: str, error: str) -> None:
        """Errors are always printed, regardless of verbosity."""
        self._log(f"[ERROR] {operation} failed: {error}")
