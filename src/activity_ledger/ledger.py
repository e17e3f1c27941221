#!/usr/bin/env python3
"""
Activity ledger for Activity Ledger.
Owns the durable record of activity intervals and clear markers.

Tables:
    activities(id, name, start_time, end_time) - end_time NULL while running
    clears(id, time) - seeded with (1, 0) so totals always have a lower bound
"""

import sqlite3
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple

SECONDS_PER_DAY = 86400


@dataclass
class Interval:
    """One contiguous span of time attributed to an activity."""

    id: int
    name: str
    start_time: int
    end_time: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def duration(self, now: int) -> int:
        """Duration in seconds, open intervals run until ``now``."""
        end = now if self.end_time is None else self.end_time
        return max(end - self.start_time, 0)


@dataclass
class ClearMarker:
    """Timestamp after which activity time is counted again."""

    id: int
    time: int


class ActivityLedger:
    """
    Interface to the activities and clears tables.

    The ledger does no locking of its own; the embedding host serializes
    calls (see ActivityService).
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the ledger.

        Args:
            connection (sqlite3.Connection): Open database connection, owned
                                             by the ledger from now on.
            clock (Optional[Callable]): Wall clock returning epoch seconds.
                                        Defaults to time.time.
        """
        self.connection = connection
        self.clock = clock or time.time

    def now(self) -> int:
        """Current wall-clock time in whole epoch seconds."""
        return int(self.clock())

    def initialize(self) -> None:
        """Create the tables and seed the epoch clear marker if missing."""
        with self.connection:
            self.connection.execute(
                """
                CREATE TABLE IF NOT EXISTS activities (
                    id INTEGER PRIMARY KEY,
                    name TEXT NOT NULL,
                    start_time INTEGER NOT NULL,
                    end_time INTEGER
                )
                """
            )
            self.connection.execute(
                """
                CREATE TABLE IF NOT EXISTS clears (
                    id INTEGER PRIMARY KEY,
                    time INTEGER NOT NULL
                )
                """
            )
            self.connection.execute(
                "INSERT INTO clears (id, time) VALUES (1, 0) ON CONFLICT DO NOTHING"
            )

    def close(self) -> None:
        self.connection.close()

    def start(self, name: str, offset: int = 0) -> None:
        """
        Start an activity, closing the running one with the same offset.

        Args:
            name (str): Activity name, must not be blank.
            offset (int): Seconds added to now. Negative backdates the start.
        """
        if not name or not name.strip():
            raise ValueError("Activity name must not be empty")

        requested = self.now() + offset

        with self.connection:
            current = self._current()
            start_time = requested
            if current and start_time < current[1]:
                start_time = current[1]

            self._close_current(requested)

            self.connection.execute(
                "INSERT INTO activities (name, start_time) VALUES (?, ?)",
                (name, start_time),
            )

    def stop(self, offset: int = 0) -> None:
        """Stop the running activity. Nothing running is a no-op."""
        with self.connection:
            self._close_current(self.now() + offset)

    def _close_current(self, end_time: int) -> None:
        """Close the open interval at ``end_time``, never before its start."""
        current = self._current()
        if current is None:
            return

        if end_time < current[1]:
            end_time = current[1]

        self.connection.execute(
            "UPDATE activities SET end_time = ? WHERE end_time IS NULL",
            (end_time,),
        )

    def _current(self) -> Optional[Tuple[str, int]]:
        row = self.connection.execute(
            "SELECT name, start_time FROM activities "
            "WHERE end_time IS NULL ORDER BY start_time DESC, id DESC LIMIT 1"
        ).fetchone()
        if row is None:
            return None
        return row[0], row[1]

    def current_activity(self) -> Optional[Tuple[str, int]]:
        """Return (name, start_time) of the running activity, if any."""
        return self._current()

    def list_activity_names(self) -> Set[str]:
        """Every activity name ever recorded, cleared ones included."""
        rows = self.connection.execute("SELECT DISTINCT name FROM activities")
        return {row[0] for row in rows}

    def aggregate_times(self) -> Dict[str, int]:
        """
        Total seconds per activity since the most recent clear.

        Running activities count up to now. Closed intervals whose end
        precedes their start contribute nothing.
        """
        rows = self.connection.execute(
            """
            SELECT name, start_time, end_time FROM activities
            WHERE start_time >= (SELECT time FROM clears ORDER BY time DESC LIMIT 1)
            """
        ).fetchall()

        now = self.now()
        totals: Dict[str, int] = {}
        for name, start_time, end_time in rows:
            interval = Interval(0, name, start_time, end_time)
            totals[name] = totals.get(name, 0) + interval.duration(now)
        return totals

    def clear(self) -> None:
        """Stop the running activity and mark now as the counting origin."""
        with self.connection:
            now = self.now()
            self._close_current(now)
            self.connection.execute("INSERT INTO clears (time) VALUES (?)", (now,))

    def hard_clear(self, reseed: bool = False) -> None:
        """
        Delete every interval and clear marker. Unrecoverable.

        With ``reseed`` the epoch clear marker is put back in the same
        transaction, so totals keep counting afterwards.
        """
        with self.connection:
            self.connection.execute("DELETE FROM activities")
            self.connection.execute("DELETE FROM clears")
            if reseed:
                self.connection.execute("INSERT INTO clears (id, time) VALUES (1, 0)")

    def todays_activities(self) -> List[Interval]:
        """Intervals started since the start of the current UTC day."""
        now = self.now()
        today = now - now % SECONDS_PER_DAY
        rows = self.connection.execute(
            "SELECT id, name, start_time, end_time FROM activities "
            "WHERE start_time >= ? ORDER BY start_time, id",
            (today,),
        )
        return [Interval(*row) for row in rows]

    def intervals(self) -> List[Interval]:
        """Every recorded interval in start order."""
        rows = self.connection.execute(
            "SELECT id, name, start_time, end_time FROM activities "
            "ORDER BY start_time, id"
        )
        return [Interval(*row) for row in rows]

    def clear_markers(self) -> List[ClearMarker]:
        rows = self.connection.execute(
            "SELECT id, time FROM clears ORDER BY time, id"
        )
        return [ClearMarker(*row) for row in rows]
