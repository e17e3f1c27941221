#!/usr/bin/env python3
"""
Database location and connection handling for Activity Ledger.
"""

import sqlite3
from pathlib import Path
from typing import Callable, Optional, Union

from .ledger import ActivityLedger
from .utils import get_data_directory

DATABASE_FILENAME = "activity-ledger.db"


def get_database_path(data_dir: Union[str, Path]) -> Path:
    """Return the database file path inside ``data_dir``, creating the dir."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DATABASE_FILENAME


def open_connection(path: Union[str, Path]) -> sqlite3.Connection:
    """Open the ledger database.

    The connection may be used from the host's worker threads; callers
    serialize access themselves.
    """
    return sqlite3.connect(str(path), check_same_thread=False)


def open_ledger(
    data_dir: Optional[Union[str, Path]] = None,
    clock: Optional[Callable[[], float]] = None,
) -> ActivityLedger:
    """Open and initialize the ledger stored in ``data_dir``.

    Args:
        data_dir: Directory holding the database. Defaults to the user data dir.
        clock: Optional wall clock, mainly for tests.

    Returns:
        An initialized ActivityLedger
    """
    if data_dir is None:
        data_dir = get_data_directory()

    ledger = ActivityLedger(open_connection(get_database_path(data_dir)), clock=clock)
    ledger.initialize()
    return ledger
