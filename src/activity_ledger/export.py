#!/usr/bin/env python3
"""
CSV export of activity totals.
"""

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

CSV_HEADER = ("Activity", "Time")


def format_hours_minutes(seconds: int) -> str:
    """Format a duration as e.g. "1h1m"; leftover seconds are dropped."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h{minutes}m"


def build_rows(times: Union[Dict[str, int], Iterable[Tuple[str, int]]]) -> List[Tuple[str, str]]:
    """Header row followed by one (name, "HhMm") row per activity."""
    items = times.items() if isinstance(times, dict) else times
    rows = [CSV_HEADER]
    for name, seconds in items:
        rows.append((name, format_hours_minutes(seconds)))
    return rows


def write_csv(path: Union[str, Path], times) -> int:
    """
    Write activity totals to ``path``.

    Returns:
        Number of activity rows written (header excluded)
    """
    rows = build_rows(times)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerows(rows)
    return len(rows) - 1


def default_export_directory() -> Path:
    """The user's Documents folder, or home when there is none."""
    documents = Path.home() / "Documents"
    if documents.is_dir():
        return documents
    return Path.home()
