#!/usr/bin/env python3
"""
Small helpers shared by the CLI, the menu bar and the service.
"""

import os
import re
import sys
from pathlib import Path

_OFFSET_PATTERN = re.compile(r"^([+-]?)(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?$")


def get_data_directory() -> Path:
    """Get the per-user data directory, creating it if needed."""
    if sys.platform == "darwin":
        data_dir = Path.home() / "Library" / "Application Support" / "ActivityLedger"
    else:
        xdg_data_home = os.getenv("XDG_DATA_HOME")
        base = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
        data_dir = base / "activity-ledger"

    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def parse_offset(value: str) -> int:
    """
    Parse an offset such as "-90", "30m", "-1h", "1h30m" into seconds.

    Raises:
        ValueError: If the value is not a recognised offset.
    """
    value = value.strip()
    if re.fullmatch(r"[+-]?\d+", value):
        return int(value)

    match = _OFFSET_PATTERN.match(value)
    if not match or not any(match.group(i) for i in (2, 3, 4)):
        raise ValueError(f"Invalid offset: {value!r}")

    sign, hours, minutes, seconds = match.groups()
    total = int(hours or 0) * 3600 + int(minutes or 0) * 60 + int(seconds or 0)
    return -total if sign == "-" else total
