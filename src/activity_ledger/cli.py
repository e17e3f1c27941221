#!/usr/bin/env python3
"""
Command line interface for Activity Ledger.

Usage: activity-ledger <command> [options]
"""

import sqlite3
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import get_config
from .export import default_export_directory, format_hours_minutes
from .http_sync import ReportSyncClient
from .notifications import ActivityLogger
from .reports import format_offset, statistics_rows
from .service import ActivityService, CommandResult
from .storage import open_ledger
from .utils import parse_offset

USAGE = """Activity Ledger
Usage: activity-ledger <command> [options]
Commands:
  start NAME [--offset OFFSET]   Start NAME, stopping the running activity
  stop [--offset OFFSET]         Stop the running activity
  status                         Show the running activity
  list                           List every activity name ever recorded
  times                          Show time per activity since the last clear
  today                          Show today's intervals
  clear                          Reset counters, keep history
  hard-clear [--yes]             Delete all data (unrecoverable)
  export [PATH]                  Write times to a CSV file
  sync                           Upload a report to the sync endpoint
  --help, -h                     Show this help message
Offsets are seconds or durations like 30m, -1h, 1h30m (negative = in the past)."""


def create_service() -> ActivityService:
    """Open the configured ledger behind a service."""
    config = get_config()
    ledger = open_ledger(config.data_dir)
    return ActivityService(ledger, ActivityLogger(verbose=config.verbose_logging))


def _pop_offset(args: List[str]) -> int:
    """Remove ``--offset VALUE`` from args and return it in seconds."""
    for i, arg in enumerate(args):
        if arg in ("--offset", "-o"):
            if i + 1 >= len(args):
                raise ValueError("--offset requires a value")
            value = parse_offset(args[i + 1])
            del args[i : i + 2]
            return value
    return 0


def _fail(result: CommandResult) -> None:
    print(f"Error: {result.error}")
    sys.exit(1)


def _format_clock(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%H:%M")


def prompt_export_path() -> Optional[str]:
    """Ask for a file name on the terminal; empty input cancels."""
    default_dir = get_config().export_dir or default_export_directory()
    answer = input(f"Save activities to (relative to {default_dir}): ").strip()
    if not answer:
        return None
    path = Path(answer).expanduser()
    if not path.is_absolute():
        path = default_dir / path
    return str(path)


def run_command(service: ActivityService, command: str, args: List[str]) -> None:
    """Dispatch one command against ``service``."""
    if command == "start":
        offset = _pop_offset(args)
        if not args:
            print("Error: start requires an activity name")
            sys.exit(1)
        name = " ".join(args)
        result = service.start_activity(name, offset)
        if not result.ok:
            _fail(result)
        print(f"Started activity: {name} ({format_offset(offset)})")

    elif command == "stop":
        offset = _pop_offset(args)
        current = service.get_current_activity()
        result = service.stop_activity(offset)
        if not result.ok:
            _fail(result)
        if current.ok and current.value:
            print(f"Stopped activity: {current.value} ({format_offset(offset)})")
        else:
            print("No activity running")

    elif command == "status":
        result = service.get_current_activity()
        if not result.ok:
            _fail(result)
        if result.value:
            print(f"Current activity: {result.value}")
        else:
            print("No activity running")

    elif command == "list":
        result = service.list_activities()
        if not result.ok:
            _fail(result)
        for name in result.value:
            print(name)

    elif command == "times":
        result = service.get_activities_times()
        if not result.ok:
            _fail(result)
        if not result.value:
            print("No activity time recorded since the last clear")
        for row in statistics_rows(dict(result.value)):
            print(row.label)

    elif command == "today":
        result = service.todays_activities()
        if not result.ok:
            _fail(result)
        for name, start, end in result.value:
            end_str = _format_clock(end) if end is not None else "now"
            duration = (end if end is not None else int(datetime.now().timestamp())) - start
            print(
                f"{_format_clock(start)} - {end_str:>5}  "
                f"{format_hours_minutes(max(duration, 0)):>7}  {name}"
            )

    elif command == "clear":
        result = service.clear_activities()
        if not result.ok:
            _fail(result)
        print("Data cleared")

    elif command == "hard-clear":
        if "--yes" not in args:
            answer = input("Delete ALL activities? This cannot be undone [y/N]: ")
            if answer.strip().lower() not in ("y", "yes"):
                print("Aborted")
                return
        result = service.hard_clear_activities()
        if not result.ok:
            _fail(result)
        print("All data deleted")

    elif command == "export":
        if args:
            target = str(Path(args[0]).expanduser())
            result = service.export_activities(lambda: target)
        else:
            result = service.export_activities(prompt_export_path)
        if result.cancelled:
            print("Export cancelled: no file selected")
            return
        if not result.ok:
            _fail(result)
        print(f"Data exported to {result.value}")

    elif command == "sync":
        config = get_config()
        times = service.get_activities_times()
        today = service.todays_activities()
        for result in (times, today):
            if not result.ok:
                _fail(result)
        client = ReportSyncClient(config.sync_endpoint, config.sync_auth_token)
        if not client.sync_report(times.value, today.value):
            sys.exit(1)

    else:
        print(f"Unknown command: {command}")
        print("Use --help for usage information")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = list(sys.argv[1:] if argv is None else argv)

    if not args or args[0] in ("--help", "-h"):
        print(USAGE)
        return

    command, rest = args[0], args[1:]

    try:
        service = create_service()
    except (sqlite3.Error, OSError) as e:
        print(f"Error opening activity database: {e}")
        sys.exit(1)

    try:
        run_command(service, command, rest)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        service.close()


if __name__ == "__main__":
    main()
