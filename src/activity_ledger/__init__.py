"""
Activity Ledger - a small time tracker for named activities.

Start and stop activities, backdate or postdate with offsets, and report:

- Total time per activity since the last clear
- Today's timeline
- CSV export
- Soft clear (reset counters, keep history) and hard clear (wipe)
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .ledger import ActivityLedger, ClearMarker, Interval
from .service import ActivityService, CommandResult
from .storage import open_ledger

__all__ = [
    "ActivityLedger",
    "ActivityService",
    "ClearMarker",
    "CommandResult",
    "Interval",
    "open_ledger",
]
