"""Entry selection for summary timeframes."""

from __future__ import annotations

from datetime import date, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from src.daybook.exceptions import ValidationError

from .dates import today as current_day
from .models import JournalEntry

YESTERDAY = "yesterday"
LAST_WEEK = "last week"

TIMEFRAME_DAYS: Dict[str, int] = {
    YESTERDAY: 1,
    LAST_WEEK: 7,
}


def timeframe_days(timeframe: str) -> int:
    try:
        return TIMEFRAME_DAYS[timeframe]
    except KeyError as exc:
        raise ValidationError(f"Unknown timeframe: {timeframe}") from exc


def select_entries(
    entries: Iterable[JournalEntry],
    timeframe: str,
    tz: Optional[tzinfo],
    today: Optional[date] = None,
) -> List[JournalEntry]:
    """Keep entries dated in ``[today - N days, today)``; today itself is excluded."""
    days = timeframe_days(timeframe)
    if today is None:
        today = current_day(tz)
    start = today - timedelta(days=days)
    return [
        entry
        for entry in entries
        if start <= date.fromisoformat(entry.entry_day) < today
    ]
