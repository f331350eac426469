"""Journal service: one authoritative entry per calendar day."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, tzinfo
from typing import List, Optional

from src.daybook.exceptions import UpstreamError, ValidationError

from .dates import DateInput, calendar_day, parse_entry_date
from .models import JournalEntry
from .repository import JournalRepository

logger = logging.getLogger(__name__)


class JournalService:
    """Upsert-by-date over the entry store."""

    def __init__(self, repository: JournalRepository, tz: Optional[tzinfo] = None):
        self.repository = repository
        self.tz = tz

    def list(self) -> List[JournalEntry]:
        """All entries, newest date first."""
        try:
            return self.repository.list()
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to fetch entries") from exc

    def save(self, content: str, entry_date: DateInput) -> JournalEntry:
        """Create the entry for the day of ``entry_date`` or replace its content.

        The first save stores ``entry_date`` exactly as given; later saves on the
        same calendar day only touch ``content`` and ``updated_at``.
        """
        if content is None:
            raise ValidationError("content is required")
        if entry_date is None:
            raise ValidationError("date is required")
        moment = parse_entry_date(entry_date, self.tz)
        day = calendar_day(moment, self.tz)
        try:
            entry = self.repository.upsert(content, moment, day)
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to save entry") from exc
        logger.debug("Saved journal entry %s for %s", entry.id, entry.entry_day)
        return entry

    def get_for_day(self, day: date) -> Optional[JournalEntry]:
        try:
            return self.repository.get_by_day(day)
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to fetch entry") from exc
