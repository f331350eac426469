"""Journal entry endpoints."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import List, Optional

from fastapi import FastAPI, Query

from src.daybook.exceptions import DaybookError, UpstreamError

from ..dependencies import get_journal_service, serialize_entry
from ..schemas import EntryResponse, EntrySaveRequest

logger = logging.getLogger(__name__)


def register_entry_routes(app: FastAPI) -> None:
    """Register journal entry endpoints."""

    @app.get("/entries", response_model=List[EntryResponse])
    async def list_entries(
        day: Optional[date] = Query(None, description="Only the entry of this calendar day"),
    ) -> List[EntryResponse]:
        """List entries, newest date first, or the single entry of ``day``."""
        service = get_journal_service()
        try:
            if day is not None:
                entry = await asyncio.to_thread(service.get_for_day, day)
                return [serialize_entry(entry)] if entry else []
            entries = await asyncio.to_thread(service.list)
            return [serialize_entry(entry) for entry in entries]
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Failed to fetch entries: %s", exc)
            raise UpstreamError("Failed to fetch entries") from exc

    @app.post("/entries", response_model=EntryResponse)
    async def save_entry(request: EntrySaveRequest) -> EntryResponse:
        """Create or update the entry of the requested calendar day."""
        service = get_journal_service()
        try:
            entry = await asyncio.to_thread(service.save, request.content, request.date)
            return serialize_entry(entry)
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Failed to save entry: %s", exc)
            raise UpstreamError("Failed to save entry") from exc
