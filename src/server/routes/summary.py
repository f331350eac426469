"""Reflective summary endpoints."""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI

from src.daybook.exceptions import DaybookError, UpstreamError
from src.journal.timeframe import select_entries

from ..dependencies import get_journal_service, get_summarizer, get_timezone
from ..schemas import RecentSummaryRequest, SummaryRequest, SummaryResponse

logger = logging.getLogger(__name__)


def register_summary_routes(app: FastAPI) -> None:
    """Register summary endpoints."""

    @app.post("/summary", response_model=SummaryResponse)
    async def summarize(request: SummaryRequest) -> SummaryResponse:
        """Summarize the entries selected by the caller."""
        summarizer = get_summarizer()
        entries = [entry.model_dump() for entry in request.entries]
        logger.info(
            "Received summary request: timeframe=%s entries=%d",
            request.timeframe,
            len(entries),
        )
        try:
            summary = await asyncio.to_thread(summarizer.summarize, entries, request.timeframe)
            return SummaryResponse(summary=summary)
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Summary request failed: %s", exc)
            raise UpstreamError(f"Failed to generate summary: {exc}") from exc

    @app.post("/summary/recent", response_model=SummaryResponse)
    async def summarize_recent(request: RecentSummaryRequest) -> SummaryResponse:
        """Select stored entries for the timeframe and summarize them."""
        service = get_journal_service()
        summarizer = get_summarizer()
        try:
            stored = await asyncio.to_thread(service.list)
            selected = select_entries(stored, request.timeframe, get_timezone())
            entries = [{"date": entry.entry_day, "content": entry.content} for entry in selected]
            summary = await asyncio.to_thread(summarizer.summarize, entries, request.timeframe)
            return SummaryResponse(summary=summary)
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Summary request failed: %s", exc)
            raise UpstreamError(f"Failed to generate summary: {exc}") from exc
