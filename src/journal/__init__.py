"""
Journal module for daily entries and reflective summaries.

This module provides functionality for:
- One entry per calendar day (upsert-by-date)
- Selecting entries for a summary timeframe
- LLM-powered reflections over recent entries
"""

from src.journal.models import JournalEntry
from src.journal.repository import JournalRepository
from src.journal.service import JournalService
from src.journal.summarizer import JournalSummarizer

__all__ = ["JournalEntry", "JournalRepository", "JournalService", "JournalSummarizer"]
