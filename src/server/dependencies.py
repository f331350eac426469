"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from datetime import tzinfo
from functools import lru_cache
from typing import Optional

from src.auth import AuthClient
from src.daybook.config import Config
from src.daybook.ollama_client import OllamaClient
from src.journal import JournalEntry, JournalRepository, JournalService, JournalSummarizer
from src.journal.dates import resolve_timezone
from src.todo import TodoItem, TodoRepository, TodoService

from .schemas import EntryResponse, TodoResponse


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load the application config once."""
    return Config.load()


@lru_cache(maxsize=1)
def get_timezone() -> Optional[tzinfo]:
    """Timezone used for calendar-day boundaries (None = server local time)."""
    return resolve_timezone(get_config().timezone)


@lru_cache(maxsize=1)
def get_journal_service() -> JournalService:
    """Singleton JournalService."""
    repository = JournalRepository(db_path=get_config().db_path)
    return JournalService(repository, get_timezone())


@lru_cache(maxsize=1)
def get_todo_service() -> TodoService:
    """Singleton TodoService."""
    config = get_config()
    repository = TodoRepository(db_path=config.db_path)
    return TodoService(repository, owner_id=config.todo_owner_id)


@lru_cache(maxsize=1)
def get_summarizer() -> JournalSummarizer:
    """Singleton JournalSummarizer backed by Ollama."""
    config = get_config()
    client = OllamaClient(
        host=config.ollama.host,
        model=config.ollama.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )
    return JournalSummarizer(ollama_client=client, max_chars=config.summary_max_chars)


@lru_cache(maxsize=1)
def get_auth_client() -> Optional[AuthClient]:
    """Identity provider client, or None when auth is disabled."""
    auth = get_config().auth
    if not auth.enabled:
        return None
    return AuthClient(auth.supabase_url, auth.supabase_anon_key)


def clear_caches() -> None:
    """Drop all cached singletons (tests and config reloads)."""
    for getter in (
        get_config,
        get_timezone,
        get_journal_service,
        get_todo_service,
        get_summarizer,
        get_auth_client,
    ):
        getter.cache_clear()


def serialize_entry(entry: JournalEntry) -> EntryResponse:
    """Convert domain JournalEntry to API response."""
    return EntryResponse(
        id=entry.id,
        content=entry.content,
        date=entry.date,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


def serialize_todo(item: TodoItem) -> TodoResponse:
    """Convert domain TodoItem to API response."""
    return TodoResponse(
        id=item.id,
        content=item.content,
        completed=item.completed,
        order=item.order,
        owner_id=item.owner_id,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )
