"""Todo service: CRUD and manual ordering over the todo store."""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from src.daybook.exceptions import NotFoundError, UpstreamError, ValidationError

from .models import TodoItem
from .repository import TodoRepository

logger = logging.getLogger(__name__)


class TodoService:
    """Todos for a single configured owner."""

    def __init__(self, repository: TodoRepository, owner_id: str = "placeholder"):
        self.repository = repository
        self.owner_id = owner_id

    def list(self) -> List[TodoItem]:
        """Todos in ascending ``order``."""
        try:
            return self.repository.list(self.owner_id)
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to fetch todos") from exc

    def create(self, content: str) -> TodoItem:
        """Append a todo after the current last one."""
        if content is None or not content.strip():
            raise ValidationError("content is required")
        try:
            return self.repository.create(content.strip(), self.owner_id)
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to create todo") from exc

    def get(self, todo_id: str) -> TodoItem:
        try:
            todo = self.repository.get(todo_id)
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to fetch todo") from exc
        if todo is None:
            raise NotFoundError(f"Todo not found: {todo_id}")
        return todo

    def update(
        self,
        todo_id: str,
        *,
        completed: Optional[bool] = None,
        order: Optional[int] = None,
    ) -> TodoItem:
        """Partial update. Completion and order are independent of each other.

        A new ``order`` is the todo's target index in the displayed list; the
        whole list is renumbered so stored orders stay unique and contiguous.
        """
        if not todo_id:
            raise ValidationError("id is required")
        try:
            todo = self.repository.get(todo_id)
            if todo is None:
                raise NotFoundError(f"Todo not found: {todo_id}")
            if completed is not None:
                todo = self.repository.set_completed(todo_id, completed)
            if order is not None:
                todo = self.repository.move(todo_id, order)
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to update todo") from exc
        if todo is None:
            raise NotFoundError(f"Todo not found: {todo_id}")
        return todo

    def reorder(self, ordered_ids: List[str]) -> List[TodoItem]:
        """Renumber todos to follow ``ordered_ids``."""
        if not ordered_ids:
            raise ValidationError("ids are required")
        try:
            unknown = self.repository.resequence(self.owner_id, ordered_ids)
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to reorder todos") from exc
        if unknown:
            raise NotFoundError(f"Todo not found: {', '.join(unknown)}")
        return self.list()

    def delete(self, todo_id: str) -> bool:
        if not todo_id:
            raise ValidationError("ID is required")
        try:
            deleted = self.repository.delete(todo_id)
        except sqlite3.Error as exc:
            raise UpstreamError("Failed to delete todo") from exc
        if not deleted:
            raise NotFoundError(f"Todo not found: {todo_id}")
        logger.debug("Deleted todo %s", todo_id)
        return True
