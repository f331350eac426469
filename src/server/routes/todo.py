"""Todo endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from fastapi import FastAPI

from src.daybook.exceptions import DaybookError, UpstreamError

from ..dependencies import get_todo_service, serialize_todo
from ..schemas import (
    DeleteResponse,
    TodoCreateRequest,
    TodoReorderRequest,
    TodoResponse,
    TodoUpdateRequest,
)

logger = logging.getLogger(__name__)


def register_todo_routes(app: FastAPI) -> None:
    """Register todo CRUD endpoints."""

    @app.get("/todos", response_model=List[TodoResponse])
    async def list_todos() -> List[TodoResponse]:
        """List todos in ascending order."""
        service = get_todo_service()
        try:
            todos = await asyncio.to_thread(service.list)
            return [serialize_todo(todo) for todo in todos]
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Failed to fetch todos: %s", exc)
            raise UpstreamError("Failed to fetch todos") from exc

    @app.post("/todos", response_model=TodoResponse)
    async def create_todo(request: TodoCreateRequest) -> TodoResponse:
        """Append a new todo."""
        service = get_todo_service()
        try:
            todo = await asyncio.to_thread(service.create, request.content)
            return serialize_todo(todo)
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Failed to create todo: %s", exc)
            raise UpstreamError("Failed to create todo") from exc

    @app.put("/todos/reorder", response_model=List[TodoResponse])
    async def reorder_todos(request: TodoReorderRequest) -> List[TodoResponse]:
        """Renumber todos to follow the given id list."""
        service = get_todo_service()
        try:
            todos = await asyncio.to_thread(service.reorder, request.ids)
            return [serialize_todo(todo) for todo in todos]
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Failed to reorder todos: %s", exc)
            raise UpstreamError("Failed to reorder todos") from exc

    @app.put("/todos", response_model=TodoResponse)
    async def update_todo(request: TodoUpdateRequest) -> TodoResponse:
        """Toggle completion and/or move a todo."""
        service = get_todo_service()
        try:
            todo = await asyncio.to_thread(
                lambda: service.update(
                    request.id,
                    completed=request.completed,
                    order=request.order,
                )
            )
            return serialize_todo(todo)
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Failed to update todo: %s", exc)
            raise UpstreamError("Failed to update todo") from exc

    @app.delete("/todos", response_model=DeleteResponse)
    async def delete_todo(id: Optional[str] = None) -> DeleteResponse:
        """Delete a todo by its id query parameter."""
        service = get_todo_service()
        try:
            await asyncio.to_thread(service.delete, id)
            return DeleteResponse(success=True)
        except DaybookError:
            raise
        except Exception as exc:
            logger.exception("Failed to delete todo: %s", exc)
            raise UpstreamError("Failed to delete todo") from exc
