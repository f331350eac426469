"""Todo management shared by the HTTP server and the CLI."""

from .models import TodoItem
from .repository import TodoRepository
from .service import TodoService

__all__ = ["TodoItem", "TodoRepository", "TodoService"]
