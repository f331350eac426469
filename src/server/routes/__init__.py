"""Route registration helpers."""

from .auth import register_auth_routes
from .entries import register_entry_routes
from .pages import register_page_routes
from .summary import register_summary_routes
from .todo import register_todo_routes

__all__ = [
    "register_auth_routes",
    "register_entry_routes",
    "register_page_routes",
    "register_summary_routes",
    "register_todo_routes",
]
