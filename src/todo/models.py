from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TodoItem:
    """永続化済みTodoアイテムの表現。

    ``order`` は所有者ごとの並び順で、常に 0 から連番になるよう再採番される。
    """

    id: str
    content: str
    completed: bool
    order: int
    owner_id: str
    created_at: str
    updated_at: str
