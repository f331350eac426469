from __future__ import annotations

import os
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from .models import TodoItem


class TodoRepository:
    """SQLiteベースのTODO管理。並び順はpositionカラムで保持。"""

    def __init__(self, db_path: Optional[Path] = None):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "daybook.db"
        env_path = os.getenv("DAYBOOK_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        else:
            self.db_path = default_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        """todosテーブルの初期化"""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id TEXT PRIMARY KEY,
                    content TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    position INTEGER NOT NULL,
                    owner_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE UNIQUE INDEX IF NOT EXISTS idx_todos_owner_position "
                "ON todos(owner_id, position)"
            )
            conn.commit()

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> TodoItem:
        return TodoItem(
            id=row["id"],
            content=row["content"],
            completed=bool(row["completed"]),
            order=row["position"],
            owner_id=row["owner_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _ordered_ids(conn: sqlite3.Connection, owner_id: str) -> List[str]:
        rows = conn.execute(
            "SELECT id FROM todos WHERE owner_id = ? ORDER BY position ASC, created_at ASC",
            (owner_id,),
        ).fetchall()
        return [row["id"] for row in rows]

    def _write_positions(self, conn: sqlite3.Connection, ids: Iterable[str]) -> None:
        """ids の並び順で position を 0 から振り直す

        (owner_id, position) はUNIQUEなので、一度負の値へ退避してから確定値を書く。
        位置が変わったアイテムだけ updated_at を進める。
        """
        ids = list(ids)
        if not ids:
            return
        placeholders = ", ".join("?" for _ in ids)
        before = {
            row["id"]: (row["position"], row["updated_at"])
            for row in conn.execute(
                f"SELECT id, position, updated_at FROM todos WHERE id IN ({placeholders})",
                ids,
            )
        }
        now = self._now()
        conn.executemany(
            "UPDATE todos SET position = ? WHERE id = ?",
            [(-1 - index, todo_id) for index, todo_id in enumerate(ids)],
        )
        conn.executemany(
            "UPDATE todos SET position = ?, updated_at = ? WHERE id = ?",
            [
                (
                    index,
                    before[todo_id][1] if before[todo_id][0] == index else now,
                    todo_id,
                )
                for index, todo_id in enumerate(ids)
            ],
        )

    def list(self, owner_id: str) -> list[TodoItem]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM todos
                WHERE owner_id = ?
                ORDER BY position ASC, created_at ASC
                """,
                (owner_id,),
            ).fetchall()
        return [self._row_to_item(row) for row in rows]

    def get(self, todo_id: str) -> Optional[TodoItem]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM todos WHERE id = ?", (todo_id,)).fetchone()
        return self._row_to_item(row) if row else None

    def create(self, content: str, owner_id: str) -> TodoItem:
        """末尾（既存の最大position + 1、空なら0）に追加"""
        now = self._now()
        todo_id = uuid.uuid4().hex
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO todos (id, content, completed, position, owner_id, created_at, updated_at)
                SELECT ?, ?, 0, COALESCE(MAX(position) + 1, 0), ?, ?, ?
                FROM todos WHERE owner_id = ?
                """,
                (todo_id, content, owner_id, now, now, owner_id),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM todos WHERE id = ?", (todo_id,)).fetchone()
        return self._row_to_item(row)

    def set_completed(self, todo_id: str, completed: bool) -> Optional[TodoItem]:
        with self._connect() as conn:
            conn.execute(
                "UPDATE todos SET completed = ?, updated_at = ? WHERE id = ?",
                (int(completed), self._now(), todo_id),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM todos WHERE id = ?", (todo_id,)).fetchone()
        return self._row_to_item(row) if row else None

    def move(self, todo_id: str, index: int) -> Optional[TodoItem]:
        """アイテムを並びのindex番目へ移動し、所有者の全アイテムを0から再採番する"""
        with self._connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            row = conn.execute("SELECT owner_id FROM todos WHERE id = ?", (todo_id,)).fetchone()
            if row is None:
                conn.rollback()
                return None
            ids = self._ordered_ids(conn, row["owner_id"])
            ids.remove(todo_id)
            index = max(0, min(index, len(ids)))
            ids.insert(index, todo_id)
            self._write_positions(conn, ids)
            conn.commit()
            row = conn.execute("SELECT * FROM todos WHERE id = ?", (todo_id,)).fetchone()
        return self._row_to_item(row)

    def resequence(self, owner_id: str, ordered_ids: List[str]) -> List[str]:
        """指定順に再採番する。未知のIDのリストを返し、その場合は何も書き換えない。

        リストに含まれないアイテムは既存の相対順のまま後ろに並ぶ。
        """
        with self._connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            current = self._ordered_ids(conn, owner_id)
            known = set(current)
            unknown = [todo_id for todo_id in ordered_ids if todo_id not in known]
            if unknown:
                conn.rollback()
                return unknown
            seen = set()
            listed = []
            for todo_id in ordered_ids:
                if todo_id not in seen:
                    seen.add(todo_id)
                    listed.append(todo_id)
            rest = [todo_id for todo_id in current if todo_id not in seen]
            self._write_positions(conn, listed + rest)
            conn.commit()
        return []

    def delete(self, todo_id: str) -> bool:
        """削除し、残りのアイテムを詰めて再採番する"""
        with self._connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            row = conn.execute("SELECT owner_id FROM todos WHERE id = ?", (todo_id,)).fetchone()
            if row is None:
                conn.rollback()
                return False
            conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))
            self._write_positions(conn, self._ordered_ids(conn, row["owner_id"]))
            conn.commit()
        return True
