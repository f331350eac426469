from __future__ import annotations

import os
import sqlite3
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from .models import JournalEntry


class JournalRepository:
    """SQLiteベースのジャーナルエントリ管理。暦日ごとに1件。"""

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
        """journal_entriesテーブルの初期化（entry_dayに一意制約）"""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS journal_entries (
                    id TEXT PRIMARY KEY,
                    content TEXT NOT NULL,
                    date TEXT NOT NULL,
                    entry_day TEXT NOT NULL UNIQUE,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_journal_date ON journal_entries(date DESC)"
            )
            conn.commit()

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
        return JournalEntry(
            id=row["id"],
            content=row["content"],
            date=row["date"],
            entry_day=row["entry_day"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def list(self) -> list[JournalEntry]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM journal_entries ORDER BY date DESC"
            ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def get_by_day(self, day: date) -> Optional[JournalEntry]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM journal_entries WHERE entry_day = ?", (day.isoformat(),)
            ).fetchone()
        return self._row_to_entry(row) if row else None

    def upsert(self, content: str, moment: datetime, day: date) -> JournalEntry:
        """暦日をキーに作成または本文を更新する。

        既存エントリがある場合は content と updated_at のみ書き換え、
        date は最初に保存された値のまま残る。1文で実行されるため
        同日への同時保存でも重複行は生まれない。
        """
        now = self._now()
        stored_date = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO journal_entries (id, content, date, entry_day, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(entry_day) DO UPDATE SET
                    content = excluded.content,
                    updated_at = excluded.updated_at
                """,
                (uuid.uuid4().hex, content, stored_date, day.isoformat(), now, now),
            )
            conn.commit()
            row = conn.execute(
                "SELECT * FROM journal_entries WHERE entry_day = ?", (day.isoformat(),)
            ).fetchone()
        return self._row_to_entry(row)

    def count(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM journal_entries").fetchone()[0]
