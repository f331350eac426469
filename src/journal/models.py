from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class JournalEntry:
    """永続化済みジャーナルエントリの表現。

    ``date`` は最初に保存された瞬間（UTC ISO8601）で、以後の保存では変わらない。
    ``entry_day`` はその暦日（YYYY-MM-DD）で、1日1件の一意キーになる。
    """

    id: str
    content: str
    date: str
    entry_day: str
    created_at: str
    updated_at: str
