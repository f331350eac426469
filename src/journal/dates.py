"""日付境界の計算ヘルパー

エントリの「1日」は設定されたタイムゾーン（未設定ならサーバーのローカル時刻）の
00:00:00.000 から 23:59:59.999 までとして扱う。

タイムゾーン未設定は ``None`` で表す。ローカル時刻への変換は ``astimezone()`` に
任せ、その瞬間ごとのオフセット（夏時間を含む）で判定する。
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.daybook.exceptions import ValidationError

DateInput = Union[str, date, datetime]


def resolve_timezone(name: Optional[str] = None) -> Optional[tzinfo]:
    """タイムゾーン名を解決する（空ならNone = サーバーのローカル時刻）"""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as exc:
        raise ValidationError(f"Unknown timezone: {name}") from exc


def _localize(naive: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def parse_entry_date(value: DateInput, tz: Optional[tzinfo]) -> datetime:
    """入力値をタイムゾーン付きの日時に変換する

    ``YYYY-MM-DD`` はその日の 00:00 として扱い、
    タイムゾーン無しの日時は ``tz`` の時刻とみなす。
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("date is required")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            if len(text) == 10:
                parsed = datetime.combine(date.fromisoformat(text), time.min)
            else:
                parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValidationError(f"Invalid date: {value}") from exc
    else:
        raise ValidationError(f"Invalid date: {value!r}")

    if parsed.tzinfo is None:
        parsed = _localize(parsed, tz)
    return parsed


def calendar_day(moment: datetime, tz: Optional[tzinfo]) -> date:
    """日時が属する暦日（tz基準、Noneならローカル時刻）"""
    return moment.astimezone(tz).date()


def today(tz: Optional[tzinfo]) -> date:
    return datetime.now(tz).date()
