"""Korea Standard Time (UTC+9) calendar helpers.

Lotto 6/45 is drawn every Saturday at 20:45 KST; round 1 was drawn on
2002-12-07 and each following round is exactly one week later.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from lottori.constants import LOTTO_DRAW_HOUR, LOTTO_DRAW_MINUTE, LOTTO_FIRST_DRAW_DATE

KST = timezone(timedelta(hours=9), name="KST")

_SATURDAY = 5


def now_kst() -> datetime:
    return datetime.now(KST)


def to_kst(moment: datetime) -> datetime:
    """Convert an aware datetime to KST; naive values are taken as UTC."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(KST)


def draw_date_for_round(round_no: int) -> date:
    if round_no < 1:
        raise ValueError("round_no must be >= 1")
    return LOTTO_FIRST_DRAW_DATE + timedelta(days=7 * (int(round_no) - 1))


def next_draw_at(now: datetime | None = None) -> datetime:
    """Next Saturday 20:45 KST strictly after ``now``."""

    current = to_kst(now) if now is not None else now_kst()
    days_ahead = (_SATURDAY - current.weekday()) % 7
    candidate = (current + timedelta(days=days_ahead)).replace(
        hour=LOTTO_DRAW_HOUR, minute=LOTTO_DRAW_MINUTE, second=0, microsecond=0
    )
    if candidate <= current:
        candidate += timedelta(days=7)
    return candidate


def seconds_until(target: datetime, now: datetime | None = None) -> int:
    current = to_kst(now) if now is not None else now_kst()
    return max(0, int((target - current).total_seconds()))


def daily_seed(day: date) -> int:
    """YYYYMMDD integer, e.g. 20261019."""

    return day.year * 10_000 + day.month * 100 + day.day


def next_midnight(now: datetime | None = None) -> datetime:
    """Start of the next KST day; lucky numbers change at this moment."""

    current = to_kst(now) if now is not None else now_kst()
    return (current + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
