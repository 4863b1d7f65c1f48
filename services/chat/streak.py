# services/chat/streak.py
"""
Streak engine: next streak state from the previous one and today's date.

Transitions (on the relationship between `last_date` and `today`):
- NEVER:       no last_date            -> count 1
- SAME_DAY:    last_date == today      -> unchanged
- CONSECUTIVE: last_date == today - 1  -> count + 1
- GAP:         anything else           -> count 1 (today is a fresh start)

Dates are whole calendar days in one configured time zone, never
elapsed hours and never the machine's local zone.
"""

from __future__ import annotations
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from services.errors import ValidationError
from .models import Streak


class StreakTransition(str, Enum):
    NEVER = "never"
    SAME_DAY = "same_day"
    CONSECUTIVE = "consecutive"
    GAP = "gap"


def parse_day(value: Union[str, date]) -> date:
    """Parse a YYYY-MM-DD calendar date."""
    if isinstance(value, datetime):
        raise ValidationError(f"Expected a calendar date, got a timestamp: {value!r}")
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Malformed streak date: {value!r}")


def resolve_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown STREAK_TIMEZONE: {name}")


def calendar_day(moment: datetime, tz: tzinfo = timezone.utc) -> date:
    """Calendar date of an aware timestamp in `tz`."""
    if moment.tzinfo is None:
        raise ValueError("Streak clock must return timezone-aware datetimes")
    return moment.astimezone(tz).date()


def classify(last_date: Optional[Union[str, date]], today: Union[str, date]) -> StreakTransition:
    today = parse_day(today)
    if last_date is None:
        return StreakTransition.NEVER

    delta = (today - parse_day(last_date)).days
    if delta == 0:
        return StreakTransition.SAME_DAY
    if delta == 1:
        return StreakTransition.CONSECUTIVE
    # More than a day apart, or today is before last_date (clock skew).
    return StreakTransition.GAP


def advance(prev: Streak, today: Union[str, date]) -> Streak:
    """Return the streak after a message sent on `today`. Pure."""
    today = parse_day(today)
    transition = classify(prev.last_date, today)

    if transition is StreakTransition.SAME_DAY:
        return prev
    if transition is StreakTransition.CONSECUTIVE:
        count = prev.count + 1
    else:
        count = 1

    return Streak(
        count=count,
        last_date=today.isoformat(),
        participants=list(prev.participants),
    )
