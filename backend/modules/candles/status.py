"""
Candle temporal state resolution.

Pure functions that derive the user-facing lifecycle state of a candle and
its remaining burn time from raw timestamps. Every surface (feed, detail,
dashboard, map) goes through these helpers so they agree with each other.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from .models import Candle, CandleStatus, CandleType, CandleTypeMeta


DEFAULT_LANGUAGE = "ru"

DateLike = Union[datetime, str]

_STATUS_LABELS: dict[str, dict[CandleStatus, str]] = {
    "ru": {
        CandleStatus.ACTIVE: "Активна",
        CandleStatus.EXTINGUISHED: "Погашена вручную",
        CandleStatus.EXPIRED: "Погасла",
    },
    "en": {
        CandleStatus.ACTIVE: "Active",
        CandleStatus.EXTINGUISHED: "Extinguished",
        CandleStatus.EXPIRED: "Burned out",
    },
}

_REMAINING_FORMATS: dict[str, dict[str, str]] = {
    "ru": {
        "expiring": "Скоро погаснет",
        "minutes": "Осталось ~{value} мин",
        "hours": "Осталось ~{value} ч",
        "days": "Осталось ~{value} дн",
    },
    "en": {
        "expiring": "About to expire",
        "minutes": "~{value} min left",
        "hours": "~{value} h left",
        "days": "~{value} days left",
    },
}

_TYPE_META: dict[CandleType, dict[str, str]] = {
    CandleType.CALM: {"ru": "Спокойствие", "en": "Calm", "emoji": "🕊️"},
    CandleType.SUPPORT: {"ru": "Поддержка", "en": "Support", "emoji": "🤝"},
    CandleType.MEMORY: {"ru": "Память", "en": "Memory", "emoji": "🌙"},
    CandleType.GRATITUDE: {"ru": "Благодарность", "en": "Gratitude", "emoji": "✨"},
    CandleType.FOCUS: {"ru": "Фокус", "en": "Focus", "emoji": "🎯"},
}

_DEFAULT_TYPE_META = {"ru": "Свеча", "en": "Candle", "emoji": "🕯️"}

_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)


def to_datetime(value: DateLike) -> datetime:
    """
    Coerce an ISO-8601 string or datetime into an aware UTC-based datetime.

    Naive values are treated as UTC. A trailing ``Z`` is accepted.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _resolve_now(now: Optional[datetime]) -> datetime:
    return to_datetime(now) if now is not None else datetime.now(timezone.utc)


def _messages(table: dict, language: str) -> dict:
    return table.get(language) or table[DEFAULT_LANGUAGE]


def compute_effective_status(
    candle: Candle,
    now: Optional[datetime] = None,
) -> CandleStatus:
    """
    Compute the status actually shown to users.

    A candle extinguished by its owner stays extinguished no matter what
    ``expires_at`` says. Otherwise the candle is active on the half-open
    interval ``[created_at, expires_at)``; reaching ``expires_at`` exactly
    already counts as expired.

    Args:
        candle: Stored candle record
        now: Reference time (defaults to the current UTC time)

    Returns:
        The effective CandleStatus
    """
    if candle.status == CandleStatus.EXTINGUISHED:
        return CandleStatus.EXTINGUISHED

    if to_datetime(candle.expires_at) <= _resolve_now(now):
        return CandleStatus.EXPIRED

    return CandleStatus.ACTIVE


def format_remaining_time(
    expires_at: DateLike,
    now: Optional[datetime] = None,
    language: str = DEFAULT_LANGUAGE,
) -> str:
    """
    Render the time left before a candle burns out.

    Buckets (mutually exclusive, checked in order):
        - nothing left: fixed "about to expire" text
        - under an hour: whole minutes, never less than 1
        - under a day: hours with one decimal
        - otherwise: days with one decimal

    Exactly one hour lands in the hour bucket and exactly one day lands in
    the day bucket. A value that would round up to "60 min" or "24.0 h" is
    shown in the next bucket instead.

    Args:
        expires_at: Expiry instant (datetime or ISO-8601 string)
        now: Reference time (defaults to the current UTC time)
        language: Message language ("ru" or "en")

    Returns:
        Localized remaining-time string
    """
    messages = _messages(_REMAINING_FORMATS, language)
    remaining = to_datetime(expires_at) - _resolve_now(now)

    if remaining <= timedelta(0):
        return messages["expiring"]

    if remaining < _HOUR:
        minutes = max(1, math.floor(remaining / timedelta(minutes=1) + 0.5))
        if minutes < 60:
            return messages["minutes"].format(value=minutes)

    hours = f"{remaining / _HOUR:.1f}"
    if remaining < _DAY and hours != "24.0":
        return messages["hours"].format(value=hours)

    return messages["days"].format(value=f"{remaining / _DAY:.1f}")


def get_status_label(status: CandleStatus, language: str = DEFAULT_LANGUAGE) -> str:
    """Display label for a candle status."""
    return _messages(_STATUS_LABELS, language)[CandleStatus(status)]


def format_short_date(value: Union[DateLike, date]) -> str:
    """
    Format a timestamp as ``DD.MM.YY``.

    The separator is always a dot regardless of the process locale.
    """
    if not isinstance(value, datetime) and isinstance(value, date):
        return value.strftime("%d.%m.%y")
    return to_datetime(value).strftime("%d.%m.%y")


def get_candle_type_meta(
    candle_type: Optional[Union[CandleType, str]],
    language: str = DEFAULT_LANGUAGE,
) -> CandleTypeMeta:
    """
    Get label and emoji for a candle type.

    Unknown or missing types get the generic candle metadata.
    """
    try:
        resolved = CandleType(candle_type) if candle_type else None
    except ValueError:
        resolved = None

    meta = _TYPE_META.get(resolved, _DEFAULT_TYPE_META) if resolved else _DEFAULT_TYPE_META
    label = meta.get(language) or meta[DEFAULT_LANGUAGE]
    return CandleTypeMeta(id=resolved, label=label, emoji=meta["emoji"])
