"""
Timestamp helpers for response documents.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from logo_shared.types import Locale

EN_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

AR_MONTHS = (
    "يناير",
    "فبراير",
    "مارس",
    "أبريل",
    "مايو",
    "يونيو",
    "يوليو",
    "أغسطس",
    "سبتمبر",
    "أكتوبر",
    "نوفمبر",
    "ديسمبر",
)


def to_datetime(value: Any) -> Optional[datetime]:
    """Accept datetimes, epoch seconds or ISO strings; naive values are UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        dt = datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(value: Any) -> Optional[str]:
    dt = to_datetime(value)
    if dt is None:
        return None
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_timestamp(value: Any, locale: Locale) -> Optional[str]:
    """
    Human-readable UTC timestamp.

    en: "October 15, 2025 at 09:03 PM"
    ar: "15 أكتوبر 2025، 09:03 م"
    """
    dt = to_datetime(value)
    if dt is None:
        return None
    hour = dt.hour % 12 or 12
    if locale == Locale.AR:
        period = "م" if dt.hour >= 12 else "ص"
        return (
            f"{dt.day} {AR_MONTHS[dt.month - 1]} {dt.year}، "
            f"{hour:02d}:{dt.minute:02d} {period}"
        )
    period = "PM" if dt.hour >= 12 else "AM"
    return (
        f"{EN_MONTHS[dt.month - 1]} {dt.day}, {dt.year} at "
        f"{hour:02d}:{dt.minute:02d} {period}"
    )
