"""Datetime conversion and calendar window helpers.

Tasks carry naive local wall-clock datetimes. Storage uses integer epoch
milliseconds, so every conversion between the two goes through this module
and both storage backends see exactly the same values.
"""

from __future__ import annotations

import calendar
import datetime

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_ONE_MS = datetime.timedelta(milliseconds=1)


def to_local_naive(value: datetime.datetime) -> datetime.datetime:
    """Return ``value`` as a naive datetime in the local timezone."""

    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def to_epoch_ms(value: datetime.datetime) -> int:
    """Convert a datetime to integer milliseconds since the Unix epoch.

    Naive values are interpreted as local time. Sub-millisecond precision is
    truncated.
    """

    aware = value.astimezone() if value.tzinfo is None else value
    return (aware - _EPOCH) // _ONE_MS


def from_epoch_ms(value: int) -> datetime.datetime:
    """Convert epoch milliseconds back to a naive local datetime."""

    aware = _EPOCH + datetime.timedelta(milliseconds=int(value))
    return aware.astimezone().replace(tzinfo=None)


def _as_date(value: datetime.date | datetime.datetime) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return to_local_naive(value).date()
    return value


def day_bounds(
    day: datetime.date | datetime.datetime,
) -> tuple[datetime.datetime, datetime.datetime]:
    """Return ``(00:00:00, 23:59:59)`` for the calendar day containing ``day``."""

    date_obj = _as_date(day)
    start = datetime.datetime(date_obj.year, date_obj.month, date_obj.day)
    end = start.replace(hour=23, minute=59, second=59)
    return start, end


def month_bounds(
    month: datetime.date | datetime.datetime,
) -> tuple[datetime.datetime, datetime.datetime]:
    """Return the first instant and the last ``23:59:59`` of ``month``'s month."""

    date_obj = _as_date(month)
    last_day = calendar.monthrange(date_obj.year, date_obj.month)[1]
    start = datetime.datetime(date_obj.year, date_obj.month, 1)
    end = datetime.datetime(date_obj.year, date_obj.month, last_day, 23, 59, 59)
    return start, end


def hour_window(
    now: datetime.datetime,
) -> tuple[datetime.datetime, datetime.datetime]:
    """Return ``[HH:00:00, HH+1:00:00)`` around ``now`` as naive local datetimes."""

    local_now = to_local_naive(now)
    start = local_now.replace(minute=0, second=0, microsecond=0)
    return start, start + datetime.timedelta(hours=1)


__all__ = [
    "day_bounds",
    "from_epoch_ms",
    "hour_window",
    "month_bounds",
    "to_epoch_ms",
    "to_local_naive",
]
