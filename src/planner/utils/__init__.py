"""Utility helpers for the planner package."""

from .datetime_utils import (
    day_bounds,
    from_epoch_ms,
    hour_window,
    month_bounds,
    to_epoch_ms,
    to_local_naive,
)

__all__ = [
    "day_bounds",
    "from_epoch_ms",
    "hour_window",
    "month_bounds",
    "to_epoch_ms",
    "to_local_naive",
]
