"""Exhibition lifecycle status derived from its date range."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from gallery.models.common import coerce_date
from gallery.models.exhibitions import ExhibitionStatus

Moment = Union[date, datetime]


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def _as_date(now: Moment) -> date:
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date()
    return now


def derive_status(
    start_date: Any,
    end_date: Any,
    now: Optional[Moment] = None,
) -> ExhibitionStatus:
    """Return planned, active or completed for ``now``.

    Comparison is by calendar date in UTC with both bounds inclusive, so an
    exhibition is active on its first and last day.
    """

    start = coerce_date(start_date, "Start date")
    end = coerce_date(end_date, "End date")
    current = _as_date(now) if now is not None else today_utc()
    if current < start:
        return ExhibitionStatus.PLANNED
    if current > end:
        return ExhibitionStatus.COMPLETED
    return ExhibitionStatus.ACTIVE
