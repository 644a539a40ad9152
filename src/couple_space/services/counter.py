"""Relationship duration arithmetic."""

import calendar
from datetime import UTC, datetime

from couple_space.domain.couples import RelationshipDuration

_ZERO = RelationshipDuration(years=0, months=0, days=0, hours=0, minutes=0, seconds=0)


def relationship_duration(
    start: datetime, now: datetime | None = None
) -> RelationshipDuration:
    """Break the time since ``start`` into calendar units.

    Whole years are counted first, then whole months from that anniversary,
    then the remainder as days, hours, minutes and seconds. A start in the
    future counts as zero.
    """
    current = _aware(now or datetime.now(tz=UTC))
    start = _aware(start)
    if current <= start:
        return _ZERO

    months_total = (current.year - start.year) * 12 + current.month - start.month
    if _add_months(start, months_total) > current:
        months_total -= 1
    years, months = divmod(months_total, 12)

    anchor = _add_months(start, months_total)
    remainder = current - anchor
    hours, rest = divmod(remainder.seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return RelationshipDuration(
        years=years,
        months=months,
        days=remainder.days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def _add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months, clamping to the last day of shorter months."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
