"""Tests for relationship duration arithmetic."""

from datetime import UTC, datetime

from couple_space.domain.couples import RelationshipDuration
from couple_space.services.counter import relationship_duration


def test_duration_breaks_into_calendar_units() -> None:
    start = datetime(2020, 6, 15, 10, 0, 0, tzinfo=UTC)
    now = datetime(2023, 8, 20, 13, 5, 9, tzinfo=UTC)

    duration = relationship_duration(start, now)

    assert duration == RelationshipDuration(
        years=3, months=2, days=5, hours=3, minutes=5, seconds=9
    )


def test_duration_borrows_month_when_day_not_reached() -> None:
    start = datetime(2022, 1, 20, tzinfo=UTC)
    now = datetime(2022, 3, 10, tzinfo=UTC)

    duration = relationship_duration(start, now)

    assert (duration.years, duration.months, duration.days) == (0, 1, 18)


def test_duration_clamps_month_end() -> None:
    start = datetime(2023, 1, 31, tzinfo=UTC)
    now = datetime(2023, 3, 1, tzinfo=UTC)

    duration = relationship_duration(start, now)

    assert (duration.months, duration.days) == (1, 1)


def test_duration_for_future_start_is_zero() -> None:
    start = datetime(2030, 1, 1, tzinfo=UTC)
    now = datetime(2024, 1, 1, tzinfo=UTC)

    duration = relationship_duration(start, now)

    assert duration == RelationshipDuration(0, 0, 0, 0, 0, 0)


def test_duration_treats_naive_dates_as_utc() -> None:
    start = datetime(2024, 1, 1, 0, 0)
    now = datetime(2024, 1, 1, 0, 0, 30, tzinfo=UTC)

    assert relationship_duration(start, now).seconds == 30
