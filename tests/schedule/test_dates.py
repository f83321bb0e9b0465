"""Tests for training date enumeration.

Tests verify that enumeration:
- Keeps only selected weekdays, in ascending order
- Stops on the day count, or on the end date even when it is not a training day
- Stops on whichever condition comes first when both are given
- Honors the safety cap
"""

from datetime import date

from focusramp.schedule.dates import enumerate_training_dates
from focusramp.schedule.enums import Weekday
from focusramp.schedule.models import ScheduleConfig

MWF = frozenset({Weekday.MON, Weekday.WED, Weekday.FRI})


def _config(**overrides) -> ScheduleConfig:
    values = {
        "start_date": date(2025, 1, 6),  # Monday
        "target_daily_minutes": 60,
        "training_weekdays": MWF,
    }
    values.update(overrides)
    return ScheduleConfig(**values)


def test_count_based_dates_follow_weekday_filter():
    dates = enumerate_training_dates(_config(training_days_count=3))

    assert dates == [date(2025, 1, 6), date(2025, 1, 8), date(2025, 1, 10)]


def test_start_date_skipped_when_not_a_training_day():
    dates = enumerate_training_dates(_config(start_date=date(2025, 1, 7), training_days_count=2))

    assert dates == [date(2025, 1, 8), date(2025, 1, 10)]


def test_end_date_is_inclusive():
    dates = enumerate_training_dates(_config(end_date=date(2025, 1, 10)))

    assert dates == [date(2025, 1, 6), date(2025, 1, 8), date(2025, 1, 10)]


def test_end_date_on_rest_day_still_terminates():
    # Sunday end date, last training day is the Friday before
    dates = enumerate_training_dates(_config(end_date=date(2025, 1, 12)))

    assert dates == [date(2025, 1, 6), date(2025, 1, 8), date(2025, 1, 10)]


def test_count_reached_before_end_date():
    dates = enumerate_training_dates(_config(end_date=date(2025, 3, 1), training_days_count=2))

    assert dates == [date(2025, 1, 6), date(2025, 1, 8)]


def test_end_date_reached_before_count():
    dates = enumerate_training_dates(_config(end_date=date(2025, 1, 8), training_days_count=10))

    assert dates == [date(2025, 1, 6), date(2025, 1, 8)]


def test_every_day_selection_is_contiguous():
    config = _config(training_weekdays=frozenset(Weekday), training_days_count=7)

    dates = enumerate_training_dates(config)

    assert [d.day for d in dates] == [6, 7, 8, 9, 10, 11, 12]


def test_safety_cap_truncates_long_walks():
    config = _config(training_weekdays=frozenset(Weekday), end_date=date(2040, 1, 1))

    dates = enumerate_training_dates(config, max_dates=50)

    assert len(dates) == 50
    assert dates == sorted(set(dates))
