"""Tests for CalendarMath — arithmetic, boundaries, ages, business days."""

from __future__ import annotations

from datetime import date

import pytest

from datewise.domain.calendar_math import CalendarMath
from datewise.domain.clock import FixedClock
from datewise.domain.errors import InvalidArgumentError, InvalidDateError, UnknownPeriodError
from datewise.domain.types import Unit
from datewise.domain.values import BusinessDayPolicy


@pytest.fixture
def calc(clock: FixedClock) -> CalendarMath:
    return CalendarMath(clock)


def _math_at(now: str) -> CalendarMath:
    return CalendarMath(FixedClock(now))


class TestAdd:
    def test_month_clamps_to_february(self, calc: CalendarMath) -> None:
        assert calc.add("2025-01-31 10:00:00", 1, "months") == "2025-02-28 10:00:00"

    def test_month_clamps_to_leap_day(self, calc: CalendarMath) -> None:
        assert calc.add("2024-01-31 00:00:00", 1, "months") == "2024-02-29 00:00:00"

    def test_year_from_leap_day(self, calc: CalendarMath) -> None:
        assert calc.add("2024-02-29 08:00:00", 1, Unit.YEARS) == "2025-02-28 08:00:00"

    def test_single_jump_differs_from_two_half_jumps(self, calc: CalendarMath) -> None:
        start = "2024-08-31 00:00:00"
        stepped = calc.add(calc.add(start, 6, "months"), 6, "months")
        assert stepped == "2025-08-28 00:00:00"
        assert calc.add(start, 12, "months") == "2025-08-31 00:00:00"

    def test_fixed_units(self, calc: CalendarMath) -> None:
        assert calc.add("2025-06-15 14:30:00", 3, "days") == "2025-06-18 14:30:00"
        assert calc.add("2025-06-15 14:30:00", 90, "minutes") == "2025-06-15 16:00:00"
        assert calc.add("2025-06-15 14:30:00", 2, "weeks") == "2025-06-29 14:30:00"

    def test_singular_unit(self, calc: CalendarMath) -> None:
        assert calc.add("2025-06-15", 1, "day") == "2025-06-16 00:00:00"

    def test_negative_amount_subtracts(self, calc: CalendarMath) -> None:
        assert calc.add("2025-03-31", -1, "months") == "2025-02-28 00:00:00"

    def test_subtract_is_negated_add(self, calc: CalendarMath) -> None:
        assert calc.subtract("2025-03-31", 1, "month") == calc.add("2025-03-31", -1, "month")

    @pytest.mark.parametrize("unit", ["seconds", "minutes", "hours", "days", "weeks"])
    def test_fixed_units_invert_exactly(self, calc: CalendarMath, unit: str) -> None:
        start = "2025-03-09 01:59:59"
        assert calc.subtract(calc.add(start, 37, unit), 37, unit) == start

    def test_invalid_unit(self, calc: CalendarMath) -> None:
        with pytest.raises(InvalidArgumentError):
            calc.add("2025-06-15", 1, "fortnights")

    def test_invalid_date(self, calc: CalendarMath) -> None:
        with pytest.raises(InvalidDateError):
            calc.add("someday", 1, "days")


class TestDiff:
    def test_days_and_weeks(self, calc: CalendarMath) -> None:
        assert calc.diff("2025-01-01", "2025-01-08") == 7
        assert calc.diff("2025-01-01", "2025-01-08", "weeks") == 1

    def test_order_does_not_matter(self, calc: CalendarMath) -> None:
        assert calc.diff("2025-01-08", "2025-01-01") == 7

    def test_floor_division(self, calc: CalendarMath) -> None:
        assert calc.diff("2025-06-15 00:00:00", "2025-06-15 23:59:59", "hours") == 23

    def test_months_and_years_use_average_lengths(self, calc: CalendarMath) -> None:
        # 366 days: one 365.25-day year, twelve 30.4375-day months.
        assert calc.diff("2024-01-01", "2025-01-01", "years") == 1
        assert calc.diff("2024-01-01", "2025-01-01", "months") == 12
        # 365 days falls just short of both.
        assert calc.diff("2025-01-01", "2026-01-01", "years") == 0
        assert calc.diff("2025-01-01", "2026-01-01", "months") == 11


class TestElapsed:
    def test_days(self, calc: CalendarMath) -> None:
        assert calc.elapsed("2025-06-14 14:30:00") == 1

    def test_hours(self, calc: CalendarMath) -> None:
        assert calc.elapsed("2025-06-15 12:30:00", "hours") == 2

    @pytest.mark.parametrize("value", [None, "", "0000-00-00 00:00:00", "not a date"])
    def test_unusable_input_is_none(self, calc: CalendarMath, value: str | None) -> None:
        assert calc.elapsed(value) is None


class TestBoundaries:
    def test_day(self, calc: CalendarMath) -> None:
        assert calc.start_of_day("2025-06-15 14:30:00") == "2025-06-15 00:00:00"
        assert calc.end_of_day("2025-06-15 14:30:00") == "2025-06-15 23:59:59"

    def test_week_runs_monday_to_sunday(self, calc: CalendarMath) -> None:
        # 2025-06-15 is a Sunday.
        assert calc.start_of("2025-06-15 14:30:00", "week") == "2025-06-09 00:00:00"
        assert calc.end_of("2025-06-15 14:30:00", "week") == "2025-06-15 23:59:59"

    def test_month_end_in_leap_february(self, calc: CalendarMath) -> None:
        assert calc.end_of("2024-02-10", "month") == "2024-02-29 23:59:59"

    def test_quarter(self, calc: CalendarMath) -> None:
        assert calc.start_of("2025-05-14 10:00:00", "quarter") == "2025-04-01 00:00:00"
        assert calc.end_of("2025-05-14 10:00:00", "quarter") == "2025-06-30 23:59:59"

    def test_year(self, calc: CalendarMath) -> None:
        assert calc.start_of("2025-05-14", "year") == "2025-01-01 00:00:00"
        assert calc.end_of("2025-05-14", "year") == "2025-12-31 23:59:59"

    def test_minute_and_hour(self, calc: CalendarMath) -> None:
        assert calc.start_of("2025-06-15 14:30:45", "minute") == "2025-06-15 14:30:00"
        assert calc.end_of("2025-06-15 14:30:45", "hour") == "2025-06-15 14:59:59"

    def test_unknown_period(self, calc: CalendarMath) -> None:
        with pytest.raises(UnknownPeriodError):
            calc.start_of("2025-06-15", "fortnight")

    def test_quarter_number(self, calc: CalendarMath) -> None:
        assert calc.quarter("2025-05-14") == 2
        assert calc.quarter("2025-12-31 23:59:59") == 4

    def test_is_same_period(self, calc: CalendarMath) -> None:
        assert calc.is_same_period("2025-06-09", "2025-06-15 23:00:00", "week") is True
        assert calc.is_same_period("2025-06-15", "2025-06-16", "week") is False
        assert calc.is_same_period("2025-01-01", "2025-03-31", "quarter") is True


class TestAge:
    def test_leap_day_birthday_not_reached_on_feb_28(self) -> None:
        assert _math_at("2025-02-28 00:00:00").get_age("2000-02-29 00:00:00") == 24

    def test_leap_day_birthday_reached_on_mar_1(self) -> None:
        assert _math_at("2025-03-01 00:00:00").get_age("2000-02-29 00:00:00") == 25

    def test_birthday_today(self, calc: CalendarMath) -> None:
        assert calc.get_age("1990-06-15") == 35

    def test_birthday_tomorrow(self, calc: CalendarMath) -> None:
        assert calc.get_age("1990-06-16") == 34

    def test_future_birth_is_zero(self, calc: CalendarMath) -> None:
        assert calc.get_age("2030-01-01") == 0

    def test_age_in_days(self, calc: CalendarMath) -> None:
        assert calc.get_age_in_days("2025-06-14 14:30:00") == 1

    def test_meets_age_requirement(self, calc: CalendarMath) -> None:
        assert calc.meets_age_requirement("2007-06-15", 18) is True
        assert calc.meets_age_requirement("2007-06-16", 18) is False


class TestExpiration:
    def test_calculate_from_now(self, calc: CalendarMath) -> None:
        assert calc.calculate_expiration(30) == "2025-07-15 14:30:00"

    def test_calculate_from_given_instant(self, calc: CalendarMath) -> None:
        assert calc.calculate_expiration(1, "months", "2025-01-31") == "2025-02-28 00:00:00"

    @pytest.mark.parametrize("duration", [0, -5])
    def test_non_positive_duration(self, calc: CalendarMath, duration: int) -> None:
        with pytest.raises(InvalidArgumentError):
            calc.calculate_expiration(duration)

    def test_is_expired(self, calc: CalendarMath) -> None:
        assert calc.is_expired("2025-06-15 14:00:00") is True
        assert calc.is_expired("2025-06-15 15:00:00") is False

    def test_grace_hours_extend_deadline(self, calc: CalendarMath) -> None:
        assert calc.is_expired("2025-06-15 14:00:00", grace_hours=1) is False

    @pytest.mark.parametrize("value", [None, "", "0000-00-00 00:00:00", "soon"])
    def test_missing_expiry_counts_as_expired(self, calc: CalendarMath, value: str | None) -> None:
        assert calc.is_expired(value) is True


class TestRoundTimestamp:
    @pytest.mark.parametrize(
        ("timestamp", "direction", "expected"),
        [
            (1000, "down", 900),
            (1000, "up", 1200),
            (1000, "nearest", 900),
            (1050, "nearest", 1200),
            (900, "up", 900),
            (900, "nearest", 900),
        ],
    )
    def test_directions(self, timestamp: int, direction: str, expected: int) -> None:
        assert CalendarMath.round_timestamp(timestamp, 300, direction) == expected

    def test_invalid_interval(self) -> None:
        with pytest.raises(InvalidArgumentError):
            CalendarMath.round_timestamp(1000, 0)

    def test_invalid_direction(self) -> None:
        with pytest.raises(InvalidArgumentError):
            CalendarMath.round_timestamp(1000, 300, "sideways")


class TestBusinessDays:
    def test_weekend(self, calc: CalendarMath) -> None:
        assert calc.is_weekend("2025-06-14") is True
        assert calc.is_weekend("2025-06-13") is False

    def test_is_business_day(self, calc: CalendarMath) -> None:
        assert calc.is_business_day("2025-06-13 09:00:00") is True
        assert calc.is_business_day("2025-06-15") is False

    def test_holiday_is_not_a_business_day(self, calc: CalendarMath) -> None:
        policy = BusinessDayPolicy(holidays=frozenset({date(2025, 12, 25)}))
        assert calc.is_business_day("2025-12-25 10:00:00", policy) is False
        assert calc.is_business_day("2025-12-24 10:00:00", policy) is True

    def test_next_business_day_skips_weekend(self, calc: CalendarMath) -> None:
        assert calc.next_business_day("2025-06-13 09:00:00") == "2025-06-16 09:00:00"

    def test_next_business_day_skips_holiday(self, calc: CalendarMath) -> None:
        policy = BusinessDayPolicy.build(holidays=["2025-06-16"])
        assert calc.next_business_day("2025-06-13 09:00:00", policy) == "2025-06-17 09:00:00"

    def test_next_business_day_custom_week(self, calc: CalendarMath) -> None:
        weekend_shift = BusinessDayPolicy(business_days=frozenset({6, 7}))
        assert calc.next_business_day("2025-06-13", weekend_shift) == "2025-06-14 00:00:00"

    def test_add_working_days_forward(self, calc: CalendarMath) -> None:
        assert calc.add_working_days("2025-06-13 09:00:00", 1) == "2025-06-16 09:00:00"
        assert calc.add_working_days("2025-06-13 09:00:00", 5) == "2025-06-20 09:00:00"

    def test_add_working_days_backward(self, calc: CalendarMath) -> None:
        assert calc.add_working_days("2025-06-16 17:00:00", -1) == "2025-06-13 17:00:00"

    def test_add_working_days_zero_is_identity(self, calc: CalendarMath) -> None:
        assert calc.add_working_days("2025-06-14 08:00:00", 0) == "2025-06-14 08:00:00"

    def test_add_working_days_from_weekend(self, calc: CalendarMath) -> None:
        assert calc.add_working_days("2025-06-14", 1) == "2025-06-16 00:00:00"

    def test_working_days_between_single_saturday(self, calc: CalendarMath) -> None:
        assert calc.working_days_between("2025-06-14", "2025-06-14") == 0

    def test_working_days_between_month(self, calc: CalendarMath) -> None:
        assert calc.working_days_between("2025-06-01", "2025-06-30") == 21

    def test_working_days_between_reversed(self, calc: CalendarMath) -> None:
        assert calc.working_days_between("2025-06-30", "2025-06-01") == 21

    def test_working_days_between_with_holiday(self, calc: CalendarMath) -> None:
        policy = BusinessDayPolicy.build(holidays=["2025-06-19"])
        assert calc.working_days_between("2025-06-16", "2025-06-20", policy) == 4


class TestCalendarLimits:
    def test_add_past_year_9999(self, calc: CalendarMath) -> None:
        with pytest.raises(InvalidArgumentError, match="out of range"):
            calc.add("9999-12-31 12:00:00", 1, "days")

    def test_huge_day_count(self, calc: CalendarMath) -> None:
        with pytest.raises(InvalidArgumentError):
            calc.add("2025-01-01", 100_000_000, "days")

    def test_month_before_year_1(self, calc: CalendarMath) -> None:
        with pytest.raises(InvalidArgumentError):
            calc.subtract("0001-01-15", 1, "months")

    def test_last_representable_second(self, calc: CalendarMath) -> None:
        assert calc.add("9999-12-31 23:59:58", 1, "seconds") == "9999-12-31 23:59:59"

    def test_week_end_past_year_9999(self, calc: CalendarMath) -> None:
        # 9999-12-31 is a Friday; its week ends two days later.
        with pytest.raises(InvalidArgumentError):
            calc.end_of("9999-12-31", "week")

    def test_next_business_day_past_year_9999(self, calc: CalendarMath) -> None:
        with pytest.raises(InvalidArgumentError):
            calc.next_business_day("9999-12-31")

    def test_grace_beyond_year_9999_is_not_expired(self, calc: CalendarMath) -> None:
        assert calc.is_expired("9999-12-31 23:00:00", grace_hours=2) is False


class TestFreshness:
    """Clock is 2025-06-15 14:30:00; thresholds are exclusive."""

    def test_exactly_at_threshold_is_neither(self, calc: CalendarMath) -> None:
        assert calc.is_older_than("2025-06-15 13:30:00", 3600) is False
        assert calc.is_newer_than("2025-06-15 13:30:00", 3600) is False

    def test_one_second_either_side(self, calc: CalendarMath) -> None:
        assert calc.is_older_than("2025-06-15 13:30:00", 3599) is True
        assert calc.is_newer_than("2025-06-15 13:30:00", 3601) is True

    def test_future_instant(self, calc: CalendarMath) -> None:
        assert calc.is_newer_than("2025-06-16", 0) is True
        assert calc.is_older_than("2025-06-16", 0) is False

    def test_invalid_date(self, calc: CalendarMath) -> None:
        with pytest.raises(InvalidDateError):
            calc.is_older_than("yesterday", 60)


class TestBusinessHours:
    @pytest.mark.parametrize(
        ("instant", "expected"),
        [
            ("2025-06-13 09:00:00", True),
            ("2025-06-13 08:59:59", False),
            ("2025-06-13 17:00:00", True),
            ("2025-06-13 17:00:59", True),
            ("2025-06-13 17:01:00", False),
        ],
    )
    def test_inclusive_bounds(self, calc: CalendarMath, instant: str, expected: bool) -> None:
        assert calc.is_business_hours(instant) is expected

    def test_explicit_zone(self, calc: CalendarMath) -> None:
        # 07:00 UTC is 09:00 CEST.
        assert calc.is_business_hours("2025-06-13 07:00:00", zone="Europe/Berlin") is True
        assert calc.is_business_hours("2025-06-13 15:30:00", zone="Europe/Berlin") is False

    def test_site_zone_is_the_default(self, berlin_clock: FixedClock) -> None:
        berlin = CalendarMath(berlin_clock)
        assert berlin.is_business_hours("2025-06-13 15:30:00") is False
        assert berlin.is_business_hours("2025-06-13 06:59:00") is False
        assert berlin.is_business_hours("2025-06-13 07:00:00") is True

    @pytest.mark.parametrize(
        ("instant", "expected"),
        [
            ("2025-06-13 23:00:00", True),
            ("2025-06-13 05:59:00", True),
            ("2025-06-13 06:00:00", True),
            ("2025-06-13 12:00:00", False),
            ("2025-06-13 21:59:00", False),
        ],
    )
    def test_overnight_window(self, calc: CalendarMath, instant: str, expected: bool) -> None:
        assert calc.is_business_hours(instant, "22:00", "06:00") is expected

    @pytest.mark.parametrize("bad", ["9am", "24:00", "12:61", ""])
    def test_invalid_window(self, calc: CalendarMath, bad: str) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid time of day"):
            calc.is_business_hours("2025-06-13 10:00:00", start=bad)
