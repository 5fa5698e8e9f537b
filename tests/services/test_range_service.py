"""Tests for RangeService."""

from __future__ import annotations

import pytest

from datewise.domain.clock import FixedClock
from datewise.services.ranges import RangeService


@pytest.fixture
def service(clock: FixedClock) -> RangeService:
    return RangeService(clock)


class TestGetRange:
    def test_utc(self, service: RangeService) -> None:
        result = service.get_range("this_week")
        assert result.data == {
            "name": "this_week",
            "zone": "UTC",
            "start": "2025-06-09 00:00:00",
            "end": "2025-06-15 23:59:59",
        }

    def test_alias_resolves_to_canonical_name(self, service: RangeService) -> None:
        assert service.get_range("last_month_rolling").data["name"] == "last_30_days"

    def test_anchored_on_clock_zone(self, berlin_clock: FixedClock) -> None:
        result = RangeService(berlin_clock).get_range("today")
        assert result.data["zone"] == "Europe/Berlin"
        assert result.data["start"] == "2025-06-14 22:00:00"

    def test_utc_flag_ignores_clock_zone(self, berlin_clock: FixedClock) -> None:
        result = RangeService(berlin_clock).get_range("today", utc=True)
        assert result.data["zone"] == "UTC"
        assert result.data["start"] == "2025-06-15 00:00:00"

    def test_unknown(self, service: RangeService) -> None:
        result = service.get_range("next_decade")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_RANGE"


class TestOtherOperations:
    def test_today_local(self, service: RangeService) -> None:
        result = service.today_local("America/New_York")
        assert result.data == {
            "zone": "America/New_York",
            "start": "2025-06-15 00:00:00",
            "end": "2025-06-15 23:59:59",
        }

    def test_list_ranges(self, service: RangeService) -> None:
        plain = service.list_ranges()
        with_aliases = service.list_ranges(include_aliases=True)
        assert plain.data["count"] == len(plain.data["items"])
        assert with_aliases.data["count"] == plain.data["count"] + 5

    def test_between(self, service: RangeService) -> None:
        result = service.between("2025-01-31", "2025-03-31", "month")
        assert result.data["count"] == 3
        assert result.data["items"][1] == "2025-02-28 00:00:00"

    def test_between_reversed(self, service: RangeService) -> None:
        result = service.between("2025-03-31", "2025-01-31")
        assert result.error is not None
        assert result.error.code == "INVALID_RANGE"

    def test_local_to_utc(self, service: RangeService) -> None:
        result = service.local_to_utc("2025-01-01", "2025-01-01 23:59:59", "Asia/Tokyo")
        assert result.data == {
            "zone": "Asia/Tokyo",
            "start": "2024-12-31 15:00:00",
            "end": "2025-01-01 14:59:59",
        }

    def test_period(self, service: RangeService) -> None:
        result = service.period("quarter", "2025-11-05")
        assert result.op == "period_boundaries"
        assert result.data["start"] == "2025-10-01 00:00:00"
        assert result.data["end"] == "2025-12-31 23:59:59"
