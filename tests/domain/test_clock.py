"""Tests for the injectable clocks."""

from datetime import date, datetime, timezone

from ceramics_kernel.domain.clock import DeterministicClock, SystemClock


class TestDeterministicClock:

    def test_default_time(self):
        clock = DeterministicClock()
        assert clock.now() == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_stable_until_advanced(self):
        clock = DeterministicClock()
        assert clock.now() == clock.now()

    def test_advance_days(self):
        clock = DeterministicClock(datetime(2024, 1, 31, 23, 0, tzinfo=timezone.utc))
        clock.advance(days=1)
        assert clock.today() == date(2024, 2, 1)

    def test_set_time_resets_offset(self):
        clock = DeterministicClock()
        clock.advance(seconds=3600)
        clock.set_time(datetime(2025, 2, 10, tzinfo=timezone.utc))
        assert clock.today() == date(2025, 2, 10)


class TestSystemClock:

    def test_now_is_timezone_aware(self):
        assert SystemClock().now_utc().tzinfo is not None
