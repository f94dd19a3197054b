"""Tests for workspine.core.timestamps."""

from datetime import UTC, datetime, timedelta, timezone

from workspine.core.timestamps import lead_time_minutes, to_rfc3339, utc_now


def test_utc_now_is_aware():
    assert utc_now().tzinfo is not None


class TestToRfc3339:
    def test_aware_utc(self):
        assert to_rfc3339(datetime(2024, 1, 1, tzinfo=UTC)) == "2024-01-01T00:00:00Z"

    def test_naive_is_utc(self):
        assert to_rfc3339(datetime(2024, 1, 1, 12, 30)) == "2024-01-01T12:30:00Z"

    def test_offset_converted(self):
        tz = timezone(timedelta(hours=8))
        assert to_rfc3339(datetime(2024, 1, 1, 8, 0, tzinfo=tz)) == "2024-01-01T00:00:00Z"


class TestLeadTimeMinutes:
    def test_ninety_minutes(self):
        start = datetime(2024, 1, 1, 10, 0)
        assert lead_time_minutes(start, start + timedelta(minutes=90)) == 90

    def test_partial_minutes_truncate(self):
        start = datetime(2024, 1, 1, 10, 0)
        assert lead_time_minutes(start, start + timedelta(minutes=5, seconds=59)) == 5

    def test_missing_end(self):
        assert lead_time_minutes(datetime(2024, 1, 1), None) is None

    def test_missing_start(self):
        assert lead_time_minutes(None, datetime(2024, 1, 1)) is None

    def test_mixed_naive_and_aware(self):
        start = datetime(2024, 1, 1, 10, 0)
        end = datetime(2024, 1, 1, 11, 0, tzinfo=UTC)
        assert lead_time_minutes(start, end) == 60
