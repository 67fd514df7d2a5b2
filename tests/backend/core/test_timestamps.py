"""Tests for timestamp helpers."""

from datetime import datetime, timedelta, timezone

from backend.core.timestamps import as_utc, later_than, utcnow


def test_utcnow_is_aware():
    assert utcnow().tzinfo is not None


def test_as_utc_attaches_utc_to_naive():
    naive = datetime(2026, 1, 1, 12, 0, 0)

    assert as_utc(naive) == datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_as_utc_converts_other_zones():
    plus_two = datetime(2026, 1, 1, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))

    assert as_utc(plus_two) == datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_later_than_keeps_newer_time():
    previous = datetime(2026, 1, 1, tzinfo=timezone.utc)
    now = previous + timedelta(seconds=5)

    assert later_than(previous, now) == now


def test_later_than_nudges_equal_or_older_time():
    previous = datetime(2026, 1, 1, tzinfo=timezone.utc)

    assert later_than(previous, previous) == previous + timedelta(microseconds=1)
    assert later_than(previous.replace(tzinfo=None), previous - timedelta(seconds=1)) > previous


def test_later_than_without_previous():
    now = utcnow()

    assert later_than(None, now) == now
