"""Unit tests for next-review labels."""

from datetime import datetime, timedelta, timezone

import pytest

from factories import NOW
from polycast.srs.labels import format_next_review_time
from polycast.srs.scheduler import due_date_for_interval


@pytest.mark.parametrize(
    "offset,expected",
    [
        (timedelta(0), "Now"),
        (timedelta(minutes=-30), "Now"),
        (timedelta(seconds=20), "1 min"),
        (timedelta(minutes=1), "1 min"),
        (timedelta(minutes=1, seconds=50), "1 min"),
        (timedelta(minutes=3), "1 min"),
        (timedelta(minutes=7), "10 min"),
        (timedelta(minutes=9), "10 min"),
        (timedelta(minutes=10), "10 min"),
        (timedelta(minutes=11, seconds=30), "10 min"),
        (timedelta(minutes=40), "10 min"),
        (timedelta(days=45), "1 month"),
        (timedelta(days=90), "2 months"),
        (timedelta(days=130), "4 months"),
        (timedelta(days=20), "2 weeks"),
        (timedelta(days=8), "1 week"),
        (timedelta(days=4), "3 days"),
    ],
)
def test_labels(offset, expected):
    assert format_next_review_time(NOW + offset, NOW) == expected


def test_tomorrow_at_any_hour_is_one_day():
    late_evening = datetime(2025, 6, 11, 23, 30, tzinfo=timezone.utc)
    assert format_next_review_time(datetime(2025, 6, 12, 0, 0, tzinfo=timezone.utc), late_evening) == "10 min"
    assert format_next_review_time(datetime(2025, 6, 12, 21, 0, tzinfo=timezone.utc), NOW) == "1 day"
    assert format_next_review_time(datetime(2025, 6, 12, 0, 0, tzinfo=timezone.utc), NOW) == "1 day"


def test_later_today_falls_back_to_one_day():
    assert format_next_review_time(NOW + timedelta(hours=3), NOW) == "1 day"


@pytest.mark.parametrize(
    "interval,expected",
    [
        (1, "1 min"),
        (2, "10 min"),
        (3, "1 day"),
        (4, "3 days"),
        (5, "1 week"),
        (6, "2 weeks"),
        (7, "1 month"),
        (8, "2 months"),
        (9, "4 months"),
    ],
)
def test_every_table_step_has_its_own_label(interval, expected):
    assert format_next_review_time(due_date_for_interval(NOW, interval), NOW) == expected
