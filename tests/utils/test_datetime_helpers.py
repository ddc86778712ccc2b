# -*- coding: utf-8 -*-
from datetime import datetime, timedelta, timezone

import pytest

from utils.datetime_helpers import datetime_to_iso, utcnow


def test_utcnow_is_naive_and_close_to_now():
    now = utcnow()
    assert now.tzinfo is None
    assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - now) < timedelta(seconds=5)


@pytest.mark.parametrize(
    "dt, expected",
    [
        (datetime(2025, 10, 20, 16, 0, 0), "2025-10-20T16:00:00.000Z"),
        (datetime(2025, 10, 20, 16, 0, 0, 123456), "2025-10-20T16:00:00.123Z"),
        (
            datetime(2025, 10, 20, 18, 0, 0, tzinfo=timezone(timedelta(hours=2))),
            "2025-10-20T16:00:00.000Z",
        ),
    ],
)
def test_datetime_to_iso(dt, expected):
    assert datetime_to_iso(dt) == expected


def test_datetime_to_iso_none():
    assert datetime_to_iso(None) is None
