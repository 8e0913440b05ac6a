import datetime as dt

import pytest

from smartproject.services.timeline import (
    bar_position,
    calculate_duration,
    today_position,
    weekly_headers,
)

W0 = dt.date(2024, 1, 1)
W1 = dt.date(2024, 1, 10)  # 10 day window


def test_duration_inclusive():
    assert calculate_duration(dt.date(2024, 1, 1), dt.date(2024, 1, 1)) == 1
    assert calculate_duration(dt.date(2024, 1, 10), dt.date(2024, 1, 1)) == 10


def test_bar_inside_window():
    pos = bar_position(dt.date(2024, 1, 3), dt.date(2024, 1, 4), W0, W1)
    assert pos.left == pytest.approx(20.0)
    assert pos.width == pytest.approx(20.0)


def test_bar_clipped():
    pos = bar_position(dt.date(2023, 12, 25), dt.date(2024, 1, 2), W0, W1)
    assert pos.left == 0
    assert pos.width == pytest.approx(20.0)
    pos = bar_position(dt.date(2024, 1, 9), dt.date(2024, 2, 1), W0, W1)
    assert pos.left + pos.width == pytest.approx(100.0)


def test_bar_none_cases():
    assert bar_position(None, W1, W0, W1) is None
    assert bar_position(W1, W0, W0, W1) is None
    assert bar_position(dt.date(2024, 3, 1), dt.date(2024, 3, 2), W0, W1) is None


def test_today_marker():
    assert today_position(W0, W1, today=dt.date(2024, 1, 6)) == pytest.approx(50.0)
    assert today_position(W0, W1, today=dt.date(2025, 1, 1)) is None


def test_headers():
    assert weekly_headers(W0, dt.date(2024, 1, 20)) == [W0, dt.date(2024, 1, 8), dt.date(2024, 1, 15)]
