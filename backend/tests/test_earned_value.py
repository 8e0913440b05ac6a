import datetime as dt

import pytest

from factories import make_activity, make_item
from smartproject.services.reports.earned_value import (
    calculate_cpi,
    calculate_earned_value,
    calculate_spi,
    get_performance_status,
    get_project_budget,
    get_project_progress,
    get_status_color,
)


def test_earned_value():
    assert calculate_earned_value(1000, 25) == 250
    assert calculate_earned_value(0, 80) == 0


@pytest.mark.parametrize("ev", [0, 12.5, 1000])
def test_zero_denominators_give_one(ev):
    assert calculate_cpi(ev, 0) == 1
    assert calculate_spi(ev, 0) == 1


def test_indices_rounded():
    assert calculate_cpi(100, 300) == 0.33
    assert calculate_spi(250, 200) == 1.25


@pytest.mark.parametrize(
    "value,status",
    [
        (1.2, "Excellent"),
        (1.05, "Excellent"),
        (1.0, "On Target"),
        (0.97, "Slightly Behind"),
        (0.95, "Slightly Behind"),
        (0.5, "Behind Schedule"),
    ],
)
def test_performance_bands(value, status):
    assert get_performance_status(value).status == status


def test_status_color():
    assert get_status_color(50, 60).status == "On Track"
    assert get_status_color(50, 45).status == "Slightly Behind"
    assert get_status_color(50, 44).bg_color == "bg-red-100"


def test_project_progress_weighted_by_duration():
    items = [
        make_activity(1, dt.date(2024, 1, 1), 30, percent_complete=100),
        make_activity(2, dt.date(2024, 1, 1), 10, percent_complete=50),
        make_item(3, type="Summary", budgeted_cost=100),
    ]
    assert get_project_progress(items) == 75
    assert get_project_progress([]) == 0


def test_project_budget_counts_work_packages_only():
    items = [
        make_item(1, type="Summary", budgeted_cost=1000, actual_cost=900),
        make_item(2, 1, type="WorkPackage", budgeted_cost=400, actual_cost=150, level=2),
        make_item(3, 1, type="WorkPackage", budgeted_cost=300, actual_cost=50, level=2),
    ]
    b = get_project_budget(items)
    assert (b.total, b.spent, b.remaining) == (700, 200, 500)
