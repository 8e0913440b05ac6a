import datetime as dt

import pytest
from pydantic import ValidationError

from factories import dep, make_item
from smartproject.schemas.wbs import Dependency, WbsItem
from smartproject.services.wbs.validators import validate_plan


def _codes(issues):
    return sorted(i.code for i in issues)


def test_clean_plan():
    items = [make_item(1), make_item(2, 1), make_item(3, 1)]
    assert validate_plan(items, [dep(2, 3)]) == []


def test_structural_problems():
    items = [make_item(1), make_item(2, 77), make_item(2)]
    deps = [dep(1, 9), dep(1, 2), dep(1, 2)]
    assert _codes(validate_plan(items, deps)) == [
        "dangling_dependency",
        "duplicate_dependency",
        "duplicate_item",
        "orphan_item",
    ]


def test_cycle_reported():
    items = [make_item(i) for i in (1, 2, 3)]
    issues = validate_plan(items, [dep(1, 2), dep(2, 3), dep(3, 1)])
    assert _codes(issues) == ["dependency_cycle"]
    assert "->" in issues[0].message


def test_unvalidated_records():
    bad = WbsItem.model_construct(
        id=1, parent_id=None, start_date=dt.date(2024, 2, 1), end_date=dt.date(2024, 1, 1),
        budgeted_cost=-5, actual_cost=0,
    )
    loop = Dependency.model_construct(predecessor_id=1, successor_id=1, lag=0)
    assert _codes(validate_plan([bad], [loop])) == ["bad_dates", "negative_cost", "self_dependency"]


def test_models_reject_bad_values():
    with pytest.raises(ValidationError):
        WbsItem(id=1, start_date=dt.date(2024, 2, 1), end_date=dt.date(2024, 1, 1))
    with pytest.raises(ValidationError):
        WbsItem(id=1, budgeted_cost=-1)
    with pytest.raises(ValidationError):
        WbsItem(id=1, percent_complete=120)
    with pytest.raises(ValidationError):
        WbsItem(id=1, start_date=dt.date(2024, 1, 1), duration=-3)


def test_long_dependency_chain():
    items = [make_item(i) for i in range(3001)]
    deps = [dep(i, i + 1) for i in range(3000)]
    assert validate_plan(items, deps) == []
    assert _codes(validate_plan(items, deps + [dep(3000, 0)])) == ["dependency_cycle"]
