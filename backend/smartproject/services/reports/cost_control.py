from typing import Literal, Sequence

import pandas as pd

from smartproject.schemas.reports import CostControlSummary
from smartproject.schemas.wbs import WbsItem
from smartproject.services.reports.earned_value import calculate_earned_value
from smartproject.services.wbs.hierarchy import code_sort_key

ViewMode = Literal["level1", "level2", "all"]

COLUMNS = [
    "id",
    "code",
    "name",
    "type",
    "level",
    "budgeted_cost",
    "actual_cost",
    "percent_complete",
    "earned_value",
    "cost_variance",
    "cpi",
    "over_budget",
]

_MAX_LEVEL: dict[str, int | None] = {"level1": 1, "level2": 2, "all": None}


def cost_control_frame(wbs_items: Sequence[WbsItem], view_mode: ViewMode = "level1") -> pd.DataFrame:
    """Budget vs actual table for Summary and WorkPackage items, sorted by code."""
    if view_mode not in _MAX_LEVEL:
        raise ValueError("invalid_view_mode")
    max_level = _MAX_LEVEL[view_mode]

    items = [i for i in wbs_items if i.is_budgetable]
    if max_level is not None:
        items = [i for i in items if i.level <= max_level]
    items.sort(key=lambda i: code_sort_key(i.code))

    df = pd.DataFrame(
        [
            {
                "id": i.id,
                "code": i.code,
                "name": i.name,
                "type": i.type.value,
                "level": i.level,
                "budgeted_cost": float(i.budgeted_cost),
                "actual_cost": float(i.actual_cost),
                "percent_complete": float(i.percent_complete),
            }
            for i in items
        ],
        columns=COLUMNS[:8],
    )
    df["earned_value"] = [
        calculate_earned_value(b, p) for b, p in zip(df["budgeted_cost"], df["percent_complete"])
    ]
    df["cost_variance"] = df["earned_value"] - df["actual_cost"]
    df["cpi"] = [ev / ac if ac > 0 else 1.0 for ev, ac in zip(df["earned_value"], df["actual_cost"])]
    df["over_budget"] = df["actual_cost"] > df["budgeted_cost"]
    return df.reset_index(drop=True)[COLUMNS]


def cost_control_summary(wbs_items: Sequence[WbsItem], view_mode: ViewMode = "level1") -> CostControlSummary:
    df = cost_control_frame(wbs_items, view_mode)
    total_budget = float(df["budgeted_cost"].sum())
    total_actual = float(df["actual_cost"].sum())
    total_ev = float(df["earned_value"].sum())
    return CostControlSummary(
        total_budget=total_budget,
        total_actual=total_actual,
        total_earned_value=total_ev,
        cost_variance=total_ev - total_actual,
        cost_performance_index=total_ev / total_actual if total_actual > 0 else 1.0,
    )
