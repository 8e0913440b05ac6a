from typing import Sequence

from smartproject.core.config import settings
from smartproject.schemas.reports import BudgetSummary, PerformanceStatus, StatusColor
from smartproject.schemas.wbs import WbsItem, WbsType


def calculate_earned_value(budgeted_cost: float, percent_complete: float) -> float:
    return budgeted_cost * (percent_complete / 100)


def calculate_cpi(earned_value: float, actual_cost: float) -> float:
    if actual_cost == 0:
        return 1
    return round(earned_value / actual_cost, 2)


def calculate_spi(earned_value: float, planned_value: float) -> float:
    if planned_value == 0:
        return 1
    return round(earned_value / planned_value, 2)


def get_performance_status(value: float) -> PerformanceStatus:
    """Band a CPI or SPI value."""
    if value >= settings.PERF_EXCELLENT:
        return PerformanceStatus(status="Excellent", text_color="text-green-600")
    if value >= settings.PERF_ON_TARGET:
        return PerformanceStatus(status="On Target", text_color="text-green-600")
    if value >= settings.PERF_SLIGHTLY_BEHIND:
        return PerformanceStatus(status="Slightly Behind", text_color="text-amber-600")
    return PerformanceStatus(status="Behind Schedule", text_color="text-red-600")


def get_status_color(planned_progress: float, actual_progress: float) -> StatusColor:
    diff = actual_progress - planned_progress
    if diff >= 0:
        return StatusColor(
            color="bg-green-500", status="On Track", text_color="text-green-600", bg_color="bg-green-100",
        )
    if diff >= -settings.PROGRESS_TOLERANCE:
        return StatusColor(
            color="bg-amber-500", status="Slightly Behind", text_color="text-amber-600", bg_color="bg-amber-100",
        )
    return StatusColor(
        color="bg-red-500", status="Behind Schedule", text_color="text-red-600", bg_color="bg-red-100",
    )


def get_project_progress(wbs_items: Sequence[WbsItem]) -> int:
    """Share of activity duration that is complete, as a whole percent."""
    activities = [i for i in wbs_items if i.type == WbsType.activity]
    total = sum(a.duration or 0 for a in activities)
    if not total:
        return 0
    done = sum(a.duration or 0 for a in activities if a.percent_complete >= 100)
    return round(done / total * 100)


def get_project_budget(wbs_items: Sequence[WbsItem]) -> BudgetSummary:
    packages = [i for i in wbs_items if i.type == WbsType.work_package]
    total = sum(wp.budgeted_cost for wp in packages)
    spent = sum(wp.actual_cost for wp in packages)
    return BudgetSummary(total=total, spent=spent, remaining=total - spent)
