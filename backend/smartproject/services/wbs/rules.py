from typing import Sequence

from smartproject.core.config import settings
from smartproject.schemas.wbs import WbsItem, WbsType


class WbsRuleError(ValueError):
    """A WBS edit breaks a structure rule. ``str(err)`` is the short code."""

    def __init__(self, code: str, detail: str):
        super().__init__(code)
        self.code = code
        self.detail = detail


def is_top_level(item: WbsItem) -> bool:
    return item.parent_id is None and item.level == 1


def child_level(parent: WbsItem) -> int:
    level = parent.level + 1
    if level > settings.MAX_WBS_LEVEL:
        raise WbsRuleError(
            "wbs_max_level_reached",
            f"Maximum WBS hierarchy level ({settings.MAX_WBS_LEVEL}) reached",
        )
    return level


def next_root_code(roots: Sequence[WbsItem]) -> str:
    return str(sum(1 for r in roots if r.parent_id is None) + 1)


def next_child_code(parent: WbsItem, siblings: Sequence[WbsItem]) -> str:
    n = sum(1 for s in siblings if s.parent_id == parent.id)
    return f"{parent.code}.{n + 1}"


def check_child_budget(parent: WbsItem, siblings: Sequence[WbsItem], budgeted_cost: float) -> None:
    if budgeted_cost > parent.budgeted_cost:
        raise WbsRuleError(
            "wbs_budget_exceeds_parent",
            f"Budget cannot exceed parent's budget of {parent.budgeted_cost}",
        )
    siblings_sum = sum(s.budgeted_cost for s in siblings if s.parent_id == parent.id)
    if siblings_sum + budgeted_cost > parent.budgeted_cost:
        raise WbsRuleError(
            "wbs_children_budget_exceeds_parent",
            f"Sum of all child budgets ({siblings_sum + budgeted_cost}) "
            f"cannot exceed parent's budget ({parent.budgeted_cost})",
        )


def check_budget_change(item: WbsItem, new_budget: float, items: Sequence[WbsItem]) -> None:
    """Validate changing ``item``'s budget against its parent and its children.

    Activities are costed bottom-up and are not capped by their parent.
    """
    if new_budget < 0:
        raise WbsRuleError("wbs_budget_negative", "Budget cannot be negative")
    if item.type == WbsType.activity:
        return

    if item.parent_id is not None:
        parent = next((i for i in items if i.id == item.parent_id), None)
        if parent is not None and new_budget > parent.budgeted_cost:
            raise WbsRuleError(
                "wbs_budget_exceeds_parent",
                f"Budget cannot exceed parent's budget of {parent.budgeted_cost}",
            )

    # activities are costed bottom-up and do not count against their package
    children_sum = sum(
        i.budgeted_cost for i in items if i.parent_id == item.id and i.type != WbsType.activity
    )
    if children_sum > new_budget:
        raise WbsRuleError(
            "wbs_budget_below_children",
            f"Budget ({new_budget}) cannot be less than the sum of child budgets ({children_sum})",
        )


def check_child_type(parent: WbsItem, child_type: WbsType) -> None:
    """Summary -> WorkPackage -> Activity: enforce what may sit under ``parent``."""
    if parent.type == WbsType.summary and child_type == WbsType.activity:
        raise WbsRuleError(
            "wbs_summary_activity_child",
            "A 'Summary' WBS item cannot have an 'Activity' as a direct child. "
            "It must have a 'WorkPackage' in between.",
        )
    if parent.type == WbsType.work_package and child_type != WbsType.activity:
        raise WbsRuleError(
            "wbs_work_package_child_type",
            "A 'WorkPackage' can only have 'Activity' items as children",
        )


def check_type_change(item: WbsItem, new_type: WbsType, items: Sequence[WbsItem]) -> None:
    if new_type == item.type:
        return
    if is_top_level(item) and new_type != WbsType.summary:
        raise WbsRuleError("wbs_top_level_type", "Top-level WBS items must be of type 'Summary'")

    if item.parent_id is not None:
        parent = next((i for i in items if i.id == item.parent_id), None)
        if parent is None:
            raise WbsRuleError("wbs_parent_not_found", "Parent WBS item not found")
        check_child_type(parent, new_type)

    children = [i for i in items if i.parent_id == item.id]
    if not children:
        return
    if new_type == WbsType.activity:
        raise WbsRuleError(
            "wbs_activity_with_children",
            "Cannot change to 'Activity' type because this item has children",
        )
    if new_type == WbsType.work_package and any(c.type != WbsType.activity for c in children):
        raise WbsRuleError(
            "wbs_work_package_non_activity_children",
            "Cannot change to 'WorkPackage' type because this item has non-Activity children",
        )


def check_dependency_types(predecessor: WbsItem, successor: WbsItem) -> None:
    if predecessor.type != WbsType.activity or successor.type != WbsType.activity:
        raise WbsRuleError(
            "wbs_dependency_not_activity",
            "Dependencies can only be created between 'Activity' items",
        )
