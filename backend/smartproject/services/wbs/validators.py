from dataclasses import dataclass
from typing import Sequence

from smartproject.schemas.wbs import Dependency, WbsItem
from smartproject.services.wbs.constraints import find_dependency_cycle


@dataclass
class ValidationIssue:
    message: str
    code: str
    item_id: int | None = None
    dependency: tuple[int, int] | None = None


def validate_plan(wbs_items: Sequence[WbsItem], dependencies: Sequence[Dependency]) -> list[ValidationIssue]:
    """Collect integrity problems in a plan without raising.

    Models already reject most malformed single records; this checks what
    only shows up across records, plus values built with ``model_construct``.
    """
    issues: list[ValidationIssue] = []
    ids: set[int] = set()
    for item in wbs_items:
        if item.id in ids:
            issues.append(ValidationIssue("Duplicate WBS item id", "duplicate_item", item_id=item.id))
        ids.add(item.id)

    for item in wbs_items:
        if item.parent_id is not None and item.parent_id not in ids:
            issues.append(ValidationIssue(
                f"Parent {item.parent_id} not found", "orphan_item", item_id=item.id,
            ))
        if item.start_date and item.end_date and item.end_date < item.start_date:
            issues.append(ValidationIssue("End date before start date", "bad_dates", item_id=item.id))
        if item.budgeted_cost < 0 or item.actual_cost < 0:
            issues.append(ValidationIssue("Negative cost", "negative_cost", item_id=item.id))

    seen: set[tuple[int, int]] = set()
    for dep in dependencies:
        edge = (dep.predecessor_id, dep.successor_id)
        if dep.predecessor_id not in ids or dep.successor_id not in ids:
            issues.append(ValidationIssue("Dependency references unknown item", "dangling_dependency", dependency=edge))
        if dep.predecessor_id == dep.successor_id:
            issues.append(ValidationIssue("Dependency on itself", "self_dependency", dependency=edge))
        elif edge in seen:
            issues.append(ValidationIssue("Duplicate dependency", "duplicate_dependency", dependency=edge))
        seen.add(edge)

    cycle = find_dependency_cycle([d for d in dependencies if d.predecessor_id != d.successor_id])
    if cycle:
        issues.append(ValidationIssue(
            "Dependency cycle: " + " -> ".join(str(n) for n in cycle), "dependency_cycle",
        ))
    return issues
