import datetime as dt
from typing import Sequence

from smartproject.core.config import settings
from smartproject.core.logging import logger
from smartproject.schemas.wbs import Dependency, WbsItem


def _successor_map(dependencies: Sequence[Dependency]) -> dict[int, list[Dependency]]:
    out: dict[int, list[Dependency]] = {}
    for dep in dependencies:
        out.setdefault(dep.successor_id, []).append(dep)
    return out


def _adjacency(edges) -> dict[int, list[int]]:
    out: dict[int, list[int]] = {}
    for pred, succ in edges:
        out.setdefault(pred, []).append(succ)
    return out


def calculate_dependency_constraints(
    wbs_items: Sequence[WbsItem],
    dependencies: Sequence[Dependency],
) -> list[WbsItem]:
    """Push successors so they start no earlier than ``predecessor.end_date + lag``.

    One forward pass: constraint dates are read from the items as given, so
    a successor moved here does not move its own successors until the next
    call (see ``settle_dependency_constraints``). The end date is always
    recomputed as ``start_date + duration``. Every dependency type is
    treated as finish-to-start. Items that do not move are returned as the
    same objects; moved items are copies.
    """
    item_by_id = {item.id: item for item in wbs_items}
    deps_by_successor = _successor_map(dependencies)

    out: list[WbsItem] = []
    for item in wbs_items:
        deps = deps_by_successor.get(item.id)
        if not deps:
            out.append(item)
            continue

        latest: dt.date | None = None
        for dep in deps:
            pred = item_by_id.get(dep.predecessor_id)
            if pred is None or pred.end_date is None:
                continue
            candidate = pred.end_date + dt.timedelta(days=dep.lag or 0)
            if latest is None or candidate > latest:
                latest = candidate

        if latest is None or (item.start_date is not None and latest <= item.start_date):
            out.append(item)
            continue

        end = latest + dt.timedelta(days=item.duration or 0)
        out.append(item.model_copy(update={"start_date": latest, "end_date": end}))

    return out


def settle_dependency_constraints(
    wbs_items: Sequence[WbsItem],
    dependencies: Sequence[Dependency],
    max_passes: int | None = None,
) -> list[WbsItem]:
    """Repeat ``calculate_dependency_constraints`` until no start date moves.

    Stops after ``max_passes`` (default ``settings.CONSTRAINT_MAX_PASSES``)
    so that a cyclic graph with positive lags cannot loop forever.
    """
    limit = max_passes if max_passes is not None else settings.CONSTRAINT_MAX_PASSES
    items = list(wbs_items)
    for n in range(1, limit + 1):
        updated = calculate_dependency_constraints(items, dependencies)
        moved = sum(1 for old, new in zip(items, updated) if old is not new)
        items = updated
        if not moved:
            logger.debug("constraints_settled", passes=n)
            return items
        logger.debug("constraints_applied", pass_no=n, moved=moved)
    logger.warning("constraints_not_settled", passes=limit)
    return items


def _reaches(start: int, target: int, adjacency: dict[int, list[int]]) -> bool:
    """Iterative DFS: True when ``target`` or a back edge is reachable from ``start``."""
    if start == target:
        return True
    visited: set[int] = {start}
    on_stack: set[int] = {start}
    frames = [(start, iter(adjacency.get(start, ())))]
    while frames:
        node, successors = frames[-1]
        nxt = next(successors, None)
        if nxt is None:
            frames.pop()
            on_stack.discard(node)
            continue
        if nxt == target or nxt in on_stack:
            return True
        if nxt in visited:
            continue
        visited.add(nxt)
        on_stack.add(nxt)
        frames.append((nxt, iter(adjacency.get(nxt, ()))))
    return False


def is_valid_dependency(
    predecessor_id: int,
    successor_id: int,
    wbs_items: Sequence[WbsItem],
    dependencies: Sequence[Dependency],
) -> bool:
    """Check whether the edge ``predecessor_id -> successor_id`` may be added.

    Rejects self-loops, duplicates and edges that would close a cycle. The
    candidate edge is only part of the local adjacency built here, so
    ``dependencies`` is left exactly as it was passed in.
    """
    if predecessor_id == successor_id:
        logger.debug("dependency_rejected", reason="self_loop", predecessor_id=predecessor_id)
        return False

    edges = [(d.predecessor_id, d.successor_id) for d in dependencies]
    if (predecessor_id, successor_id) in edges:
        logger.debug(
            "dependency_rejected",
            reason="duplicate",
            predecessor_id=predecessor_id,
            successor_id=successor_id,
        )
        return False

    adjacency = _adjacency(edges + [(predecessor_id, successor_id)])
    if _reaches(successor_id, predecessor_id, adjacency):
        logger.debug(
            "dependency_rejected",
            reason="cycle",
            predecessor_id=predecessor_id,
            successor_id=successor_id,
        )
        return False
    return True


def find_dependency_cycle(dependencies: Sequence[Dependency]) -> list[int] | None:
    """Return one cycle as a node path (first node repeated at the end), or None."""
    adjacency = _adjacency((d.predecessor_id, d.successor_id) for d in dependencies)
    visited: set[int] = set()

    for root in list(adjacency):
        if root in visited:
            continue
        visited.add(root)
        path = [root]
        on_path = {root}
        frames = [iter(adjacency.get(root, ()))]
        while frames:
            nxt = next(frames[-1], None)
            if nxt is None:
                frames.pop()
                on_path.discard(path.pop())
                continue
            if nxt in on_path:
                return path[path.index(nxt):] + [nxt]
            if nxt in visited:
                continue
            visited.add(nxt)
            path.append(nxt)
            on_path.add(nxt)
            frames.append(iter(adjacency.get(nxt, ())))
    return None


def critical_path(wbs_items: Sequence[WbsItem], dependencies: Sequence[Dependency]) -> list[int]:
    """Longest path through scheduled items (simple CPM forward pass on a DAG).

    Each item starts at the later of its planned offset and its latest
    predecessor finish plus lag. Returns item ids from first to last, or an
    empty list when nothing is scheduled or the graph has a cycle.
    """
    op_by_id = {
        item.id: item
        for item in wbs_items
        if item.start_date is not None and item.end_date is not None
    }
    nodes = list(op_by_id)
    if not nodes:
        return []
    base_start = min(op_by_id[n].start_date for n in nodes)

    preds: dict[int, list[Dependency]] = {}
    succs: dict[int, list[int]] = {}
    indeg = {n: 0 for n in nodes}
    for d in dependencies:
        if d.predecessor_id not in op_by_id or d.successor_id not in op_by_id:
            continue
        preds.setdefault(d.successor_id, []).append(d)
        succs.setdefault(d.predecessor_id, []).append(d.successor_id)
        indeg[d.successor_id] += 1

    queue = [n for n in nodes if indeg[n] == 0]
    topo: list[int] = []
    while queue:
        n = queue.pop(0)
        topo.append(n)
        for s in succs.get(n, []):
            indeg[s] -= 1
            if indeg[s] == 0:
                queue.append(s)

    if len(topo) != len(nodes):
        logger.warning("critical_path_cycle", scheduled=len(nodes), ordered=len(topo))
        return []

    es: dict[int, int] = {}
    ef: dict[int, int] = {}
    prev: dict[int, int | None] = {}
    for n in topo:
        item = op_by_id[n]
        dur = item.duration if item.duration is not None else (item.end_date - item.start_date).days
        planned_offset = (item.start_date - base_start).days
        best_pred = None
        best_ef = planned_offset
        for d in preds.get(n, []):
            finish = ef[d.predecessor_id] + (d.lag or 0)
            # a predecessor finishing exactly on the planned start still drives it
            if finish > best_ef or (finish == best_ef and best_pred is None):
                best_ef = finish
                best_pred = d.predecessor_id
        es[n] = best_ef
        ef[n] = es[n] + dur
        prev[n] = best_pred

    end = max(ef, key=lambda k: ef[k])
    path: list[int] = []
    while end is not None:
        path.append(end)
        end = prev.get(end)
    path.reverse()
    return path
