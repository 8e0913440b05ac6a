import re
from typing import Iterable, Iterator, Sequence

from smartproject.schemas.wbs import WbsItem, WbsNode

_CODE_PART = re.compile(r"(\d+)")


def code_sort_key(code: str | None) -> tuple:
    """Numeric-aware key for hierarchical codes: "1.2" < "1.10" < "2"."""
    if not code:
        return ()
    key = []
    for segment in code.split("."):
        parts = _CODE_PART.split(segment.strip())
        key.append(tuple((0, int(p)) if p.isdigit() else (1, p.lower()) for p in parts if p))
    return tuple(key)


def sort_by_code(items: Iterable[WbsItem]) -> list[WbsItem]:
    return sorted(items, key=lambda i: code_sort_key(i.code))


def build_wbs_hierarchy(items: Sequence[WbsItem]) -> list[WbsNode]:
    """Turn a flat list of WBS items into a forest using ``parent_id``.

    Children keep input order. Items whose parent is not in ``items`` are
    dropped together with their subtrees; the caller owns referential
    integrity. Input items are not modified.
    """
    nodes: dict[int, WbsNode] = {}
    for item in items:
        nodes[item.id] = WbsNode.model_validate({**item.model_dump(), "children": []})

    roots: list[WbsNode] = []
    for node in nodes.values():
        if node.parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(node.parent_id)
        if parent is not None:
            parent.children.append(node)
    return roots


def sort_hierarchy(roots: list[WbsNode]) -> list[WbsNode]:
    """Order every level of the tree by code, in place. Returns ``roots``."""
    roots.sort(key=lambda n: code_sort_key(n.code))
    stack = list(roots)
    seen: set[int] = set()
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        node.children.sort(key=lambda n: code_sort_key(n.code))
        stack.extend(node.children)
    return roots


def iter_hierarchy(roots: Sequence[WbsNode], depth: int = 0) -> Iterator[tuple[WbsNode, int]]:
    """Depth-first walk yielding ``(node, depth)`` in display order."""
    for node in roots:
        yield node, depth
        yield from iter_hierarchy(node.children, depth + 1)
