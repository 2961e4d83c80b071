"""Tree Assembler — builds the nested forest view from a flat list of categories.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Every emitted node has a "children" list (possibly empty)
    - Siblings ordered by name at every level, ties broken by id
    - Nodes whose parent is absent from the input are emitted as roots

Design Decisions:
    - Arena over per-node queries: the caller fetches every row once, this module
      groups by parent_id into an adjacency map and links it in memory
    - No recursion: each node dict is created once and attached to its parent's
      children list, so depth is bounded by memory, not the interpreter stack
"""

from typing import Iterable
from uuid import UUID

from category_tree.core.repository_protocols import TimestampedCategoryLike


def category_to_dict(category: TimestampedCategoryLike) -> dict:
    """Flat record shape shared by tree nodes and single-record responses."""
    return {
        "id": category.id,
        "name": category.name,
        "parent_id": category.parent_id,
        "status": category.status,
        "path": category.path,
        "level": category.level,
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }


def _sort_key(category: TimestampedCategoryLike) -> tuple[str, str]:
    return (category.name, str(category.id))


def assemble_forest(categories: Iterable[TimestampedCategoryLike]) -> list[dict]:
    """Nest categories under their parents. Returns the ordered list of roots."""
    by_id = {c.id: c for c in categories}
    children_of: dict[UUID | None, list[TimestampedCategoryLike]] = {}
    for category in by_id.values():
        parent_key = category.parent_id if category.parent_id in by_id else None
        children_of.setdefault(parent_key, []).append(category)

    nodes = {
        category_id: {**category_to_dict(category), "children": []}
        for category_id, category in by_id.items()
    }
    for parent_key, siblings in children_of.items():
        siblings.sort(key=_sort_key)
        if parent_key is not None:
            nodes[parent_key]["children"] = [nodes[c.id] for c in siblings]

    return [nodes[root.id] for root in children_of.get(None, [])]
