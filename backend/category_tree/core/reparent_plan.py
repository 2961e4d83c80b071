"""Reparent Plan — pure computation of the subtree rewrite caused by a delete.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Direct children of the removed node move to its parent (the grandparent),
      or become roots when the removed node was a root
    - EVERY descendant (any depth) gets path/level recomputed from its parent's
      new ancestry, so path and level stay consistent across the subtree
    - A direct child forced inactive under an inactive grandparent carries
      inactive down its own subtree; other statuses are left untouched

Design Decisions:
    - Top-down by level over a dict arena: one pass, no recursion, each parent
      is recomputed before any of its children
    - Reuses compute_ancestry for every node: a single rule for path/level
    - Plan is a list of value objects: the shell applies it inside one transaction
"""

from dataclasses import dataclass
from typing import Sequence
from uuid import UUID

from category_tree.core.domain_types import CategoryStatus
from category_tree.core.errors import ErrorContext, TransactionError
from category_tree.core.path_computer import compute_ancestry
from category_tree.core.repository_protocols import CategoryLike


@dataclass(frozen=True)
class Relink:
    """New ancestry for one descendant of the removed node."""
    category_id: UUID
    parent_id: UUID | None
    path: str
    level: int
    status: CategoryStatus


@dataclass(frozen=True)
class _Snapshot:
    id: UUID
    path: str
    level: int
    status: CategoryStatus


def plan_reparent(
    removed: CategoryLike,
    grandparent: CategoryLike | None,
    descendants: Sequence[CategoryLike],
) -> list[Relink]:
    """Compute the relinks that keep the tree connected once removed is gone."""
    relinked: dict[UUID, _Snapshot] = {}
    forced_inactive: set[UUID] = set()
    plan: list[Relink] = []

    for node in sorted(descendants, key=lambda d: d.level):
        current = CategoryStatus(node.status)

        if node.parent_id == removed.id:
            parent_id = removed.parent_id
            ancestry = compute_ancestry(parent_id, grandparent, current)
            status = ancestry.status
            if status != current:
                forced_inactive.add(node.id)
        else:
            parent_id = node.parent_id
            parent = relinked.get(parent_id)
            if parent is None:
                raise TransactionError(
                    f"descendant '{node.id}' has a stale path",
                    "reparent",
                    ErrorContext(
                        category_id=str(removed.id),
                        debug_info={"descendant": str(node.id), "path": node.path},
                    ),
                )
            ancestry = compute_ancestry(parent_id, parent, current)
            status = current
            if parent_id in forced_inactive:
                status = CategoryStatus.INACTIVE
                forced_inactive.add(node.id)

        relinked[node.id] = _Snapshot(node.id, ancestry.path, ancestry.level, status)
        plan.append(Relink(node.id, parent_id, ancestry.path, ancestry.level, status))

    return plan
