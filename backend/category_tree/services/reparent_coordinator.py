"""Reparent Coordinator — deletes a category after re-linking its whole subtree.

Invariants:
    - Direct children move to the deleted node's parent (roots when it was a root)
    - Every descendant's path/level is recomputed before commit
    - Load, relink and delete run in ONE atomic() unit: all of it commits or none of it
    - Any store failure surfaces as TransactionError with nothing persisted

Design Decisions:
    - Impureim sandwich: read node + grandparent + descendants (one prefix query),
      plan_reparent computes the rewrite purely, then the plan is written back
    - Locks follow CategoryRepository order: ancestors (grandparent included)
      FOR SHARE, the node FOR UPDATE, then every descendant FOR UPDATE. A
      create or deactivation anywhere below shares the node and waits, and
      the descendant query runs only after the node lock is held
    - Relinks flushed before the delete so no row ever references a removed parent
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from category_tree.core.domain_types import CategoryId
from category_tree.core.errors import NotFoundError
from category_tree.core.path_computer import descendant_prefix
from category_tree.core.reparent_plan import plan_reparent
from category_tree.infrastructure.database import atomic
from category_tree.models.category import utcnow
from category_tree.services.category_repository import CategoryRepository

logger = logging.getLogger(__name__)


async def reparent_children_and_delete(db: AsyncSession, node_id: CategoryId) -> int:
    """Delete node_id, re-linking its descendants. Returns how many were relinked."""
    repo = CategoryRepository(db)

    async with atomic(db, "delete", str(node_id)):
        node = await repo.lock_path(node_id, exclusive=True)
        if node is None:
            raise NotFoundError("Category", str(node_id))

        grandparent = None
        if node.parent_id is not None:
            grandparent = await repo.get(node.parent_id)

        descendants = await repo.find_by_path_prefix(
            descendant_prefix(node), for_update=True,
        )
        plan = plan_reparent(node, grandparent, descendants)

        by_id = {d.id: d for d in descendants}
        now = utcnow()
        for relink in plan:
            category = by_id[relink.category_id]
            category.parent_id = relink.parent_id
            category.path = relink.path
            category.level = relink.level
            category.status = relink.status.value
            category.updated_at = now
        await db.flush()

        await repo.remove(node)

    logger.info(
        f"Deleted category {node_id}, relinked {len(plan)} descendant(s)",
        extra={
            "category_id": str(node_id),
            "operation": "delete",
            "affected_count": len(plan),
        },
    )
    return len(plan)
