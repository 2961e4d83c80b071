"""Status Cascader — propagates a deactivation to every descendant.

Invariants:
    - One bulk write over the subtree prefix (no per-node round trips)
    - Idempotent: re-running on an inactive subtree changes nothing
    - Never touches path, level or parent_id
    - Runs inside the caller's transaction; never commits on its own

Design Decisions:
    - One-directional: there is no cascade_active, re-activating a node leaves
      its descendants as they are
"""

import logging

from category_tree.core.domain_types import CategoryStatus
from category_tree.core.path_computer import descendant_prefix
from category_tree.core.repository_protocols import CategoryLike, CategoryStore

logger = logging.getLogger(__name__)


async def cascade_inactive(store: CategoryStore, node: CategoryLike) -> int:
    """Mark all transitive descendants of node inactive. Returns rows matched."""
    prefix = descendant_prefix(node)
    affected = await store.bulk_set_status(prefix, CategoryStatus.INACTIVE)
    logger.info(
        f"Cascaded inactive status below {node.id}",
        extra={
            "category_id": str(node.id),
            "operation": "cascade_inactive",
            "affected_count": affected,
        },
    )
    return affected
