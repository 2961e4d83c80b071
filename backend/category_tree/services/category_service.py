"""Category Service — the operation contract consumed by the HTTP layer.

Invariants:
    - Path Computer runs on every create (and, through the coordinator, on every
      parent change); rename and status-only edits never recompute ancestry
    - Status -> inactive updates the node AND cascades to its subtree in one transaction
    - Status -> active touches only the node itself
    - Every mutation runs inside atomic(): commit on success, rollback otherwise
    - Reads never write

Design Decisions:
    - Explicit service with an injected AsyncSession instead of model-level
      singletons: one instance per request, swappable in tests
    - Input checks (validate_name, parse_status) run before any IO so a rejected
      request never opens a write
    - create shares the parent's whole ancestor chain and a status change
      locks the node FOR UPDATE (CategoryRepository.lock_path), so a create
      racing a deactivation or delete above it is serialized by the database
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from category_tree.core.domain_types import CategoryId, CategoryStatus
from category_tree.core.errors import NotFoundError
from category_tree.core.path_computer import (
    compute_ancestry, parse_status, validate_name,
)
from category_tree.core.tree_assembler import assemble_forest
from category_tree.infrastructure.database import atomic
from category_tree.models.category import Category, utcnow
from category_tree.services.category_repository import CategoryRepository
from category_tree.services.reparent_coordinator import reparent_children_and_delete
from category_tree.services.status_cascader import cascade_inactive

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = CategoryRepository(db)

    async def create_category(
        self,
        name: str,
        parent_id: UUID | None = None,
        status: str | CategoryStatus = CategoryStatus.ACTIVE,
    ) -> Category:
        """Create a root (no parent_id) or a child category."""
        clean_name = validate_name(name)
        requested = parse_status(status)

        async with atomic(self.db, "create"):
            parent = None
            if parent_id is not None:
                parent = await self.repo.lock_path(CategoryId(parent_id))
            ancestry = compute_ancestry(parent_id, parent, requested)
            category = Category(
                name=clean_name,
                parent_id=parent_id,
                status=ancestry.status.value,
                path=ancestry.path,
                level=ancestry.level,
            )
            await self.repo.add(category)

        logger.info(
            f"Created category '{category.name}' at level {category.level}",
            extra={"category_id": str(category.id), "operation": "create"},
        )
        return category

    async def get_category(self, category_id: UUID) -> Category:
        category = await self.repo.get(CategoryId(category_id))
        if category is None:
            raise NotFoundError("Category", str(category_id))
        return category

    async def list_roots(self) -> Sequence[Category]:
        return await self.repo.find_roots()

    async def list_children(self, category_id: UUID) -> Sequence[Category]:
        """Direct children ordered by name. Unknown parent raises NotFoundError."""
        await self.get_category(category_id)
        return await self.repo.find_children(CategoryId(category_id))

    async def list_tree(self) -> list[dict]:
        """Full forest, one bulk fetch assembled in memory."""
        return assemble_forest(await self.repo.find_all())

    async def update_category(
        self,
        category_id: UUID,
        name: str | None = None,
        status: str | CategoryStatus | None = None,
    ) -> Category:
        """Rename and/or change status. Deactivation cascades to all descendants."""
        new_name = validate_name(name) if name is not None else None
        new_status = parse_status(status) if status is not None else None

        async with atomic(self.db, "update", str(category_id)):
            if new_status is not None:
                category = await self.repo.lock_path(
                    CategoryId(category_id), exclusive=True,
                )
            else:
                category = await self.repo.get(CategoryId(category_id))
            if category is None:
                raise NotFoundError("Category", str(category_id))
            if new_name is None and new_status is None:
                return category

            if new_name is not None:
                category.name = new_name
            if new_status is not None:
                category.status = new_status.value
            category.updated_at = utcnow()
            await self.db.flush()

            if new_status == CategoryStatus.INACTIVE:
                await cascade_inactive(self.repo, category)

        logger.info(
            f"Updated category {category_id}",
            extra={"category_id": str(category_id), "operation": "update"},
        )
        return category

    async def delete_category(self, category_id: UUID) -> None:
        """Delete a category; its children are handed to its former parent."""
        await reparent_children_and_delete(self.db, CategoryId(category_id))
