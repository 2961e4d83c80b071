"""Category Repository — SQLAlchemy implementation of the CategoryStore protocol.

Invariants:
    - Takes an injected AsyncSession; never opens, commits or rolls back itself
    - find_by_path_prefix is ONE query (prefix match on the indexed path column)
    - bulk_set_status is ONE UPDATE statement, never per-node round trips
    - Ordered reads sort by name so callers get stable sibling order
    - Every read refreshes identity-map rows (populate_existing): a row relinked
      by another transaction is never seen with its old path
    - Row locks are always taken root first: ancestors FOR SHARE, then the
      target, then (delete only) its descendants by ascending level

Design Decisions:
    - Transaction boundaries live in the services (atomic()), so several
      repository calls compose into one unit of work
    - Prefix match instead of substring match: path == prefix covers direct
      children, path LIKE 'prefix,%' covers every deeper level
    - lock_path shares the whole ancestor chain: a delete or deactivation of
      any ancestor (FOR UPDATE) waits for in-flight writes below it, and a
      write below waits for them, so subtree snapshots are never stale
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from category_tree.core.domain_types import CategoryId, CategoryStatus, PATH_DELIMITER
from category_tree.core.path_computer import split_path
from category_tree.models.category import Category, utcnow


class CategoryRepository:
    """Persistence primitives for the category tree."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, category_id: CategoryId) -> Category | None:
        result = await self.db.execute(
            select(Category)
            .where(Category.id == category_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def lock_path(
        self, category_id: CategoryId, *, exclusive: bool = False,
    ) -> Category | None:
        """Lock the ancestor chain FOR SHARE, then the category itself.

        The category is locked FOR UPDATE when exclusive, FOR SHARE otherwise,
        and returned as re-read under its lock. If its path moved while waiting
        (an ancestor was deleted), the new chain is locked as well.
        Returns None when the category does not exist.
        """
        category = await self.get(category_id)
        while category is not None:
            path = category.path
            ancestor_ids = [UUID(i) for i in split_path(path)]
            if ancestor_ids:
                await self.db.execute(row_lock_query(ancestor_ids, exclusive=False))
            result = await self.db.execute(
                row_lock_query([category_id], exclusive=exclusive),
            )
            category = result.scalar_one_or_none()
            if category is None or category.path == path:
                return category
        return None

    async def add(self, category: Category) -> None:
        self.db.add(category)
        await self.db.flush()

    async def remove(self, category: Category) -> None:
        await self.db.delete(category)
        await self.db.flush()

    async def find_roots(self) -> Sequence[Category]:
        result = await self.db.execute(
            select(Category)
            .where(Category.parent_id.is_(None))
            .order_by(Category.name, Category.id)
            .execution_options(populate_existing=True),
        )
        return result.scalars().all()

    async def find_children(self, category_id: CategoryId) -> Sequence[Category]:
        result = await self.db.execute(
            select(Category)
            .where(Category.parent_id == category_id)
            .order_by(Category.name, Category.id)
            .execution_options(populate_existing=True),
        )
        return result.scalars().all()

    async def find_by_path_prefix(
        self, prefix: str, *, for_update: bool = False,
    ) -> Sequence[Category]:
        """Every category whose path is prefix or extends it (all descendants)."""
        query = (
            select(Category)
            .where(_path_prefix_clause(prefix))
            .order_by(Category.level, Category.name)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalars().all()

    async def find_all(self) -> Sequence[Category]:
        result = await self.db.execute(
            select(Category)
            .order_by(Category.level, Category.name)
            .execution_options(populate_existing=True),
        )
        return result.scalars().all()

    async def bulk_set_status(self, prefix: str, status: CategoryStatus) -> int:
        """Set status on every category under prefix. Returns rows matched."""
        result = await self.db.execute(
            update(Category)
            .where(_path_prefix_clause(prefix))
            .values(status=status.value, updated_at=utcnow())
            .returning(Category.id),
        )
        return len(result.scalars().all())


def row_lock_query(ids: Sequence[UUID], *, exclusive: bool) -> Select:
    """SELECT ... FOR UPDATE / FOR SHARE over ids, shallowest row first."""
    return (
        select(Category)
        .where(Category.id.in_(ids))
        .order_by(Category.level, Category.id)
        .with_for_update(read=not exclusive)
        .execution_options(populate_existing=True)
    )


def _path_prefix_clause(prefix: str):
    return or_(
        Category.path == prefix,
        Category.path.startswith(prefix + PATH_DELIMITER, autoescape=True),
    )
