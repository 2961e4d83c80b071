"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE CategoryLike are never async themselves:
      the shell orchestrates the async calls around the pure logic
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID

from category_tree.core.domain_types import CategoryId, CategoryStatus


class CategoryLike(Protocol):
    """Structural contract for Category records passed to pure core functions.

    Satisfied by the ORM model and by plain test doubles alike.
    """
    id: UUID
    name: str
    parent_id: UUID | None
    status: str
    path: str
    level: int


class TimestampedCategoryLike(CategoryLike, Protocol):
    """CategoryLike plus the system-managed timestamps exposed on reads."""
    created_at: datetime
    updated_at: datetime


class CategoryStore(Protocol):
    """Contract for category persistence — implemented by shell."""
    async def get(self, category_id: CategoryId) -> CategoryLike | None: ...
    async def lock_path(
        self, category_id: CategoryId, *, exclusive: bool = False,
    ) -> CategoryLike | None: ...
    async def add(self, category: CategoryLike) -> None: ...
    async def remove(self, category: CategoryLike) -> None: ...
    async def find_roots(self) -> Sequence[CategoryLike]: ...
    async def find_children(self, category_id: CategoryId) -> Sequence[CategoryLike]: ...
    async def find_by_path_prefix(
        self, prefix: str, *, for_update: bool = False,
    ) -> Sequence[CategoryLike]: ...
    async def find_all(self) -> Sequence[CategoryLike]: ...
    async def bulk_set_status(self, prefix: str, status: CategoryStatus) -> int: ...
