"""Category ORM — persists one node of the materialized-path tree.

Invariants:
    - id is UUID primary key, assigned at creation, never updated
    - parent_id is NULL for roots, otherwise references an existing category
    - path holds the root-to-parent id chain ("" for roots), level == depth (root = 1)
    - path/level/parent_id only written by services that ran the Path Computer

Design Decisions:
    - No relationship() to parent/children: ownership is purely relational and
      async lazy loads are avoided; the tree is assembled from one bulk fetch
    - path indexed with text_pattern_ops on PostgreSQL: prefix LIKE uses the index
    - status stored as plain string: CategoryStatus is a str Enum and compares equal
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from category_tree.core.domain_types import CategoryStatus, MAX_NAME_LENGTH, ROOT_LEVEL
from category_tree.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """Category entity — a node in the category hierarchy."""
    __tablename__ = "categories"
    __table_args__ = (
        Index(
            "ix_categories_path", "path",
            postgresql_ops={"path": "text_pattern_ops"},
        ),
        CheckConstraint("level >= 1", name="ck_categories_level_positive"),
        CheckConstraint(
            "status IN ('active', 'inactive')", name="ck_categories_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("categories.id"),
        nullable=True, index=True,
    )
    status: Mapped[str] = mapped_column(
        String(10), nullable=False, default=CategoryStatus.ACTIVE.value, index=True,
    )
    path: Mapped[str] = mapped_column(Text, nullable=False, default="")
    level: Mapped[int] = mapped_column(
        Integer, nullable=False, default=ROOT_LEVEL,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=utcnow, onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Category {self.id} {self.name!r} level={self.level}>"
