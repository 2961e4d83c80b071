"""Category Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CategoryCreate.name / CategoryUpdate.name: stripped first, then 1-50 chars,
      so surrounding whitespace never counts toward the limit
    - CategoryUpdate rejects unknown fields: parent_id cannot be changed directly,
      re-parenting only happens through delete
    - CategoryTreeNode carries a children list on every node

Design Decisions:
    - mode="before" strip: Field length bounds apply to the trimmed value
    - from_attributes on responses: routes hand ORM rows straight to the schema
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from category_tree.core.domain_types import CategoryStatus, MAX_NAME_LENGTH


def _strip_name(v):
    return v.strip() if isinstance(v, str) else v


class CategoryCreate(BaseModel):
    """Category creation — root when parent_id is omitted."""
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    parent_id: UUID | None = None
    status: CategoryStatus = CategoryStatus.ACTIVE

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _strip_name(v)


class CategoryUpdate(BaseModel):
    """Rename and/or status change. Both fields optional."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    status: CategoryStatus | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _strip_name(v)


class CategoryResponse(BaseModel):
    """Category response — the persisted record shape."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    parent_id: UUID | None
    status: CategoryStatus
    path: str
    level: int
    created_at: datetime
    updated_at: datetime


class CategoryTreeNode(CategoryResponse):
    """Tree node — a category with its (possibly empty) ordered children."""
    children: list["CategoryTreeNode"] = []


class CategoryForestResponse(BaseModel):
    """Full tree: count is the number of root categories."""
    count: int
    data: list[CategoryTreeNode]
