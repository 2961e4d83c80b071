"""Path Computer — derives a node's materialized path, level and effective status.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Root: path == "", level == 1, status == requested status
    - Child: path == parent.path + parent.id (root-to-parent order),
      level == parent.level + 1, status forced inactive under an inactive parent
    - A parent_id that does not resolve raises NotFoundError (never silently a root)

Design Decisions:
    - Explicit function instead of a save hook: the shell resolves the parent,
      this module only computes, so ancestry rules are testable apart from storage
    - Path stored as delimiter-joined canonical UUID strings: prefix matching on
      descendant_prefix() finds a whole subtree with one indexed query
"""

from dataclasses import dataclass
from uuid import UUID

from category_tree.core.domain_types import (
    CategoryStatus, MAX_NAME_LENGTH, PATH_DELIMITER, ROOT_LEVEL,
)
from category_tree.core.errors import NotFoundError, ValidationError
from category_tree.core.repository_protocols import CategoryLike


@dataclass(frozen=True)
class Ancestry:
    """Computed ancestry for a node at write time."""
    path: str
    level: int
    status: CategoryStatus


def split_path(path: str) -> list[str]:
    """Ancestor ids (root first) encoded in a stored path."""
    return path.split(PATH_DELIMITER) if path else []


def join_path(ids: list[str]) -> str:
    return PATH_DELIMITER.join(ids)


def descendant_prefix(node: CategoryLike) -> str:
    """Path carried by every direct child of node; prefix of all deeper paths."""
    return join_path(split_path(node.path) + [str(node.id)])


def compute_ancestry(
    parent_id: UUID | None,
    parent: CategoryLike | None,
    requested_status: CategoryStatus = CategoryStatus.ACTIVE,
) -> Ancestry:
    """Compute (path, level, status) for a node attached under parent_id."""
    if parent_id is None:
        return Ancestry(path="", level=ROOT_LEVEL, status=requested_status)
    if parent is None:
        raise NotFoundError("Parent category", str(parent_id))

    status = requested_status
    if parent.status == CategoryStatus.INACTIVE:
        status = CategoryStatus.INACTIVE
    return Ancestry(
        path=descendant_prefix(parent),
        level=parent.level + 1,
        status=status,
    )


def validate_name(name: str | None) -> str:
    """Trim and check a category name. Returns the trimmed name."""
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValidationError("Please add a category name", "name")
    if len(trimmed) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Name cannot be more than {MAX_NAME_LENGTH} characters", "name",
        )
    return trimmed


def parse_status(value: str | CategoryStatus) -> CategoryStatus:
    try:
        return CategoryStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in CategoryStatus)
        raise ValidationError(
            f"Invalid status '{value}'. Expected one of: {allowed}", "status",
        ) from None
