"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CategoryId wraps UUID: never use bare UUID in domain logic
    - CategoryStatus encodes the only two valid states (no raw string matching)
    - Names are at most MAX_NAME_LENGTH characters after trimming

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON and compares equal to the stored column value
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CategoryId = NewType("CategoryId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class CategoryStatus(str, Enum):
    """Category lifecycle states — maps to DB `status` column."""
    ACTIVE = "active"
    INACTIVE = "inactive"


# ─── Constants ───────────────────────────────────────────────────

MAX_NAME_LENGTH = 50
ROOT_LEVEL = 1
PATH_DELIMITER = ","
