"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - CategoryId wraps UUID
    - CategoryStatus has exactly two members and compares equal to stored strings
    - Name length and root level constants
"""

from uuid import uuid4

from category_tree.core.domain_types import (
    CategoryId, CategoryStatus, MAX_NAME_LENGTH, PATH_DELIMITER, ROOT_LEVEL,
)


def test_category_id_wraps_uuid():
    uid = uuid4()
    assert CategoryId(uid) == uid


def test_category_status_has_two_states():
    assert set(CategoryStatus) == {CategoryStatus.ACTIVE, CategoryStatus.INACTIVE}


def test_status_compares_equal_to_column_value():
    assert CategoryStatus.INACTIVE == "inactive"
    assert CategoryStatus("active") is CategoryStatus.ACTIVE


def test_constants():
    assert MAX_NAME_LENGTH == 50
    assert ROOT_LEVEL == 1
    assert PATH_DELIMITER == ","
