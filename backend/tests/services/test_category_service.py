"""Category Service — create, read and update operations against a real session.

Tests cover:
    - Root/child/grandchild creation computes path and level
    - Inactive parent forces inactive child on create
    - Unknown parent -> NotFoundError, bad name/status -> ValidationError, nothing written
    - Reads: get_category, list_roots, list_children ordered by name, list_tree forest
    - Rename touches only the node; empty update is a no-op
"""

from uuid import uuid4

import pytest

from category_tree.core.domain_types import CategoryStatus
from category_tree.core.errors import NotFoundError, ValidationError

from tests.services.tree_assertions import assert_tree_invariants


# --- create_category ----------------------------------------------------------

async def test_create_root_category(service):
    category = await service.create_category("Test Category")
    assert category.id is not None
    assert category.name == "Test Category"
    assert category.parent_id is None
    assert category.status == CategoryStatus.ACTIVE
    assert category.path == ""
    assert category.level == 1
    assert category.created_at is not None


async def test_create_child_category(service):
    parent = await service.create_category("Parent Category")
    child = await service.create_category("Child Category", parent.id)
    assert child.parent_id == parent.id
    assert child.level == 2
    assert child.path == str(parent.id)


async def test_create_grandchild_path_is_root_to_parent(make_tree, fresh_rows):
    tree = await make_tree({"Root": {"Mid": {"Leaf": {}}}})
    leaf = tree["Leaf"]
    assert leaf.level == 3
    assert leaf.path == f"{tree['Root'].id},{tree['Mid'].id}"
    assert_tree_invariants(await fresh_rows())


async def test_create_trims_name(service):
    category = await service.create_category("  Phones  ")
    assert category.name == "Phones"


async def test_create_under_inactive_parent_is_inactive(service):
    parent = await service.create_category("Inactive Parent", status="inactive")
    child = await service.create_category("Child", parent.id, status="active")
    assert child.status == CategoryStatus.INACTIVE


async def test_create_with_unknown_parent_raises_not_found(service, fresh_rows):
    with pytest.raises(NotFoundError):
        await service.create_category("Child", uuid4())
    assert await fresh_rows() == {}


@pytest.mark.parametrize("name", ["", "   ", "x" * 51])
async def test_create_rejects_bad_name(service, fresh_rows, name):
    with pytest.raises(ValidationError):
        await service.create_category(name)
    assert await fresh_rows() == {}


async def test_create_rejects_unknown_status(service):
    with pytest.raises(ValidationError) as exc_info:
        await service.create_category("Root", status="archived")
    assert exc_info.value.field == "status"


# --- reads --------------------------------------------------------------------

async def test_get_category_not_found(service):
    with pytest.raises(NotFoundError):
        await service.get_category(uuid4())


async def test_list_roots_ordered_by_name(service):
    for name in ("Electronics", "Books", "Clothing"):
        await service.create_category(name)
    roots = await service.list_roots()
    assert [r.name for r in roots] == ["Books", "Clothing", "Electronics"]


async def test_list_children_ordered_by_name(make_tree, service):
    tree = await make_tree({"Root": {"Zeta": {}, "Alpha": {}, "Mu": {"Deep": {}}}})
    children = await service.list_children(tree["Root"].id)
    assert [c.name for c in children] == ["Alpha", "Mu", "Zeta"]


async def test_list_children_of_unknown_raises(service):
    with pytest.raises(NotFoundError):
        await service.list_children(uuid4())


async def test_list_tree_matches_nested_shape(make_tree, service):
    await make_tree({"Electronics": {"Phones": {}}, "Clothing": {"T-Shirts": {}}})

    forest = await service.list_tree()

    shape = [
        {"name": n["name"], "children": [
            {"name": c["name"], "children": c["children"]} for c in n["children"]
        ]}
        for n in forest
    ]
    assert shape == [
        {"name": "Clothing", "children": [{"name": "T-Shirts", "children": []}]},
        {"name": "Electronics", "children": [{"name": "Phones", "children": []}]},
    ]


async def test_list_tree_includes_inactive_nodes(service):
    await service.create_category("Archive", status="inactive")
    forest = await service.list_tree()
    assert forest[0]["status"] == "inactive"


# --- update_category (rename / no-op) -----------------------------------------

async def test_rename_only_changes_name(make_tree, service, fresh_rows):
    tree = await make_tree({"Original Name": {"Child": {}}})
    root = tree["Original Name"]

    updated = await service.update_category(root.id, name="Updated Name")

    assert updated.name == "Updated Name"
    rows = await fresh_rows()
    assert rows[root.id].name == "Updated Name"
    assert rows[tree["Child"].id].status == "active"
    assert rows[tree["Child"].id].path == str(root.id)


async def test_update_unknown_raises_not_found(service):
    with pytest.raises(NotFoundError):
        await service.update_category(uuid4(), name="Anything")


async def test_update_rejects_empty_name(service):
    category = await service.create_category("Root")
    with pytest.raises(ValidationError):
        await service.update_category(category.id, name="  ")


async def test_empty_update_returns_record_unchanged(service):
    category = await service.create_category("Root")
    before = category.updated_at
    same = await service.update_category(category.id)
    assert same.id == category.id
    assert same.name == "Root"
    assert same.updated_at == before
