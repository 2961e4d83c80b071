"""Reparent Plan — pure tests for the subtree rewrite computed on delete.

Tests cover:
    - Direct children move to the grandparent, deeper levels shift up by one
    - Deleting a root turns its children into roots
    - No relinked path keeps the removed id
    - Inactive grandparent forces the moved children (and their subtrees) inactive
    - Input order does not matter (top-down by level)
    - Stale descendant paths abort the plan with TransactionError
"""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from category_tree.core.domain_types import CategoryStatus
from category_tree.core.errors import TransactionError
from category_tree.core.path_computer import descendant_prefix, split_path
from category_tree.core.reparent_plan import plan_reparent


@dataclass
class _Node:
    name: str = "node"
    parent_id: UUID | None = None
    status: str = "active"
    path: str = ""
    level: int = 1
    id: UUID = field(default_factory=uuid4)


def _child(parent: _Node, name: str, status: str = "active") -> _Node:
    return _Node(
        name=name, parent_id=parent.id, status=status,
        path=descendant_prefix(parent), level=parent.level + 1,
    )


def _by_id(plan):
    return {r.category_id: r for r in plan}


def test_leaf_delete_plans_nothing():
    root = _Node(name="Root")
    leaf = _child(root, "Leaf")
    assert plan_reparent(leaf, root, []) == []


def test_children_move_to_grandparent():
    grandparent = _Node(name="Grand Parent")
    parent = _child(grandparent, "Parent")
    child = _child(parent, "Child")

    plan = _by_id(plan_reparent(parent, grandparent, [child]))

    assert plan[child.id].parent_id == grandparent.id
    assert plan[child.id].path == str(grandparent.id)
    assert plan[child.id].level == 2


def test_grandchildren_get_recomputed_paths():
    grandparent = _Node(name="Grand Parent")
    parent = _child(grandparent, "Parent")
    child = _child(parent, "Child")
    grandchild = _child(child, "Grandchild")
    great = _child(grandchild, "Great")

    plan = _by_id(plan_reparent(parent, grandparent, [child, grandchild, great]))

    assert plan[grandchild.id].parent_id == child.id
    assert plan[grandchild.id].path == f"{grandparent.id},{child.id}"
    assert plan[grandchild.id].level == 3
    assert plan[great.id].path == f"{grandparent.id},{child.id},{grandchild.id}"
    assert plan[great.id].level == 4


def test_no_relinked_path_mentions_removed_node():
    root = _Node(name="Root")
    mid = _child(root, "Mid")
    a = _child(mid, "A")
    b = _child(mid, "B")
    a1 = _child(a, "A1")

    plan = plan_reparent(mid, root, [a, b, a1])

    assert len(plan) == 3
    for relink in plan:
        assert str(mid.id) not in split_path(relink.path)
        assert relink.level == len(split_path(relink.path)) + 1


def test_deleting_root_makes_children_roots():
    root = _Node(name="Root")
    a = _child(root, "A")
    b = _child(root, "B")
    a1 = _child(a, "A1")

    plan = _by_id(plan_reparent(root, None, [a, b, a1]))

    for node in (a, b):
        assert plan[node.id].parent_id is None
        assert plan[node.id].path == ""
        assert plan[node.id].level == 1
    assert plan[a1.id].path == str(a.id)
    assert plan[a1.id].level == 2


def test_unsorted_input_is_planned_top_down():
    grandparent = _Node()
    parent = _child(grandparent, "Parent")
    child = _child(parent, "Child")
    grandchild = _child(child, "Grandchild")

    plan = _by_id(plan_reparent(parent, grandparent, [grandchild, child]))

    assert plan[grandchild.id].path == f"{grandparent.id},{child.id}"


def test_inactive_grandparent_forces_moved_subtree_inactive():
    grandparent = _Node(status="inactive")
    parent = _child(grandparent, "Parent", status="active")
    child = _child(parent, "Child", status="active")
    grandchild = _child(child, "Grandchild", status="active")

    plan = _by_id(plan_reparent(parent, grandparent, [child, grandchild]))

    assert plan[child.id].status == CategoryStatus.INACTIVE
    assert plan[grandchild.id].status == CategoryStatus.INACTIVE


def test_already_inactive_child_does_not_force_its_subtree():
    grandparent = _Node(status="inactive")
    parent = _child(grandparent, "Parent", status="inactive")
    child = _child(parent, "Child", status="inactive")
    grandchild = _child(child, "Grandchild", status="active")

    plan = _by_id(plan_reparent(parent, grandparent, [child, grandchild]))

    assert plan[child.id].status == CategoryStatus.INACTIVE
    assert plan[grandchild.id].status == CategoryStatus.ACTIVE


def test_active_grandparent_keeps_statuses():
    grandparent = _Node()
    parent = _child(grandparent, "Parent")
    child = _child(parent, "Child", status="inactive")
    sibling = _child(parent, "Sibling", status="active")

    plan = _by_id(plan_reparent(parent, grandparent, [child, sibling]))

    assert plan[child.id].status == CategoryStatus.INACTIVE
    assert plan[sibling.id].status == CategoryStatus.ACTIVE


def test_stale_descendant_path_raises_transaction_error():
    root = _Node()
    mid = _child(root, "Mid")
    orphan = _Node(
        name="Orphan", parent_id=uuid4(),
        path=f"{descendant_prefix(mid)},{uuid4()}", level=4,
    )

    with pytest.raises(TransactionError) as exc_info:
        plan_reparent(mid, root, [orphan])
    assert exc_info.value.operation == "reparent"
