"""Tests for the pure forest-editing operations."""

from dataclasses import dataclass

import pytest

from dragtree.core.forest.algebra import (
    insert_after,
    insert_at,
    insert_first_child,
    map_forest,
    move_item,
    remove_item,
    set_property,
)
from dragtree.core.tree.flatten import flatten_tree
from dragtree.core.tree.lookup import find_deep, subtree_size
from dragtree.models.node import After, FirstChildOf, Forest, TreeNode


def _outline(forest: Forest) -> list[tuple[str, int]]:
    return [(item.id, item.depth) for item in flatten_tree(forest)]


def _assert_depths_consistent(forest: Forest) -> None:
    items = flatten_tree(forest)
    depth_by_id = {item.id: item.depth for item in items}
    for item in items:
        expected = 0 if item.parent_id is None else depth_by_id[item.parent_id] + 1
        assert item.depth == expected


def test_remove_nested_node(collections_forest: Forest) -> None:
    result = remove_item(collections_forest, "Spring")
    assert _outline(result) == [("Home", 0), ("Collections", 0), ("Summer", 1), ("About", 0)]


def test_remove_takes_whole_subtree(collections_forest: Forest) -> None:
    result = remove_item(collections_forest, "Collections")
    assert _outline(result) == [("Home", 0), ("About", 0)]


def test_remove_absent_id_returns_equal_forest(collections_forest: Forest) -> None:
    assert remove_item(collections_forest, "Winter") == collections_forest


def test_remove_does_not_mutate_input(collections_forest: Forest) -> None:
    before = _outline(collections_forest)
    remove_item(collections_forest, "Summer")
    assert _outline(collections_forest) == before


def test_removed_node_is_gone_and_other_subtrees_keep_their_size(
    nested_forest: Forest,
) -> None:
    for item in flatten_tree(nested_forest):
        result = remove_item(nested_forest, item.id)
        assert find_deep(result, item.id) is None
        removed = subtree_size(item.node)
        assert len(flatten_tree(result)) == len(flatten_tree(nested_forest)) - removed
        # Nodes outside the removed subtree and its ancestor chain are untouched
        for remaining in flatten_tree(result):
            original = find_deep(nested_forest, remaining.id)
            assert original is not None
            if find_deep(original.children, item.id) is None:
                assert subtree_size(remaining.node) == subtree_size(original)


def test_map_forest_skips_children_of_dropped_nodes(nested_forest: Forest) -> None:
    """A node removed by the transform is never descended into."""
    seen_parents: list[str | None] = []

    def drop_b(siblings: tuple[TreeNode, ...], parent: TreeNode | None) -> list[TreeNode]:
        seen_parents.append(parent.id if parent is not None else None)
        return [node for node in siblings if node.id != "B"]

    result = map_forest(nested_forest, drop_b)

    assert _outline(result) == [("A", 0), ("E", 1)]
    assert seen_parents == [None, "A", "E"]


def test_map_forest_visits_lists_pre_order(nested_forest: Forest) -> None:
    seen_parents: list[str | None] = []

    def record(siblings: tuple[TreeNode, ...], parent: TreeNode | None) -> tuple[TreeNode, ...]:
        seen_parents.append(parent.id if parent is not None else None)
        return siblings

    map_forest(nested_forest, record)
    assert seen_parents == [None, "A", "B", "C", "D", "E"]


def test_map_forest_handles_deep_trees() -> None:
    """Deep chains do not hit the recursion limit."""
    depth = 5000
    node = TreeNode(depth - 1)
    for i in reversed(range(depth - 1)):
        node = TreeNode(i, (node,))

    result = remove_item((node,), depth - 1)

    assert subtree_size(result[0]) == depth - 1
    assert find_deep(result, depth - 1) is None
    assert find_deep(result, depth - 2) is not None


def test_set_property_toggles_collapsed(collections_forest: Forest) -> None:
    result = set_property(collections_forest, "Collections", "collapsed", lambda c: not c)
    collections = find_deep(result, "Collections")
    assert collections is not None
    assert collections.collapsed is True
    assert [child.id for child in collections.children] == ["Spring", "Summer"]


def test_set_property_on_nested_node(collections_forest: Forest) -> None:
    result = set_property(collections_forest, "Summer", "collapsed", lambda _: True)
    summer = find_deep(result, "Summer")
    assert summer is not None
    assert summer.collapsed is True
    assert find_deep(result, "Spring") == TreeNode("Spring")


def test_set_property_absent_id_returns_equal_forest(collections_forest: Forest) -> None:
    result = set_property(collections_forest, "Winter", "collapsed", lambda _: True)
    assert result == collections_forest


def test_set_property_unknown_field_raises(collections_forest: Forest) -> None:
    with pytest.raises(TypeError):
        set_property(collections_forest, "Home", "label", lambda _: "x")


def test_insert_after_nested_sibling(collections_forest: Forest) -> None:
    result = insert_after(collections_forest, TreeNode("Fall"), "Spring")
    assert _outline(result) == [
        ("Home", 0),
        ("Collections", 0),
        ("Spring", 1),
        ("Fall", 1),
        ("Summer", 1),
        ("About", 0),
    ]


def test_insert_after_root_sibling(collections_forest: Forest) -> None:
    result = insert_after(collections_forest, TreeNode("Blog"), "About")
    assert [node.id for node in result] == ["Home", "Collections", "About", "Blog"]


def test_insert_after_absent_sibling_returns_equal_forest(collections_forest: Forest) -> None:
    assert insert_after(collections_forest, TreeNode("Fall"), "Winter") == collections_forest


def test_insert_first_child_of_none_prepends_root(collections_forest: Forest) -> None:
    result = insert_first_child(collections_forest, TreeNode("Blog"), None)
    assert [node.id for node in result] == ["Blog", "Home", "Collections", "About"]


def test_insert_first_child_prepends_to_expanded_parent(collections_forest: Forest) -> None:
    result = insert_first_child(collections_forest, TreeNode("Fall"), "Collections")
    collections = find_deep(result, "Collections")
    assert collections is not None
    assert [child.id for child in collections.children] == ["Fall", "Spring", "Summer"]


def test_insert_first_child_appends_to_collapsed_parent(collections_forest: Forest) -> None:
    """Confirmed design choice: a collapsed parent gets the new node as its last child."""
    collapsed = set_property(collections_forest, "Collections", "collapsed", lambda _: True)
    result = insert_first_child(collapsed, TreeNode("Fall"), "Collections")
    collections = find_deep(result, "Collections")
    assert collections is not None
    assert [child.id for child in collections.children] == ["Spring", "Summer", "Fall"]


def test_insert_first_child_into_leaf(collections_forest: Forest) -> None:
    result = insert_first_child(collections_forest, TreeNode("Team"), "About")
    assert _outline(result)[-2:] == [("About", 0), ("Team", 1)]


def test_insert_first_child_absent_parent_returns_equal_forest(
    collections_forest: Forest,
) -> None:
    assert insert_first_child(collections_forest, TreeNode("Fall"), "Winter") == collections_forest


def test_insert_at_dispatches_on_position(collections_forest: Forest) -> None:
    addend = TreeNode("Fall")
    assert insert_at(collections_forest, addend, After("Spring")) == insert_after(
        collections_forest, addend, "Spring"
    )
    assert insert_at(collections_forest, addend, FirstChildOf("Collections")) == (
        insert_first_child(collections_forest, addend, "Collections")
    )
    assert insert_at(collections_forest, addend, FirstChildOf()) == insert_first_child(
        collections_forest, addend, None
    )


def test_insert_at_unknown_position_raises(collections_forest: Forest) -> None:
    @dataclass(frozen=True)
    class Before:
        sibling_id: str

    with pytest.raises(TypeError, match="Unknown tree position"):
        insert_at(collections_forest, TreeNode("Fall"), Before("Spring"))  # type: ignore[arg-type]


def test_move_places_node_right_after_sibling(nested_forest: Forest) -> None:
    """Moving X after S makes X the sibling directly following S."""
    for moved in flatten_tree(nested_forest):
        remaining = remove_item(nested_forest, moved.id)
        for sibling in flatten_tree(remaining):
            result = move_item(nested_forest, moved.node, After(sibling.id))
            items = flatten_tree(result)
            placed = next(item for item in items if item.id == moved.id)
            anchor = next(item for item in items if item.id == sibling.id)
            assert placed.parent_id == anchor.parent_id
            assert placed.index == anchor.index + 1
            assert subtree_size(placed.node) == subtree_size(moved.node)


def test_move_spring_out_of_collections(collections_forest: Forest) -> None:
    spring = find_deep(collections_forest, "Spring")
    assert spring is not None
    result = move_item(collections_forest, spring, After("Collections"))
    assert _outline(result) == [
        ("Home", 0),
        ("Collections", 0),
        ("Summer", 1),
        ("Spring", 0),
        ("About", 0),
    ]


def test_depths_stay_consistent_across_operations(collections_forest: Forest) -> None:
    forest = collections_forest
    forest = insert_first_child(forest, TreeNode("Fall", (TreeNode("Leaves"),)), "Summer")
    _assert_depths_consistent(forest)
    forest = move_item(forest, TreeNode("Home"), FirstChildOf("Leaves"))
    _assert_depths_consistent(forest)
    forest = remove_item(forest, "Summer")
    _assert_depths_consistent(forest)
    forest = insert_after(forest, TreeNode("Winter"), "Spring")
    _assert_depths_consistent(forest)

    assert _outline(forest) == [
        ("Collections", 0),
        ("Spring", 1),
        ("Winter", 1),
        ("About", 0),
    ]
