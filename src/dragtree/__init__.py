"""Sortable, nestable forests with drag projection."""

from dragtree.core.forest.algebra import (
    insert_after,
    insert_at,
    insert_first_child,
    map_forest,
    move_item,
    remove_item,
    set_property,
)
from dragtree.core.session import SortableTree
from dragtree.core.tree.flatten import flatten_tree, remove_children_of, visible_items
from dragtree.core.tree.lookup import find_deep, subtree_size, subtree_size_by_id
from dragtree.core.tree.projection import get_projection
from dragtree.models.node import After, FirstChildOf, FlattenedItem, Projection, TreeNode
from dragtree.protocols import ForestState, ForestStateProtocol

__all__ = [
    "After",
    "FirstChildOf",
    "FlattenedItem",
    "ForestState",
    "ForestStateProtocol",
    "Projection",
    "SortableTree",
    "TreeNode",
    "find_deep",
    "flatten_tree",
    "get_projection",
    "insert_after",
    "insert_at",
    "insert_first_child",
    "map_forest",
    "move_item",
    "remove_children_of",
    "remove_item",
    "set_property",
    "subtree_size",
    "subtree_size_by_id",
    "visible_items",
]
