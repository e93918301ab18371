"""Pure forest-editing operations: remove, update, insert, move."""

from collections.abc import Callable, Sequence
from dataclasses import fields, replace
from typing import Any

from dragtree.models.node import After, FirstChildOf, Forest, NodeId, TreeNode, TreePosition

SiblingsFn = Callable[[tuple[TreeNode, ...], TreeNode | None], Sequence[TreeNode]]


def map_forest(forest: Sequence[TreeNode], fn: SiblingsFn) -> Forest:
    """Rebuild the forest by passing every sibling list through ``fn``.

    ``fn`` receives a sibling list and its parent node (None for the roots) and
    returns the replacement list. Lists are visited pre-order: ``fn`` sees a list
    before any of its nodes' children, so nodes it drops are never descended into.
    The parent handed to ``fn`` is the node as ``fn`` returned it one level up,
    with its original children.

    Args:
        forest: Root nodes.
        fn: Transform applied to each sibling list.

    Returns:
        The new forest.
    """
    # Frames are (parent, mapped siblings, rebuilt siblings). A frame is complete
    # once every mapped sibling has been rebuilt with its own mapped children.
    stack: list[tuple[TreeNode | None, tuple[TreeNode, ...], list[TreeNode]]] = [
        (None, tuple(fn(tuple(forest), None)), [])
    ]
    while True:
        parent, siblings, rebuilt = stack[-1]
        if len(rebuilt) < len(siblings):
            node = siblings[len(rebuilt)]
            stack.append((node, tuple(fn(node.children, node)), []))
            continue

        stack.pop()
        if parent is None:
            return tuple(rebuilt)
        stack[-1][2].append(replace(parent, children=tuple(rebuilt)))


def map_forest_by_tree(forest: Sequence[TreeNode], fn: Callable[[TreeNode], TreeNode]) -> Forest:
    """Map every node of the forest through ``fn``."""
    return map_forest(forest, lambda siblings, _parent: [fn(node) for node in siblings])


def remove_item(forest: Sequence[TreeNode], node_id: NodeId) -> Forest:
    """Delete the node with ``node_id`` and its whole subtree."""
    return map_forest(
        forest, lambda siblings, _parent: [node for node in siblings if node.id != node_id]
    )


def set_property(
    forest: Sequence[TreeNode],
    node_id: NodeId,
    property_name: str,
    update: Callable[[Any], Any],
) -> Forest:
    """Replace one field of the node with ``node_id`` by ``update(old_value)``.

    Raises:
        TypeError: ``property_name`` is not a field of TreeNode.
    """
    if property_name not in {f.name for f in fields(TreeNode)}:
        msg = f"TreeNode has no field {property_name!r}"
        raise TypeError(msg)

    def _update(node: TreeNode) -> TreeNode:
        if node.id != node_id:
            return node
        return replace(node, **{property_name: update(getattr(node, property_name))})

    return map_forest_by_tree(forest, _update)


def insert_after(forest: Sequence[TreeNode], addend: TreeNode, sibling_id: NodeId) -> Forest:
    """Splice ``addend`` right after ``sibling_id`` in the list that holds it."""

    def _insert(siblings: tuple[TreeNode, ...], _parent: TreeNode | None) -> Sequence[TreeNode]:
        index = next((i for i, node in enumerate(siblings) if node.id == sibling_id), None)
        if index is None:
            # not in this list, leave it alone
            return siblings
        return (*siblings[: index + 1], addend, *siblings[index + 1 :])

    return map_forest(forest, _insert)


def insert_first_child(
    forest: Sequence[TreeNode], addend: TreeNode, parent_id: NodeId | None
) -> Forest:
    """Insert ``addend`` as the first child of ``parent_id``.

    ``None`` prepends to the roots. A collapsed parent receives ``addend`` as
    its last child instead, so the order it shows once expanded is undisturbed.
    """
    if parent_id is None:
        return (addend, *forest)

    def _insert(siblings: tuple[TreeNode, ...], parent: TreeNode | None) -> Sequence[TreeNode]:
        if parent is None or parent.id != parent_id:
            return siblings
        return (*siblings, addend) if parent.collapsed else (addend, *siblings)

    return map_forest(forest, _insert)


def insert_at(forest: Sequence[TreeNode], addend: TreeNode, destination: TreePosition) -> Forest:
    """Insert ``addend`` at ``destination``.

    Raises:
        TypeError: ``destination`` is neither After nor FirstChildOf.
    """
    if isinstance(destination, After):
        return insert_after(forest, addend, destination.sibling_id)
    if isinstance(destination, FirstChildOf):
        return insert_first_child(forest, addend, destination.parent_id)
    msg = f"Unknown tree position: {destination!r}"
    raise TypeError(msg)


def move_item(forest: Sequence[TreeNode], node: TreeNode, destination: TreePosition) -> Forest:
    """Commit a drag: remove ``node`` from the forest, then insert it at ``destination``."""
    return insert_at(remove_item(forest, node.id), node, destination)
