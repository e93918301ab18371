"""Flatten a forest into depth-annotated rows and prune hidden subtrees."""

from collections.abc import Iterable, Sequence

from dragtree.models.node import FlattenedItem, NodeId, TreeNode


def flatten_tree(forest: Sequence[TreeNode]) -> tuple[FlattenedItem, ...]:
    """Walk the forest pre-order, top to bottom as it is displayed.

    Roots get depth 0 and each child its parent's depth + 1.
    """
    result: list[FlattenedItem] = []

    # Reversed pushes keep sibling order when popping.
    todo: list[tuple[TreeNode, NodeId | None, int, int]] = [
        (node, None, 0, i) for i, node in reversed(list(enumerate(forest)))
    ]
    while todo:
        node, parent_id, depth, index = todo.pop()
        result.append(
            FlattenedItem(id=node.id, depth=depth, node=node, parent_id=parent_id, index=index)
        )
        todo.extend(
            (child, node.id, depth + 1, i) for i, child in reversed(list(enumerate(node.children)))
        )

    return tuple(result)


def remove_children_of(
    items: Iterable[FlattenedItem],
    ids: Iterable[NodeId],
    *,
    keep_excluded: bool = True,
) -> tuple[FlattenedItem, ...]:
    """Drop the descendants of every item whose id is in ``ids``.

    Only the depth sequence is used: after an excluded item, every following
    item deeper than it is dropped until one at its depth or shallower shows up.

    Args:
        items: A flattened forest, in order.
        ids: Ids whose descendants should be hidden.
        keep_excluded: Keep the excluded items themselves (the default), so a
            collapsed node stays visible and a dragged node stays projectable.

    Returns:
        The filtered rows.
    """
    excluded = set(ids)
    filtered: list[FlattenedItem] = []

    skip_below: int | None = None
    for item in items:
        if skip_below is not None and item.depth > skip_below:
            continue
        if item.id in excluded:
            skip_below = item.depth
            if not keep_excluded:
                continue
        else:
            skip_below = None
        filtered.append(item)

    return tuple(filtered)


def collapsed_item_ids(items: Iterable[FlattenedItem]) -> list[NodeId]:
    """Ids of collapsed items that actually have children to hide."""
    return [item.id for item in items if item.collapsed and item.children]


def visible_items(
    forest: Sequence[TreeNode], active_id: NodeId | None = None
) -> tuple[FlattenedItem, ...]:
    """Rows to render: collapsed sections and the dragged subtree are pruned."""
    flattened = flatten_tree(forest)
    hidden = collapsed_item_ids(flattened)
    if active_id is not None:
        hidden.append(active_id)
    return remove_children_of(flattened, hidden)
