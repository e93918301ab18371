"""Project an in-progress drag onto a depth and a tree position."""

import math
import sys
from collections.abc import Sequence
from typing import TypeVar

from dragtree.models.node import After, FirstChildOf, FlattenedItem, NodeId, Projection, TreePosition

T = TypeVar("T")


def array_move(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Move one element to a new index, keeping everything else in order."""
    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return moved


def get_drag_depth(offset: float, indentation_width: float, *, limit: int | None = None) -> int:
    """Whole indentation levels covered by ``offset``, rounding halves away from zero.

    ``limit`` bounds the result on both sides; without it the bound is
    ``sys.maxsize``, so infinite offsets still yield an int.
    """
    levels = offset / indentation_width
    if math.isnan(levels):
        msg = f"Drag offset {offset!r} over width {indentation_width!r} is not a number"
        raise ValueError(msg)
    bound = limit if limit is not None else sys.maxsize
    if math.isinf(levels):
        return bound if levels > 0 else -bound
    rounded = int(math.copysign(math.floor(abs(levels) + 0.5), levels))
    return max(-bound, min(rounded, bound))


def _index_of(items: Sequence[FlattenedItem], node_id: NodeId, role: str) -> int:
    for i, item in enumerate(items):
        if item.id == node_id:
            return i
    msg = f"{role} id {node_id!r} is not among the projected items"
    raise ValueError(msg)


def get_projection(
    items: Sequence[FlattenedItem],
    active_id: NodeId,
    over_id: NodeId,
    drag_offset: float,
    indentation_width: float,
) -> Projection:
    """Compute where the active item lands if released over ``over_id``.

    The depth is clamped between "sibling of the row below" and "child of the
    row above", so committing always yields a valid forest.

    Args:
        items: Visible rows, with collapsed and active subtrees already pruned
            but the active item itself still present.
        active_id: The item being dragged.
        over_id: The item currently under the pointer.
        drag_offset: Horizontal distance moved since the drag started.
        indentation_width: Horizontal distance of one depth level.

    Returns:
        The projected depth band, destination and landing parent.

    Raises:
        ValueError: Either id is missing from ``items``, or the width is not positive.
    """
    if indentation_width <= 0:
        msg = f"indentation_width must be positive, got {indentation_width!r}"
        raise ValueError(msg)

    over_index = _index_of(items, over_id, "over")
    active_index = _index_of(items, active_id, "active")
    active_item = items[active_index]

    new_items = array_move(items, active_index, over_index)
    previous_item = new_items[over_index - 1] if over_index > 0 else None
    next_item = new_items[over_index + 1] if over_index + 1 < len(new_items) else None

    # No reachable depth lies further than len(items) levels away
    drag_depth = get_drag_depth(drag_offset, indentation_width, limit=len(items))
    projected_depth = active_item.depth + drag_depth
    max_depth = previous_item.depth + 1 if previous_item is not None else 0
    min_depth = next_item.depth if next_item is not None else 0
    depth = min(max(projected_depth, min_depth), max_depth)

    is_no_op = over_id == active_id and depth == active_item.depth

    # either the previous sibling or the parent
    predecessor = next(
        (item for item in reversed(new_items[:over_index]) if item.depth <= depth), None
    )
    destination: TreePosition
    if predecessor is None:
        destination = FirstChildOf(None)
    elif predecessor.depth < depth:
        destination = FirstChildOf(predecessor.id)
    else:
        destination = After(predecessor.id)

    parent_id = None
    if depth > 0:
        parent_id = next(
            (item.id for item in reversed(new_items[:over_index]) if item.depth == depth - 1),
            None,
        )

    return Projection(
        depth=depth,
        min_depth=min_depth,
        max_depth=max_depth,
        is_no_op=is_no_op,
        destination=destination,
        parent_id=parent_id,
    )
