"""Transient drag state over a forest: start, move, hover, end, cancel."""

import operator

from loguru import logger

from dragtree.config import DEFAULT_INDENTATION_WIDTH
from dragtree.core.forest.algebra import move_item, remove_item, set_property
from dragtree.core.tree.flatten import visible_items
from dragtree.core.tree.lookup import find_flattened, subtree_size
from dragtree.core.tree.projection import get_projection
from dragtree.models.node import FlattenedItem, NodeId, Projection, TreePosition
from dragtree.protocols import ForestStateProtocol


class SortableTree:
    """Drag-and-drop controller for one forest.

    Holds only the transient drag state (active id, hover id, horizontal offset);
    the forest itself lives in ``state`` and is replaced wholesale on commit.
    """

    def __init__(
        self,
        state: ForestStateProtocol,
        *,
        indentation_width: int = DEFAULT_INDENTATION_WIDTH,
    ) -> None:
        self.state = state
        self.indentation_width = indentation_width
        self.active_id: NodeId | None = None
        self.over_id: NodeId | None = None
        self.offset_left: float = 0

    @property
    def items(self) -> tuple[FlattenedItem, ...]:
        """Visible rows for the current frame."""
        return visible_items(self.state.forest, self.active_id)

    @property
    def projection(self) -> Projection | None:
        if self.active_id is None or self.over_id is None:
            return None
        return get_projection(
            self.items, self.active_id, self.over_id, self.offset_left, self.indentation_width
        )

    def display_depth(self, item: FlattenedItem) -> int:
        """Depth to indent ``item`` by; the active row follows the projection."""
        if item.id == self.active_id:
            projected = self.projection
            if projected is not None:
                return projected.depth
        return item.depth

    def overlay_count(self) -> int | None:
        """Size of the dragged subtree, for the drag overlay label."""
        if self.active_id is None:
            return None
        active = find_flattened(self.items, self.active_id)
        return subtree_size(active.node) if active is not None else None

    def drag_start(self, active_id: NodeId) -> None:
        if find_flattened(self.items, active_id) is None:
            msg = f"Cannot drag {active_id!r}: not a visible item"
            raise ValueError(msg)
        self.active_id = active_id
        self.over_id = active_id
        self.offset_left = 0
        logger.debug("Picked up {}", active_id)

    def drag_move(self, delta_x: float) -> None:
        self.offset_left = delta_x

    def drag_over(self, over_id: NodeId | None) -> None:
        self.over_id = over_id

    def drag_end(self) -> TreePosition | None:
        """Release the drag, committing the projected move unless it is a no-op.

        Returns:
            The destination the active node was moved to, or None if nothing moved.
        """
        try:
            projected = self.projection
            active = (
                find_flattened(self.items, self.active_id) if self.active_id is not None else None
            )
        finally:
            self._reset()

        if projected is None or active is None:
            return None
        if projected.is_no_op:
            logger.debug("Dropped {} in its original position", active.id)
            return None

        self.state.replace(move_item(self.state.forest, active.node, projected.destination))
        logger.debug("Moved {} to {}", active.id, projected.destination)
        return projected.destination

    def drag_cancel(self) -> None:
        if self.active_id is not None:
            logger.debug("Moving {} was cancelled", self.active_id)
        self._reset()

    def remove(self, node_id: NodeId) -> None:
        self.state.replace(remove_item(self.state.forest, node_id))

    def toggle_collapse(self, node_id: NodeId) -> None:
        self.state.replace(set_property(self.state.forest, node_id, "collapsed", operator.not_))

    def _reset(self) -> None:
        self.active_id = None
        self.over_id = None
        self.offset_left = 0
