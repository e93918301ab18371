"""Domain models for the sortable forest."""

from collections.abc import Hashable
from dataclasses import dataclass
from typing import TypeAlias

NodeId: TypeAlias = Hashable


@dataclass(frozen=True)
class TreeNode:
    """A single node of the forest; owns its children exclusively."""

    id: NodeId
    children: tuple["TreeNode", ...] = ()
    collapsed: bool = False


Forest: TypeAlias = tuple[TreeNode, ...]


@dataclass(frozen=True)
class FlattenedItem:
    """One row of a flattened forest.

    ``parent_id`` is a plain identifier, resolved by lookup against the same
    flattened sequence. It is never an ownership link.
    """

    id: NodeId
    depth: int
    node: TreeNode
    parent_id: NodeId | None = None
    index: int = 0

    @property
    def collapsed(self) -> bool:
        return self.node.collapsed

    @property
    def children(self) -> tuple[TreeNode, ...]:
        return self.node.children


@dataclass(frozen=True)
class After:
    """Insert immediately following ``sibling_id`` among its siblings."""

    sibling_id: NodeId


@dataclass(frozen=True)
class FirstChildOf:
    """Insert as first child of ``parent_id``, or as the first root when None."""

    parent_id: NodeId | None = None


TreePosition: TypeAlias = After | FirstChildOf


@dataclass(frozen=True)
class Projection:
    """Where the active node would land if the drag were released now."""

    depth: int
    min_depth: int
    max_depth: int
    is_no_op: bool
    destination: TreePosition
    parent_id: NodeId | None = None
