"""Id lookup and subtree sizes."""

from collections.abc import Iterable, Sequence

from dragtree.models.node import FlattenedItem, NodeId, TreeNode


def find_deep(forest: Sequence[TreeNode], node_id: NodeId) -> TreeNode | None:
    """Depth-first search for ``node_id``; returns the first match."""
    todo = list(reversed(forest))
    while todo:
        node = todo.pop()
        if node.id == node_id:
            return node
        todo.extend(reversed(node.children))
    return None


def subtree_size(node: TreeNode) -> int:
    """Number of nodes in the subtree rooted at ``node``, itself included."""
    count = 0
    todo = [node]
    while todo:
        current = todo.pop()
        count += 1
        todo.extend(current.children)
    return count


def subtree_size_by_id(forest: Sequence[TreeNode], node_id: NodeId) -> int:
    node = find_deep(forest, node_id)
    return subtree_size(node) if node is not None else 0


def find_flattened(items: Iterable[FlattenedItem], node_id: NodeId) -> FlattenedItem | None:
    return next((item for item in items if item.id == node_id), None)
