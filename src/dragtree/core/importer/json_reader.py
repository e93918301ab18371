"""Build forests from plain JSON data and back."""

from typing import Any

from dragtree.models.node import Forest, TreeNode


def parse_forest_data(data: list[dict[str, Any]]) -> Forest:
    """Parse a list of ``{"id", "children", "collapsed"}`` dicts into a forest.

    Raises:
        ValueError: A node has no id, an id is used twice, or ``collapsed`` is not a bool.
    """
    seen: set[Any] = set()

    def build(raw: dict[str, Any]) -> TreeNode:
        # Post-order on an explicit stack: each frame collects its built children.
        stack: list[tuple[dict[str, Any], list[TreeNode]]] = [(_checked(raw, seen), [])]
        while True:
            current, built = stack[-1]
            raw_children = current.get("children", [])
            if len(built) < len(raw_children):
                stack.append((_checked(raw_children[len(built)], seen), []))
                continue

            stack.pop()
            node = TreeNode(
                id=current["id"],
                children=tuple(built),
                collapsed=current.get("collapsed", False),
            )
            if not stack:
                return node
            stack[-1][1].append(node)

    return tuple(build(raw) for raw in data)


def _checked(raw: dict[str, Any], seen: set[Any]) -> dict[str, Any]:
    if "id" not in raw:
        msg = f"Node without id: {raw!r}"
        raise ValueError(msg)
    if not isinstance(raw.get("collapsed", False), bool):
        msg = f"Node {raw['id']!r}: collapsed must be true or false, got {raw['collapsed']!r}"
        raise ValueError(msg)
    if raw["id"] in seen:
        msg = f"Duplicate node id: {raw['id']!r}"
        raise ValueError(msg)
    seen.add(raw["id"])
    return raw


def forest_to_data(forest: Forest) -> list[dict[str, Any]]:
    """Inverse of parse_forest_data; ``collapsed`` is only written when set."""

    def dump(node: TreeNode) -> dict[str, Any]:
        data: dict[str, Any] = {"id": node.id, "children": [dump(c) for c in node.children]}
        if node.collapsed:
            data["collapsed"] = True
        return data

    return [dump(node) for node in forest]
