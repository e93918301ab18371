"""Render flattened rows as an indented markdown outline."""

import io
from collections.abc import Iterable

from dragtree.core.tree.lookup import subtree_size
from dragtree.models.node import FlattenedItem


def render_outline(
    items: Iterable[FlattenedItem],
    *,
    indent: str = "    ",
    max_depth: int | None = None,
) -> str:
    """Render rows as markdown bullets indented by depth.

    Args:
        items: Flattened rows, usually already pruned of collapsed sections.
        indent: Indentation for one depth level.
        max_depth: Deepest level to include (None = unlimited).

    Returns:
        Markdown string with bullet-list hierarchy.
    """
    out = io.StringIO()
    for item in items:
        if max_depth is not None and item.depth > max_depth:
            continue

        line = f"{indent * item.depth}- {item.id}"
        # Collapsed rows and rows cut off by max_depth say how much is hidden
        if item.children and (item.collapsed or item.depth == max_depth):
            line += f" (+{subtree_size(item.node) - 1} hidden)"
        out.write(line + "\n")

    return out.getvalue()
