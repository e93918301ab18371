"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from dragtree.models.node import Forest, TreeNode

COLLECTIONS_SOURCE = [
    {"id": "Home", "children": []},
    {
        "id": "Collections",
        "children": [
            {"id": "Spring", "children": []},
            {"id": "Summer", "children": []},
        ],
    },
    {"id": "About", "children": []},
]


@pytest.fixture
def collections_forest() -> Forest:
    """Home, Collections[Spring, Summer], About."""
    return (
        TreeNode("Home"),
        TreeNode("Collections", (TreeNode("Spring"), TreeNode("Summer"))),
        TreeNode("About"),
    )


@pytest.fixture
def nested_forest() -> Forest:
    """A[B[C, D], E] -- depths A=0, B=1, C=2, D=2, E=1."""
    return (
        TreeNode(
            "A",
            (
                TreeNode("B", (TreeNode("C"), TreeNode("D"))),
                TreeNode("E"),
            ),
        ),
    )


@pytest.fixture
def forest_file(tmp_path: Path) -> Path:
    """The collections forest written as a JSON file."""
    path = tmp_path / "forest.json"
    path.write_text(json.dumps(COLLECTIONS_SOURCE))
    return path
