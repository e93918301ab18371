"""CLI for inspecting forests and trying out drag moves."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from dragtree.config import resolve_indentation_width
from dragtree.core.forest.algebra import remove_item, set_property
from dragtree.core.importer.json_reader import forest_to_data, parse_forest_data
from dragtree.core.session import SortableTree
from dragtree.core.tree.flatten import flatten_tree, visible_items
from dragtree.core.tree.outline import render_outline
from dragtree.logging_config import configure_logging
from dragtree.models.node import After, Forest, NodeId, Projection
from dragtree.protocols import ForestState

app = typer.Typer(help="dragtree: reorder and re-parent nodes of an outline forest.")

ForestFile = Annotated[Path, typer.Argument(help="JSON file with the forest")]
ActiveOption = Annotated[str, typer.Option("--active", "-a", help="Id of the dragged node")]
OverOption = Annotated[str, typer.Option("--over", "-o", help="Id of the node under the pointer")]
OffsetOption = Annotated[
    float, typer.Option("--offset", "-x", help="Horizontal drag distance in pixels")
]
IndentOption = Annotated[
    int | None, typer.Option("--indent", "-w", help="Pixels per depth level")
]
JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load_forest(path: Path) -> Forest:
    """Read a forest file, exiting with an error message on bad input."""
    if not path.exists():
        logger.error("Forest file not found: {}", path)
        raise typer.Exit(1)
    try:
        return parse_forest_data(json.loads(path.read_text()))
    except (json.JSONDecodeError, ValueError, TypeError, AttributeError) as e:
        logger.error("Cannot read forest from {}: {}", path, e)
        raise typer.Exit(1) from e


def _resolve_id(forest: Forest, raw: str) -> NodeId:
    """Map a command-line id onto a node id (ids in the file may be numbers)."""
    for item in flatten_tree(forest):
        if str(item.id) == raw:
            return item.id
    logger.error("Node '{}' not found.", raw)
    raise typer.Exit(1)


def _indentation_width(indent: int | None) -> int:
    try:
        return resolve_indentation_width(indent)
    except ValueError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


def _echo_forest(forest: Forest, *, output_json: bool) -> None:
    if output_json:
        typer.echo(json.dumps(forest_to_data(forest), indent=2))
    else:
        typer.echo(render_outline(visible_items(forest)), nl=False)


def _drag(
    forest: Forest, active: str, over: str, offset: float, indent: int | None
) -> tuple[SortableTree, Projection]:
    """Replay a drag from ``active`` to ``over`` and return the live session."""
    session = SortableTree(ForestState(forest), indentation_width=_indentation_width(indent))
    active_id = _resolve_id(forest, active)
    over_id = _resolve_id(forest, over)

    if all(item.id != active_id for item in session.items):
        logger.error("Node '{}' is inside a collapsed node.", active)
        raise typer.Exit(1)
    session.drag_start(active_id)
    if all(item.id != over_id for item in session.items):
        logger.error("Node '{}' is hidden while dragging '{}'.", over, active)
        raise typer.Exit(1)
    session.drag_over(over_id)
    session.drag_move(offset)

    projected = session.projection
    if projected is None:
        logger.error("No projection for '{}' over '{}'.", active, over)
        raise typer.Exit(1)
    return session, projected


@app.command()
def show(
    path: ForestFile,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
) -> None:
    """Print the visible outline of a forest."""
    forest = _load_forest(path)
    typer.echo(render_outline(visible_items(forest), max_depth=max_depth), nl=False)


@app.command()
def project(
    path: ForestFile,
    active: ActiveOption,
    over: OverOption,
    offset: OffsetOption = 0.0,
    indent: IndentOption = None,
    output_json: JsonOption = False,
) -> None:
    """Show where a dragged node would land if released."""
    _session, projected = _drag(_load_forest(path), active, over, offset, indent)
    destination = projected.destination

    if output_json:
        data = {
            "depth": projected.depth,
            "min_depth": projected.min_depth,
            "max_depth": projected.max_depth,
            "is_no_op": projected.is_no_op,
            "parent_id": projected.parent_id,
            "destination": (
                {"kind": "after", "sibling_id": destination.sibling_id}
                if isinstance(destination, After)
                else {"kind": "first_child_of", "parent_id": destination.parent_id}
            ),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(
        f"depth={projected.depth} (allowed {projected.min_depth}..{projected.max_depth})"
    )
    if projected.is_no_op:
        typer.echo("No-op: the node stays where it is.")
    elif isinstance(destination, After):
        typer.echo(f"{active} goes after {destination.sibling_id}.")
    elif destination.parent_id is None:
        typer.echo(f"{active} becomes the first root.")
    else:
        typer.echo(f"{active} is nested under {destination.parent_id}.")


@app.command()
def move(
    path: ForestFile,
    active: ActiveOption,
    over: OverOption,
    offset: OffsetOption = 0.0,
    indent: IndentOption = None,
    output_json: JsonOption = False,
) -> None:
    """Drop a dragged node at its projected position and print the new forest."""
    session, _projected = _drag(_load_forest(path), active, over, offset, indent)
    if session.drag_end() is None:
        logger.info("Nothing moved.")
    _echo_forest(session.state.forest, output_json=output_json)


@app.command()
def remove(
    path: ForestFile,
    node: Annotated[str, typer.Argument(help="Id of the node to remove")],
    output_json: JsonOption = False,
) -> None:
    """Remove a node and its subtree."""
    forest = _load_forest(path)
    _echo_forest(remove_item(forest, _resolve_id(forest, node)), output_json=output_json)


@app.command()
def toggle(
    path: ForestFile,
    node: Annotated[str, typer.Argument(help="Id of the node to collapse or expand")],
    output_json: JsonOption = False,
) -> None:
    """Collapse or expand a node."""
    forest = _load_forest(path)
    node_id = _resolve_id(forest, node)
    _echo_forest(
        set_property(forest, node_id, "collapsed", lambda collapsed: not collapsed),
        output_json=output_json,
    )
