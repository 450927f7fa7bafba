"""
Command-line entry point for the workflow builder.
Launches the interactive editor or builds a workflow headlessly from options.
"""

from __future__ import annotations
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .catalog import NodeKind, lookup
from .config import BuilderSettings
from .controller import WorkflowController
from .logging import init_logging
from .projector import project, to_rich
from .registry import NotFoundError

app = typer.Typer(help="Agent Workflow Builder - compose multi-agent workflows in the terminal")
console = Console()
err_console = Console(stderr=True)

NODE_HELP = "Node to add as KIND[:NAME] (agent, groupchat, sequential, parallel); repeatable"
CONNECT_HELP = "Connection FROM:TO between 1-based node positions; repeatable"


def _fail(message: str) -> None:
    err_console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _settings(model: Optional[str], temperature: Optional[float]) -> BuilderSettings:
    overrides = {}
    if model is not None:
        overrides["model"] = model
    if temperature is not None:
        overrides["temperature"] = temperature
    try:
        return BuilderSettings(**overrides)
    except ValidationError as e:
        _fail(f"Invalid settings: {e.errors()[0]['msg']}")


def _parse_position(text: str, size: int) -> int:
    try:
        position = int(text)
    except ValueError:
        _fail(f"Invalid node position '{text}'")
    if not 1 <= position <= size:
        _fail(f"Node position {position} out of range (1-{size})")
    return position - 1


def build_graph(controller: WorkflowController, nodes: List[str], connections: List[str]) -> None:
    """Populate a controller's registry from ``KIND[:NAME]`` and ``FROM:TO`` specs."""
    for spec in nodes:
        kind_text, _, name = spec.partition(":")
        try:
            kind = NodeKind.parse(kind_text)
        except ValueError as e:
            _fail(str(e))
        node = controller.add(kind)
        if name:
            controller.registry.rename_node(node.id, name)

    size = len(controller.registry)
    for spec in connections:
        source_text, sep, target_text = spec.partition(":")
        if not sep:
            _fail(f"Invalid connection '{spec}', expected FROM:TO")
        source = _parse_position(source_text, size)
        target = _parse_position(target_text, size)
        try:
            controller.select(source)
            controller.connect(target)
        except NotFoundError as e:
            _fail(str(e))
    controller.deselect()


@app.command()
def edit(
    model: Optional[str] = typer.Option(None, help="LLM model written for agent nodes"),
    temperature: Optional[float] = typer.Option(None, help="Temperature written for agent nodes"),
):
    """Open the interactive workflow editor."""
    from .tui import WorkflowBuilderTUI

    system_logger = init_logging()
    system_logger.info("cli", "Starting interactive editor")
    controller = WorkflowController(settings=_settings(model, temperature))
    WorkflowBuilderTUI(controller).run()


@app.command()
def kinds():
    """List the available node kinds."""
    table = Table(title="Node Kinds")
    table.add_column("Tag", style="bold")
    table.add_column("Label")
    table.add_column("Description")

    for kind in NodeKind:
        info = lookup(kind)
        table.add_row(kind.value, f"[{info.color_tag}]{info.label}[/{info.color_tag}]", info.description)

    console.print(table)


@app.command()
def export(
    node: List[str] = typer.Option([], "--node", "-n", help=NODE_HELP),
    connect: List[str] = typer.Option([], "--connect", "-c", help=CONNECT_HELP),
    model: Optional[str] = typer.Option(None, help="LLM model written for agent nodes"),
    temperature: Optional[float] = typer.Option(None, help="Temperature written for agent nodes"),
):
    """Build a workflow from options and print its JSON export."""
    init_logging().info("cli", f"Headless export of {len(node)} node(s)")
    controller = WorkflowController(settings=_settings(model, temperature), emit=typer.echo)
    build_graph(controller, node, connect)
    controller.export()


@app.command()
def preview(
    node: List[str] = typer.Option([], "--node", "-n", help=NODE_HELP),
    connect: List[str] = typer.Option([], "--connect", "-c", help=CONNECT_HELP),
):
    """Print the list and canvas views of a workflow built from options."""
    controller = WorkflowController()
    build_graph(controller, node, connect)
    projection = project(controller.registry)

    console.rule("Nodes")
    for line in projection.list_lines:
        console.print(to_rich(line))
    console.rule("Canvas")
    console.print(to_rich(projection.canvas))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
