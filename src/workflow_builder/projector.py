"""
View projections - pure functions from registry state to display text.

Projections are urwid text markup: a list of plain strings and ``(attribute, text)``
tuples. Attributes come from the kind catalog and are never interpreted here.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from rich.text import Text

from .catalog import STYLE_EMPHASIS, STYLE_MUTED, lookup
from .registry import Edge, Node, NodeRegistry

Segment = Union[str, Tuple[str, str]]
Markup = List[Segment]

EMPTY_LIST_MESSAGE = "No nodes yet."
EMPTY_CANVAS_MESSAGE = "No nodes yet. Press a/i/s/p to add a node."
NO_SELECTION_MESSAGE = "Select a node to edit its properties"
MISSING_SELECTION_MESSAGE = "Node not found"
PROPERTY_ACTIONS = "[r] Rename | [d] Delete | [Esc] Deselect"


@dataclass(frozen=True)
class Projection:
    """The three text blocks handed to the display layer after a mutation."""
    list_lines: List[Markup]
    canvas: Markup
    properties: Markup


def project_list(nodes: Sequence[Node]) -> List[Markup]:
    """One line per node: ``<label>: <name>``."""
    if not nodes:
        return [[EMPTY_LIST_MESSAGE]]

    lines = []
    for node in nodes:
        info = lookup(node.kind)
        lines.append([(info.color_tag, info.label), f": {node.name}"])
    return lines


def project_canvas(nodes: Sequence[Node], edges: Sequence[Edge]) -> Markup:
    """Diagram view: node lines, then connections, or an empty-state message."""
    markup: Markup = ["\n"]
    for node in nodes:
        info = lookup(node.kind)
        markup.extend(["  ", (info.color_tag, "●"), f" {node.name} [{info.label}]\n"])

    if edges:
        by_id: Dict[str, Node] = {node.id: node for node in nodes}
        markup.append("\n  Connections:\n")
        for edge in edges:
            source = by_id.get(edge.source)
            target = by_id.get(edge.target)
            # Dangling edges are skipped, not repaired
            if source and target:
                markup.append(f"  {source.name} → {target.name}\n")

    if not nodes:
        markup.extend(["\n  ", (STYLE_MUTED, EMPTY_CANVAS_MESSAGE), "\n"])

    return markup


def project_properties(selected_id: Optional[str], nodes: Sequence[Node]) -> Markup:
    """Properties panel for the selected node."""
    if selected_id is None:
        return [f" {NO_SELECTION_MESSAGE} "]

    node = next((n for n in nodes if n.id == selected_id), None)
    if node is None:
        return [f" {MISSING_SELECTION_MESSAGE} "]

    info = lookup(node.kind)
    return [
        " Selected: ", (STYLE_EMPHASIS, node.name), "\n",
        " Type: ", (info.color_tag, info.label), "\n",
        f" Description: {info.description}\n\n",
        f" {PROPERTY_ACTIONS} ",
    ]


def project(registry: NodeRegistry) -> Projection:
    """Compute all three views from the current registry state."""
    nodes = registry.nodes
    return Projection(
        list_lines=project_list(nodes),
        canvas=project_canvas(nodes, registry.edges),
        properties=project_properties(registry.selected_id, nodes),
    )


def plain_text(markup: Union[Segment, Markup]) -> str:
    """Strip attributes from markup."""
    if isinstance(markup, str):
        return markup
    if isinstance(markup, tuple):
        return plain_text(markup[1])
    return "".join(plain_text(segment) for segment in markup)


def to_rich(markup: Markup) -> Text:
    """Convert markup to a rich Text; attributes are used as rich styles."""
    text = Text()
    for segment in markup:
        if isinstance(segment, tuple):
            style, content = segment
            text.append(content, style=style)
        else:
            text.append(segment)
    return text
