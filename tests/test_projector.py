"""Tests for view projections."""

from rich.text import Text

from workflow_builder.catalog import STYLE_EMPHASIS, STYLE_MUTED, NodeKind, lookup
from workflow_builder.projector import (
    EMPTY_CANVAS_MESSAGE, EMPTY_LIST_MESSAGE, MISSING_SELECTION_MESSAGE,
    NO_SELECTION_MESSAGE, PROPERTY_ACTIONS,
    plain_text, project, project_canvas, project_list, project_properties, to_rich,
)
from workflow_builder.registry import Edge, Node


def test_list_empty_placeholder():
    assert project_list([]) == [[EMPTY_LIST_MESSAGE]]


def test_list_lines_use_catalog_colors(registry):
    registry.add_node(NodeKind.AGENT)
    registry.add_node(NodeKind.PARALLEL)

    lines = project_list(registry.nodes)

    assert lines[0] == [("cyan", "Agent Node"), ": new_agent_1"]
    assert plain_text(lines[1]) == "Parallel: new_parallel_2"


def test_canvas_empty_state():
    text = plain_text(project_canvas([], []))
    assert EMPTY_CANVAS_MESSAGE in text
    assert "Connections:" not in text


def test_canvas_nodes_in_insertion_order(registry):
    registry.add_node(NodeKind.SEQUENTIAL)
    registry.add_node(NodeKind.GROUP_CHAT)

    text = plain_text(project_canvas(registry.nodes, registry.edges))

    assert "  ● new_sequential_1 [Sequential]\n" in text
    assert "  ● new_groupchat_2 [Group Chat]\n" in text
    assert text.index("new_sequential_1") < text.index("new_groupchat_2")
    assert EMPTY_CANVAS_MESSAGE not in text
    assert "Connections:" not in text


def test_canvas_marker_colored_by_kind(registry):
    registry.add_node(NodeKind.GROUP_CHAT)
    markup = project_canvas(registry.nodes, registry.edges)
    assert (lookup(NodeKind.GROUP_CHAT).color_tag, "●") in markup


def test_canvas_connections(registry):
    a = registry.add_node(NodeKind.AGENT)
    b = registry.add_node(NodeKind.PARALLEL)
    registry.connect(a.id, b.id)

    text = plain_text(project_canvas(registry.nodes, registry.edges))

    assert "\n  Connections:\n" in text
    assert "  new_agent_1 → new_parallel_2\n" in text


def test_canvas_skips_dangling_edges():
    """An edge whose endpoint is gone is omitted, not repaired."""
    nodes = [Node("n1", NodeKind.AGENT, "alpha"), Node("n2", NodeKind.AGENT, "beta")]
    edges = [Edge("n1", "n2"), Edge("n1", "gone"), Edge("gone", "n2")]

    text = plain_text(project_canvas(nodes, edges))

    assert "alpha → beta" in text
    assert text.count("→") == 1


def test_canvas_dangling_edges_without_nodes():
    text = plain_text(project_canvas([], [Edge("a", "b")]))
    assert "→" not in text
    assert EMPTY_CANVAS_MESSAGE in text


def test_canvas_empty_message_is_muted():
    assert (STYLE_MUTED, EMPTY_CANVAS_MESSAGE) in project_canvas([], [])


def test_properties_without_selection(registry):
    registry.add_node(NodeKind.AGENT)
    assert NO_SELECTION_MESSAGE in plain_text(project_properties(None, registry.nodes))


def test_properties_missing_selection(registry):
    registry.add_node(NodeKind.AGENT)
    assert MISSING_SELECTION_MESSAGE in plain_text(project_properties("gone", registry.nodes))


def test_properties_for_selected_node(registry):
    node = registry.add_node(NodeKind.PARALLEL)
    registry.rename_node(node.id, "fanout")

    markup = project_properties(node.id, registry.nodes)
    text = plain_text(markup)

    assert (STYLE_EMPHASIS, "fanout") in markup
    assert ("yellow", "Parallel") in markup
    assert "Description: Concurrent execution" in text
    assert PROPERTY_ACTIONS in text


def test_project_bundles_views(registry):
    node = registry.add_node(NodeKind.AGENT)
    registry.select(node.id)

    projection = project(registry)

    assert plain_text(projection.list_lines[0]) == "Agent Node: new_agent_1"
    assert "new_agent_1 [Agent Node]" in plain_text(projection.canvas)
    assert "Selected: new_agent_1" in plain_text(projection.properties)


def test_projection_does_not_mutate(registry):
    a = registry.add_node(NodeKind.AGENT)
    registry.connect(a.id, a.id)
    before = (registry.nodes, registry.edges, registry.selected_id)

    project(registry)

    assert (registry.nodes, registry.edges, registry.selected_id) == before


def test_to_rich_keeps_styles():
    text = to_rich([("cyan", "Agent Node"), ": x"])

    assert isinstance(text, Text)
    assert text.plain == "Agent Node: x"
    assert text.spans[0].style == "cyan"
