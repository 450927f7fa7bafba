"""Tests for the workflow export serializer."""

import json

import pytest
from pydantic import ValidationError

from workflow_builder.catalog import NodeKind
from workflow_builder.config import BuilderSettings
from workflow_builder.export import WorkflowExport, serialize, to_json
from workflow_builder.ids import new_workflow_id


def test_serialize_empty_registry(registry, workflow_ids):
    export = serialize(registry.nodes, workflow_id_factory=workflow_ids)
    data = json.loads(to_json(export))

    assert data == {
        "schema_version": "2.0",
        "workflow_id": "workflow-test-1",
        "agents": [],
        "orchestration": {"type": "Sequential", "agents": []},
    }


def test_agents_filtered_but_orchestration_lists_all(registry):
    """Only Agent nodes become agents; orchestration names every node."""
    x = registry.add_node(NodeKind.AGENT)
    y = registry.add_node(NodeKind.PARALLEL)
    registry.rename_node(x.id, "X")
    registry.rename_node(y.id, "Y")

    data = json.loads(to_json(serialize(registry.nodes)))

    assert [agent["name"] for agent in data["agents"]] == ["X"]
    assert data["orchestration"]["agents"] == ["X", "Y"]


def test_agent_spec_shape(registry):
    registry.add_node(NodeKind.AGENT)

    agent = json.loads(to_json(serialize(registry.nodes)))["agents"][0]

    assert agent == {
        "name": "new_agent_1",
        "class": "AssistantAgent",
        "system_message": "",
        "llm_config": {"model": "gpt-4", "temperature": 0.3},
        "tools": [],
    }
    assert list(agent) == ["name", "class", "system_message", "llm_config", "tools"]


def test_key_order(registry):
    registry.add_node(NodeKind.AGENT)
    data = json.loads(to_json(serialize(registry.nodes)))

    assert list(data) == ["schema_version", "workflow_id", "agents", "orchestration"]
    assert list(data["orchestration"]) == ["type", "agents"]


def test_registry_order_preserved(registry):
    kinds = [NodeKind.SEQUENTIAL, NodeKind.AGENT, NodeKind.GROUP_CHAT, NodeKind.AGENT]
    for kind in kinds:
        registry.add_node(kind)

    export = serialize(registry.nodes)

    assert [a.name for a in export.agents] == ["new_agent_2", "new_agent_4"]
    assert export.orchestration.agents == [n.name for n in registry.nodes]


def test_workflow_id_fresh_per_call(registry):
    first = serialize(registry.nodes)
    second = serialize(registry.nodes)

    assert first.workflow_id != second.workflow_id
    assert first.workflow_id.startswith("workflow-")


def test_new_workflow_id_unique():
    assert len({new_workflow_id() for _ in range(50)}) == 50


def test_export_is_immutable(registry, workflow_ids):
    """Neither the document nor its nested entries can be changed after export."""
    registry.add_node(NodeKind.AGENT)
    export = serialize(registry.nodes, workflow_id_factory=workflow_ids)

    with pytest.raises(ValidationError):
        export.workflow_id = "other"
    with pytest.raises(ValidationError):
        export.agents[0].name = "x"
    with pytest.raises(ValidationError):
        export.agents[0].llm_config.temperature = 1.0
    with pytest.raises(ValidationError):
        export.orchestration.type = "Parallel"
    assert export.agents[0].name == "new_agent_1"


def test_settings_override_llm_config(registry):
    registry.add_node(NodeKind.AGENT)
    settings = BuilderSettings(model="gpt-4o", temperature=0.9)

    agent = serialize(registry.nodes, settings=settings).agents[0]

    assert agent.llm_config.model == "gpt-4o"
    assert agent.llm_config.temperature == 0.9


def test_to_json_is_indented(registry):
    text = to_json(serialize(registry.nodes))
    assert text.startswith("{\n  \"schema_version\": \"2.0\"")


def test_export_round_trips_through_model(registry):
    registry.add_node(NodeKind.AGENT)
    export = serialize(registry.nodes)

    restored = WorkflowExport.model_validate_json(to_json(export))

    assert restored == export


def test_invalid_temperature_rejected():
    with pytest.raises(ValidationError):
        BuilderSettings(temperature=3.5)
