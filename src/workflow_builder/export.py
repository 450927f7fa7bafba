"""Workflow export serializer.

Converts the in-memory graph into the versioned JSON workflow document.
This schema is a frozen contract consumed by downstream runners.

Known asymmetry: ``agents`` lists only Agent-kind nodes while
``orchestration.agents`` lists the name of every node in registry order.
"""

import logging
from typing import Any, Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .catalog import NodeKind
from .config import BuilderSettings
from .ids import new_workflow_id
from .registry import Node

logger = logging.getLogger(__name__)


class LLMConfig(BaseModel):
    """LLM settings for an exported agent."""

    model_config = ConfigDict(frozen=True)

    model: str
    temperature: float


class AgentSpec(BaseModel):
    """An exported agent entry."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    class_: str = Field(default="AssistantAgent", alias="class")
    system_message: str = ""
    llm_config: LLMConfig
    tools: list[Any] = Field(default_factory=list)


class Orchestration(BaseModel):
    """Execution order of the whole graph."""

    model_config = ConfigDict(frozen=True)

    type: str = "Sequential"
    agents: list[str] = Field(default_factory=list)


class WorkflowExport(BaseModel):
    """Versioned workflow document (frozen contract)."""

    model_config = ConfigDict(frozen=True)

    schema_version: str = "2.0"
    workflow_id: str
    agents: list[AgentSpec] = Field(default_factory=list)
    orchestration: Orchestration = Field(default_factory=Orchestration)


def serialize(
    nodes: Sequence[Node],
    settings: Optional[BuilderSettings] = None,
    workflow_id_factory: Callable[[], str] = new_workflow_id,
) -> WorkflowExport:
    """Build a fresh export document from nodes in registry order.

    Args:
        nodes: Registry nodes in insertion order.
        settings: Export defaults; ``BuilderSettings()`` when omitted.
        workflow_id_factory: Produces the workflow id, called once per export.

    Returns:
        A new WorkflowExport. Never fails for a well-formed node sequence.
    """
    settings = settings or BuilderSettings()
    llm_config = LLMConfig(model=settings.model, temperature=settings.temperature)

    agents = [
        AgentSpec(
            name=node.name,
            class_=settings.agent_class,
            llm_config=llm_config.model_copy(),
        )
        for node in nodes
        if node.kind is NodeKind.AGENT
    ]

    export = WorkflowExport(
        schema_version=settings.schema_version,
        workflow_id=workflow_id_factory(),
        agents=agents,
        orchestration=Orchestration(
            type=settings.orchestration_type,
            agents=[node.name for node in nodes],
        ),
    )
    logger.info(
        "Exported %s with %d agent(s) across %d node(s)",
        export.workflow_id, len(agents), len(nodes),
    )
    return export


def to_json(export: WorkflowExport) -> str:
    """Render an export as indented JSON with keys in schema order."""
    return export.model_dump_json(by_alias=True, indent=2)
