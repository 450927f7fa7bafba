"""Agent Workflow Builder - terminal editor for multi-agent workflow graphs."""

from .catalog import KindInfo, NodeKind, lookup
from .controller import WorkflowController
from .export import WorkflowExport, serialize, to_json
from .projector import Projection, project
from .registry import Edge, Node, NodeRegistry, NotFoundError, WorkflowBuilderError

__version__ = "0.1.0"

__all__ = [
    "KindInfo",
    "NodeKind",
    "lookup",
    "WorkflowController",
    "WorkflowExport",
    "serialize",
    "to_json",
    "Projection",
    "project",
    "Edge",
    "Node",
    "NodeRegistry",
    "NotFoundError",
    "WorkflowBuilderError",
]
