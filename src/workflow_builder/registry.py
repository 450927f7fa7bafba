"""In-memory node registry for a workflow graph.

Holds nodes in insertion order together with their connections and the current
selection. Insertion order is the canonical order for every view and for export.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .catalog import NodeKind
from .ids import ClockIdSource
from .logging import get_system_logger


class WorkflowBuilderError(Exception):
    """Base error for the workflow builder."""
    pass


class NotFoundError(WorkflowBuilderError):
    """An operation referenced a node that is not in the registry."""

    def __init__(self, node_id: str, message: Optional[str] = None):
        self.node_id = node_id
        super().__init__(message or f"Node not found: {node_id}")


@dataclass
class Node:
    """A typed unit in the workflow graph."""
    id: str
    kind: NodeKind
    name: str


@dataclass(frozen=True)
class Edge:
    """A directed connection between two node ids."""
    source: str
    target: str


class NodeRegistry:
    """Ordered collection of nodes and edges with an optional selection."""

    def __init__(self, id_source: Optional[Callable[[], str]] = None):
        self._id_source = id_source or ClockIdSource()
        self._nodes: List[Node] = []
        self._edges: List[Edge] = []
        self._selected_id: Optional[str] = None
        self._log = get_system_logger()

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[Node]:
        """The selected node, if any."""
        if self._selected_id is None:
            return None
        return self.find_by_id(self._selected_id)

    def __len__(self) -> int:
        return len(self._nodes)

    def add_node(self, kind: NodeKind) -> Node:
        """Append a new node of ``kind`` with a default name."""
        node = Node(
            id=self._id_source(),
            kind=kind,
            name=f"new_{kind.value}_{len(self._nodes) + 1}",
        )
        self._nodes.append(node)
        self._log.info("registry", f"Added {kind.value} node '{node.name}'", node_id=node.id)
        return node

    def delete_node(self, node_id: str) -> Optional[Node]:
        """Remove a node and every edge touching it.

        Absent ids are ignored. Returns the removed node, if there was one.
        """
        node = self.find_by_id(node_id)
        if node is None:
            self._log.debug("registry", "Delete ignored, node absent", node_id=node_id)
            return None

        self._nodes = [n for n in self._nodes if n.id != node_id]
        before = len(self._edges)
        self._edges = [e for e in self._edges if node_id not in (e.source, e.target)]
        if self._selected_id == node_id:
            self._selected_id = None

        self._log.info(
            "registry",
            f"Deleted '{node.name}' and {before - len(self._edges)} connection(s)",
            node_id=node_id,
        )
        return node

    def rename_node(self, node_id: str, new_name: str) -> Node:
        """Set a node's name. Names need not be unique.

        Raises:
            NotFoundError: If ``node_id`` is not in the registry.
        """
        node = self._require(node_id)
        old_name, node.name = node.name, new_name
        self._log.info("registry", f"Renamed '{old_name}' to '{new_name}'", node_id=node_id)
        return node

    def find_by_id(self, node_id: str) -> Optional[Node]:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def node_at(self, index: int) -> Optional[Node]:
        """Get the node at a list position (for UI navigation)."""
        if 0 <= index < len(self._nodes):
            return self._nodes[index]
        return None

    def index_of(self, node_id: str) -> Optional[int]:
        for index, node in enumerate(self._nodes):
            if node.id == node_id:
                return index
        return None

    def select(self, node_id: str) -> Node:
        """Make ``node_id`` the current selection.

        Raises:
            NotFoundError: If ``node_id`` is not in the registry.
        """
        node = self._require(node_id)
        self._selected_id = node_id
        self._log.debug("registry", f"Selected '{node.name}'", node_id=node_id)
        return node

    def deselect(self) -> None:
        self._selected_id = None

    def connect(self, source_id: str, target_id: str) -> Edge:
        """Add a directed edge. Cycles, self-loops and duplicates are not checked.

        Raises:
            NotFoundError: If either endpoint is not in the registry.
        """
        source = self._require(source_id)
        target = self._require(target_id)
        edge = Edge(source=source_id, target=target_id)
        self._edges.append(edge)
        self._log.info("registry", f"Connected '{source.name}' → '{target.name}'", node_id=source_id)
        return edge

    def _require(self, node_id: str) -> Node:
        node = self.find_by_id(node_id)
        if node is None:
            raise NotFoundError(node_id)
        return node
