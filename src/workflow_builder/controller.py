"""
Interaction controller - maps named commands onto one editing session.

Each command is a direct call-through to the registry; after every mutation the
views are re-projected and handed to the ``render`` callback.
"""

from __future__ import annotations
import sys
from typing import Callable, Optional

from .catalog import NodeKind
from .config import BuilderSettings
from .export import serialize, to_json
from .ids import new_workflow_id
from .logging import get_system_logger
from .projector import Projection, project
from .registry import Edge, Node, NodeRegistry, NotFoundError


def _write_stdout(document: str) -> None:
    sys.stdout.write(document + "\n")
    sys.stdout.flush()


class WorkflowController:
    """Owns a registry and turns discrete commands into registry operations."""

    def __init__(
        self,
        registry: Optional[NodeRegistry] = None,
        settings: Optional[BuilderSettings] = None,
        render: Optional[Callable[[Projection], None]] = None,
        emit: Optional[Callable[[str], None]] = None,
        workflow_id_factory: Callable[[], str] = new_workflow_id,
    ):
        self.registry = registry if registry is not None else NodeRegistry()
        self.settings = settings or BuilderSettings()
        self.render = render
        self.emit = emit or _write_stdout
        self.workflow_id_factory = workflow_id_factory
        self.finished = False
        self.system_logger = get_system_logger()

    def refresh(self) -> Projection:
        """Re-project the views and hand them to the display layer."""
        projection = project(self.registry)
        if self.render is not None:
            self.render(projection)
        return projection

    def add(self, kind: NodeKind) -> Node:
        node = self.registry.add_node(kind)
        self.refresh()
        return node

    def delete(self) -> Optional[Node]:
        """Delete the selected node; without a selection this is a no-op."""
        selected_id = self.registry.selected_id
        if selected_id is None:
            self.system_logger.debug("controller", "Delete requested with no selection")
            return None
        node = self.registry.delete_node(selected_id)
        self.refresh()
        return node

    def select(self, index: int) -> Optional[Node]:
        """Select the node at a list position; out-of-range indexes are ignored."""
        node = self.registry.node_at(index)
        if node is None:
            return None
        self.registry.select(node.id)
        self.refresh()
        return node

    def deselect(self) -> None:
        self.registry.deselect()
        self.refresh()

    def rename(self, name: str) -> Node:
        """Rename the selected node.

        Raises:
            NotFoundError: If nothing is selected.
        """
        selected_id = self._require_selection("rename")
        node = self.registry.rename_node(selected_id, name)
        self.refresh()
        return node

    def connect(self, index: int) -> Edge:
        """Connect the selected node to the node at ``index``.

        Raises:
            NotFoundError: If nothing is selected or ``index`` is out of range.
        """
        selected_id = self._require_selection("connect")
        target = self.registry.node_at(index)
        if target is None:
            raise NotFoundError(f"#{index}", f"No node at position {index}")
        edge = self.registry.connect(selected_id, target.id)
        self.refresh()
        return edge

    def export(self) -> str:
        """Serialize the graph, emit the JSON document and return it."""
        document = to_json(serialize(
            self.registry.nodes,
            settings=self.settings,
            workflow_id_factory=self.workflow_id_factory,
        ))
        self.emit(document)
        self.system_logger.info("controller", f"Generated workflow JSON ({len(self.registry)} nodes)")
        return document

    def quit(self) -> None:
        self.finished = True
        self.system_logger.info("controller", "Quit requested")

    def _require_selection(self, action: str) -> str:
        selected_id = self.registry.selected_id
        if selected_id is None:
            raise NotFoundError("<none>", f"Cannot {action}: no node selected")
        return selected_id
