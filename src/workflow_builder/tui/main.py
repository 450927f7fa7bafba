"""
Interactive workflow editor using Urwid.
Layout: Header / Node list + Canvas / Properties / Status + Help bar
"""

from __future__ import annotations
import sys
from typing import List, Optional

import urwid

from ..catalog import NodeKind, palette
from ..controller import WorkflowController
from ..logging import LogLevel, init_logging
from ..projector import Projection
from ..registry import NotFoundError

HEADER_TEXT = " Agent Workflow Builder - Terminal Edition "
HELP_TEXT = (
    " [a] Agent | [i] GroupChat | [s] Sequential | [p] Parallel | [d] Delete |"
    " [c] Connect | [r] Rename | [g] Generate | [q] Quit "
)

ADD_KEYS = {
    "a": NodeKind.AGENT,
    "i": NodeKind.GROUP_CHAT,
    "s": NodeKind.SEQUENTIAL,
    "p": NodeKind.PARALLEL,
}


class WorkflowBuilderTUI:
    """
    Single-screen workflow editor.

    ┌─ Header ──────────────────────────────────────────────┐
    ├─ Nodes ───────────┬─ Canvas ──────────────────────────┤
    │  ↑↓ Navigate      │  ● name [Kind]                    │
    │  Enter select     │  Connections: a → b               │
    ├─ Properties ──────┴───────────────────────────────────┤
    └─ Status / Help ───────────────────────────────────────┘
    """

    def __init__(self, controller: Optional[WorkflowController] = None):
        self.pending_output: List[str] = []
        self.controller = controller or WorkflowController()
        self.controller.render = self._apply_projection
        self.controller.emit = self.pending_output.append

        self.system_logger = init_logging()
        self.renaming = False

        self.palette = [
            ('header', 'white,bold', 'black'),
            ('footer', 'white', 'black'),
            ('status', 'light green', 'black'),
            ('selected', 'white,bold', 'dark blue'),
            ('focus', 'white,bold', 'dark green'),
        ] + palette()

        self._create_widgets()
        self._setup_layout()

    def _create_widgets(self):
        """Create all UI widgets."""
        self.header_text = urwid.Text(HEADER_TEXT)

        self.node_list_walker = urwid.SimpleFocusListWalker([])
        self.node_listbox = urwid.ListBox(self.node_list_walker)

        self.canvas_text = urwid.Text("")
        self.canvas_listbox = urwid.ListBox(urwid.SimpleFocusListWalker([self.canvas_text]))

        self.properties_text = urwid.Text("")

        self.status_text = urwid.Text("")
        self.help_text = urwid.Text(HELP_TEXT)
        self.rename_edit = urwid.Edit(" Name: ")

    def _setup_layout(self):
        """Setup the main layout structure."""
        left_panel = urwid.LineBox(self.node_listbox, title="Nodes")
        canvas_panel = urwid.LineBox(self.canvas_listbox, title="Canvas")

        columns = urwid.Columns([
            ('weight', 3, left_panel),
            ('weight', 7, canvas_panel),
        ], dividechars=1)

        properties_panel = urwid.LineBox(
            urwid.Filler(self.properties_text, 'top'),
            title="Properties"
        )

        body = urwid.Pile([
            ('weight', 7, columns),
            ('weight', 3, properties_panel),
        ])

        self.footer_pile = urwid.Pile([
            urwid.AttrMap(self.status_text, 'status'),
            urwid.AttrMap(self.help_text, 'footer'),
        ])

        self.main_frame = urwid.Frame(
            body=body,
            header=urwid.AttrMap(self.header_text, 'header'),
            footer=self.footer_pile
        )

    def _apply_projection(self, projection: Projection) -> None:
        """Replace every view with the latest projection."""
        self._update_node_list(projection)
        self.canvas_text.set_text(projection.canvas)
        self.properties_text.set_text(projection.properties)

    def _update_node_list(self, projection: Projection) -> None:
        focus = self._focused_index()
        self.node_list_walker.clear()

        registry = self.controller.registry
        if not registry.nodes:
            self.node_list_walker.append(urwid.Text(projection.list_lines[0]))
            return

        for i, line in enumerate(projection.list_lines):
            button = urwid.Button(line, on_press=self._node_selected, user_data=i)
            node = registry.node_at(i)
            attr = 'selected' if node is not None and node.id == registry.selected_id else None
            self.node_list_walker.append(urwid.AttrMap(button, attr, 'focus'))

        if focus is not None:
            self.node_list_walker.set_focus(min(focus, len(self.node_list_walker) - 1))

    def _focused_index(self) -> Optional[int]:
        """List position under the cursor, if the list holds nodes."""
        if not self.controller.registry.nodes or not self.node_list_walker:
            return None
        return self.node_listbox.focus_position

    def _update_status(self) -> None:
        self.status_text.set_text(f" {self.system_logger.latest_message(LogLevel.INFO)}")

    def _node_selected(self, button, index):
        """Handle node selection."""
        self.controller.select(index)
        self._update_status()

    def _start_rename(self) -> None:
        node = self.controller.registry.selected
        if node is None:
            self.system_logger.warning("tui", "Select a node before renaming")
            return
        self.renaming = True
        self.rename_edit.set_edit_text(node.name)
        self.rename_edit.set_edit_pos(len(node.name))
        self.footer_pile.contents[0] = (self.rename_edit, self.footer_pile.options())
        self.footer_pile.focus_position = 0
        self.main_frame.focus_position = 'footer'

    def _finish_rename(self, commit: bool) -> None:
        name = self.rename_edit.edit_text.strip()
        self.renaming = False
        self.footer_pile.contents[0] = (urwid.AttrMap(self.status_text, 'status'), self.footer_pile.options())
        self.main_frame.focus_position = 'body'
        if commit and name:
            self.controller.rename(name)

    def _connect_to_focused(self) -> None:
        index = self._focused_index()
        if index is None:
            self.system_logger.warning("tui", "No node to connect to")
            return
        self.controller.connect(index)

    def _handle_input(self, key):
        """Handle keyboard input not consumed by widgets."""
        if not isinstance(key, str):
            return

        try:
            if self.renaming:
                if key == 'enter':
                    self._finish_rename(commit=True)
                elif key == 'esc':
                    self._finish_rename(commit=False)
                return

            lowered = key.lower()
            if key in ('q', 'Q', 'ctrl c'):
                self.controller.quit()
                raise urwid.ExitMainLoop()
            elif lowered in ADD_KEYS and len(key) == 1:
                self.controller.add(ADD_KEYS[lowered])
            elif lowered == 'd':
                self.controller.delete()
            elif lowered == 'c':
                self._connect_to_focused()
            elif lowered == 'r':
                self._start_rename()
            elif lowered == 'g':
                self.controller.export()
                self.system_logger.info("tui", f"Workflow JSON #{len(self.pending_output)} will print on exit")
            elif key == 'esc':
                self.controller.deselect()
        except NotFoundError as e:
            self.system_logger.warning("tui", str(e), node_id=e.node_id)
        finally:
            self._update_status()

    def flush_output(self, stream=None) -> None:
        """Write buffered export documents, one per export."""
        stream = stream or sys.stdout
        for document in self.pending_output:
            stream.write(document + "\n")
        stream.flush()
        self.pending_output.clear()

    def run(self) -> None:
        """Run the editor until quit, then print generated JSON."""
        self.controller.refresh()
        self.system_logger.info("tui", "Press a/i/s/p to add a node")
        self._update_status()

        self.system_logger.enable_tui_mode()
        try:
            loop = urwid.MainLoop(
                self.main_frame,
                palette=self.palette,
                unhandled_input=self._handle_input
            )
            loop.run()
        except KeyboardInterrupt:
            self.controller.quit()
        finally:
            self.system_logger.disable_tui_mode()
            self.flush_output()
