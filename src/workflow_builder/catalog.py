"""Node kind catalog.

Static display metadata for the four workflow node kinds. The color tag of each
entry doubles as an urwid palette attribute and a rich style name, so every
colored fragment produced by the projector comes from this table.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


# Non-color styles used by the projector
STYLE_EMPHASIS = "bold"
STYLE_MUTED = "dim"


class NodeKind(Enum):
    """Supported node kinds."""

    AGENT = "agent"
    GROUP_CHAT = "groupchat"
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"

    @classmethod
    def parse(cls, text: str) -> NodeKind:
        """Resolve a kind from its tag or display label (case-insensitive).

        Raises:
            ValueError: If the text names no known kind.
        """
        needle = text.strip().lower()
        for kind in cls:
            if needle in (kind.value, kind.name.lower(), lookup(kind).label.lower()):
                return kind
        allowed = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unknown node kind '{text}' (expected one of: {allowed})")


@dataclass(frozen=True)
class KindInfo:
    """Display metadata for a node kind."""
    label: str
    color_tag: str
    description: str


_CATALOG = {
    NodeKind.AGENT: KindInfo("Agent Node", "cyan", "Single agent invocation"),
    NodeKind.GROUP_CHAT: KindInfo("Group Chat", "magenta", "Multi-agent conversation"),
    NodeKind.SEQUENTIAL: KindInfo("Sequential", "red", "Ordered execution"),
    NodeKind.PARALLEL: KindInfo("Parallel", "yellow", "Concurrent execution"),
}

def check_catalog(catalog) -> None:
    """Raise if ``catalog`` lacks an entry for any NodeKind."""
    missing = set(NodeKind) - set(catalog)
    if missing:
        names = ", ".join(sorted(kind.value for kind in missing))
        raise RuntimeError(f"Kind catalog is missing: {names}")


check_catalog(_CATALOG)


def lookup(kind: NodeKind) -> KindInfo:
    """Get the catalog entry for a kind."""
    return _CATALOG[kind]


def palette() -> List[Tuple[str, str, str]]:
    """Build urwid palette entries for every catalog color and style."""
    urwid_colors = {
        "cyan": "light cyan",
        "magenta": "light magenta",
        "red": "light red",
        "yellow": "yellow",
    }
    entries = [
        (info.color_tag, urwid_colors.get(info.color_tag, "default"), "default")
        for info in _CATALOG.values()
    ]
    entries.extend([
        (STYLE_EMPHASIS, "white,bold", "default"),
        (STYLE_MUTED, "dark gray", "default"),
    ])
    return entries
