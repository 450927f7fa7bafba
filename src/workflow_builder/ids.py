"""Identifier sources for nodes and exported workflows."""

from __future__ import annotations
import itertools
import time
import uuid
from typing import Callable


class CounterIdSource:
    """Deterministic ids: ``node_1``, ``node_2``, ..."""

    def __init__(self, prefix: str = "node", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


class ClockIdSource:
    """Timestamp ids with a sequence suffix.

    The suffix keeps ids unique for the lifetime of the source even when the
    clock returns the same value twice.
    """

    def __init__(self, clock: Callable[[], float] = time.time, prefix: str = "node"):
        self.clock = clock
        self.prefix = prefix
        self._seq = itertools.count(1)

    def __call__(self) -> str:
        millis = int(self.clock() * 1000)
        return f"{self.prefix}_{millis}_{next(self._seq)}"


def new_workflow_id() -> str:
    """Generate a fresh workflow id for an export."""
    return f"workflow-{uuid.uuid4().hex}"
