"""Pytest configuration and shared fixtures."""

import itertools

import pytest
from unittest.mock import Mock

from workflow_builder.controller import WorkflowController
from workflow_builder.ids import CounterIdSource
from workflow_builder.logging import get_system_logger
from workflow_builder.registry import NodeRegistry


@pytest.fixture(autouse=True)
def clean_logs():
    """Start every test with an empty log buffer."""
    get_system_logger().clear_logs()
    yield
    get_system_logger().clear_logs()


@pytest.fixture
def registry():
    """Registry with deterministic node ids."""
    return NodeRegistry(id_source=CounterIdSource())


@pytest.fixture
def workflow_ids():
    """Deterministic workflow id factory."""
    counter = itertools.count(1)
    return lambda: f"workflow-test-{next(counter)}"


@pytest.fixture
def emitted():
    """Collects JSON documents emitted by a controller."""
    return []


@pytest.fixture
def controller(registry, workflow_ids, emitted):
    """Controller with a mock render callback."""
    return WorkflowController(
        registry=registry,
        render=Mock(),
        emit=emitted.append,
        workflow_id_factory=workflow_ids,
    )
