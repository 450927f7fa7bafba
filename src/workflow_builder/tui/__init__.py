"""TUI package for the workflow builder."""

from .main import WorkflowBuilderTUI

__all__ = ["WorkflowBuilderTUI"]
