"""Logging package for the workflow builder."""

from .system_logger import (
    SystemLogger,
    SystemLogHandler,
    LogLevel,
    LogEntry,
    get_system_logger,
    init_logging,
)

__all__ = [
    "SystemLogger",
    "SystemLogHandler",
    "LogLevel",
    "LogEntry",
    "get_system_logger",
    "init_logging",
]
