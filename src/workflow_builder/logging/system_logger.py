"""
In-memory logging for the workflow builder.
Records are buffered so the TUI status line can show them without touching the terminal.
"""

from __future__ import annotations
import io
import logging
import sys
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    """Severity of a log entry, lowest first."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LogEntry:
    """One buffered log record."""
    timestamp: float
    level: LogLevel
    component: str  # registry, controller, export, tui, cli
    message: str
    node_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        clock = time.strftime('%H:%M:%S', time.localtime(self.timestamp))
        node_info = f"[{self.node_id}] " if self.node_id else ""
        return f"{clock} [{self.level.value}] {self.component}: {node_info}{self.message}"


class SystemLogHandler(logging.Handler):
    """Routes standard-library records from ``workflow_builder.*`` loggers into a SystemLogger."""

    LEVEL_MAP = {
        logging.DEBUG: LogLevel.DEBUG,
        logging.INFO: LogLevel.INFO,
        logging.WARNING: LogLevel.WARNING,
        logging.ERROR: LogLevel.ERROR,
        logging.CRITICAL: LogLevel.CRITICAL,
    }

    def __init__(self, system_logger: SystemLogger):
        super().__init__()
        self.system_logger = system_logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = self.LEVEL_MAP.get(record.levelno, LogLevel.INFO)
            # workflow_builder.export -> export
            component = record.name.rsplit(".", 1)[-1]
            self.system_logger.log(level, component, record.getMessage())
        except Exception:
            self.handleError(record)


class _StreamCapture(io.StringIO):
    """Stand-in for stdout/stderr while the editor owns the screen."""

    def __init__(self, logger: SystemLogger, component: str, level: LogLevel):
        super().__init__()
        self.logger = logger
        self.component = component
        self.level = level

    def write(self, s):
        if s and s.strip():
            self.logger.log(self.level, self.component, s.strip())
        return len(s)

    def isatty(self):
        return False


class SystemLogger:
    """
    Bounded, thread-safe buffer of log entries, indexed by component.
    In TUI mode it also swallows stray stdout/stderr writes into the buffer.
    """

    PACKAGE_LOGGER = "workflow_builder"

    def __init__(self, max_entries: int = 1000):
        self.log_buffer: deque[LogEntry] = deque(maxlen=max_entries)
        self.component_buffers: Dict[str, deque[LogEntry]] = {}
        self.lock = threading.Lock()

        self._saved_streams: Optional[tuple] = None
        self._attach_bridge()

    def _attach_bridge(self):
        """Install the stdlib bridge on the package logger, replacing any earlier one."""
        package_logger = logging.getLogger(self.PACKAGE_LOGGER)
        package_logger.setLevel(logging.DEBUG)
        for handler in list(package_logger.handlers):
            if isinstance(handler, SystemLogHandler):
                package_logger.removeHandler(handler)
        package_logger.addHandler(SystemLogHandler(self))

    def enable_tui_mode(self):
        """Redirect stdout/stderr into the buffer until ``disable_tui_mode``."""
        if self._saved_streams is not None:
            return
        self._saved_streams = (sys.stdout, sys.stderr)
        sys.stdout = _StreamCapture(self, "stdout", LogLevel.INFO)
        sys.stderr = _StreamCapture(self, "stderr", LogLevel.ERROR)

    def disable_tui_mode(self):
        """Restore the streams saved by ``enable_tui_mode``."""
        if self._saved_streams is None:
            return
        sys.stdout, sys.stderr = self._saved_streams
        self._saved_streams = None

    def log(self, level: LogLevel, component: str, message: str, node_id: Optional[str] = None, **metadata):
        entry = LogEntry(
            timestamp=time.time(),
            level=level,
            component=component,
            message=message,
            node_id=node_id,
            metadata=metadata
        )
        with self.lock:
            self.log_buffer.append(entry)
            self.component_buffers.setdefault(component, deque(maxlen=200)).append(entry)

    def debug(self, component: str, message: str, node_id: Optional[str] = None, **metadata):
        self.log(LogLevel.DEBUG, component, message, node_id, **metadata)

    def info(self, component: str, message: str, node_id: Optional[str] = None, **metadata):
        self.log(LogLevel.INFO, component, message, node_id, **metadata)

    def warning(self, component: str, message: str, node_id: Optional[str] = None, **metadata):
        self.log(LogLevel.WARNING, component, message, node_id, **metadata)

    def get_recent_logs(self, count: int = 50, component: Optional[str] = None,
                        level: Optional[LogLevel] = None) -> List[LogEntry]:
        """Newest ``count`` entries, optionally for one component or level."""
        with self.lock:
            source = self.component_buffers.get(component, ()) if component else self.log_buffer
            logs = list(source)
        if level:
            logs = [log for log in logs if log.level == level]
        return logs[-count:]

    def latest_message(self, min_level: LogLevel = LogLevel.INFO) -> str:
        """Most recent message at or above ``min_level``, for status lines."""
        order = list(LogLevel)
        with self.lock:
            for entry in reversed(self.log_buffer):
                if order.index(entry.level) >= order.index(min_level):
                    return entry.message
        return ""

    def clear_logs(self):
        with self.lock:
            self.log_buffer.clear()
            self.component_buffers.clear()


_global_logger: Optional[SystemLogger] = None


def get_system_logger() -> SystemLogger:
    """Get the process-wide system logger, creating it on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SystemLogger()
    return _global_logger


def init_logging() -> SystemLogger:
    """Initialize the logging system and attach the stdlib bridge."""
    return get_system_logger()
