"""
Logging for blueprint resolution and Phase 1 generation.

Every entry goes to Python logging under "novelcraft.<source>" and into a
bounded in-memory buffer, so a host (or a test) can read back recent
warnings such as chapter-function corrections.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from threading import Lock
from typing import Any, Dict, List, Optional

from novelcraft.config import config


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class LogEntry:
    level: LogLevel
    message: str
    source: str = "system"
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "message": self.message,
            "source": self.source,
            "metadata": self.metadata
        }


class LogBuffer:
    """Thread-safe ring of the most recent entries."""

    def __init__(self, max_size: int = 1000):
        self._entries: deque = deque(maxlen=max_size)
        self._lock = Lock()

    def add(self, entry: LogEntry):
        with self._lock:
            self._entries.append(entry)

    def get_recent(
        self,
        limit: int = 100,
        level: Optional[LogLevel] = None,
        source: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Newest first, optionally filtered by level and source."""
        with self._lock:
            entries = list(reversed(self._entries))
        matching = [
            e for e in entries
            if (level is None or e.level == level) and (source is None or e.source == source)
        ]
        return [e.to_dict() for e in matching[:limit]]

    def get_warnings(self, limit: int = 50, source: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.get_recent(limit=limit, level=LogLevel.WARNING, source=source)

    def clear(self):
        with self._lock:
            self._entries.clear()


_log_buffer = LogBuffer(max_size=config.LOG_BUFFER_SIZE)


def get_log_buffer() -> LogBuffer:
    return _log_buffer


def configure_logging(level: Optional[str] = None):
    """Configure Python logging for a host process (scripts, services)."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )


class AppLogger:
    """Logger for one source; keyword arguments become entry metadata."""

    def __init__(self, source: str):
        self.source = source
        self._logger = logging.getLogger(f"novelcraft.{source}")

    def log(self, level: LogLevel, message: str, **metadata):
        _log_buffer.add(LogEntry(level, message, self.source, metadata))
        suffix = f" | {metadata}" if metadata else ""
        self._logger.log(getattr(logging, level.name), message + suffix)

    def debug(self, message: str, **metadata):
        self.log(LogLevel.DEBUG, message, **metadata)

    def info(self, message: str, **metadata):
        self.log(LogLevel.INFO, message, **metadata)

    def warning(self, message: str, **metadata):
        self.log(LogLevel.WARNING, message, **metadata)

    def error(self, message: str, **metadata):
        self.log(LogLevel.ERROR, message, **metadata)


blueprint_logger = AppLogger("blueprints")
phase1_logger = AppLogger("phase1")
