"""Utility modules for novelcraft."""

from novelcraft.utils.logging import (
    get_log_buffer,
    configure_logging,
    LogLevel,
    LogEntry,
    LogBuffer,
    AppLogger,
    blueprint_logger,
    phase1_logger,
)

__all__ = [
    "get_log_buffer",
    "configure_logging",
    "LogLevel",
    "LogEntry",
    "LogBuffer",
    "AppLogger",
    "blueprint_logger",
    "phase1_logger",
]
