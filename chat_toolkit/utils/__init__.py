"""Utility functions and helpers"""

from .logger import setup_logging, logger, ChatLogger, JSONFormatter

__all__ = ["setup_logging", "logger", "ChatLogger", "JSONFormatter"]
