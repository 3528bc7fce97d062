"""Structured JSON logging"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import uuid


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields
        if hasattr(record, "extra"):
            log_data.update(record.extra)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ChatLogger:
    """Logger for conversation client events"""

    def __init__(self, name: str = "chat_toolkit"):
        """
        Initialize logger

        Args:
            name: Logger name
        """
        self.logger = logging.getLogger(name)
        self.request_id: Optional[str] = None

    def set_request_id(self, request_id: Optional[str]):
        """Set request ID for current context"""
        self.request_id = request_id

    def generate_request_id(self) -> str:
        """Generate new request ID"""
        self.request_id = str(uuid.uuid4())
        return self.request_id

    def _log(self, level: int, message: str, **kwargs):
        """Internal log method with extra fields"""
        extra = kwargs.copy()
        if self.request_id:
            extra["request_id"] = self.request_id

        self.logger.log(level, message, extra={"extra": extra})

    def info(self, message: str, **kwargs):
        """Log info message"""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message"""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message"""
        self._log(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message"""
        self._log(logging.DEBUG, message, **kwargs)

    def log_request(
        self,
        model: str,
        endpoint: str,
        message_count: int,
        history_turns: int,
        **kwargs
    ):
        """
        Log an outbound request

        Args:
            model: Model identifier
            endpoint: Full endpoint URL
            message_count: Number of turns on the wire
            history_turns: Number of retained turns included
            **kwargs: Additional fields
        """
        self.info(
            "Sending request",
            event_type="request",
            model=model,
            endpoint=endpoint,
            message_count=message_count,
            history_turns=history_turns,
            **kwargs
        )

    def log_history_window(
        self,
        phase: str,
        kept: int,
        dropped: int,
        estimated_tokens: int,
        budget: int,
        **kwargs
    ):
        """
        Log the result of a history window selection

        Args:
            phase: "request" when assembling a payload, "storage" when trimming
            kept: Turns kept
            dropped: Turns dropped
            estimated_tokens: Estimated cost of the kept turns
            budget: Token budget applied
            **kwargs: Additional fields
        """
        self.info(
            "History window selected",
            event_type="history_window",
            phase=phase,
            turns_kept=kept,
            turns_dropped=dropped,
            estimated_tokens=estimated_tokens,
            budget=budget,
            **kwargs
        )

    def log_completion(
        self,
        model: str,
        response_chars: int,
        usage: Optional[Dict[str, int]] = None,
        **kwargs
    ):
        """
        Log a successful completion

        Args:
            model: Model reported by the upstream (or requested)
            response_chars: Length of the completion text
            usage: Token usage reported by the upstream, if any
            **kwargs: Additional fields
        """
        self.info(
            "Completion received",
            event_type="completion",
            model=model,
            response_chars=response_chars,
            tokens=usage,
            **kwargs
        )

    def log_upstream_error(
        self,
        error_kind: str,
        error_message: str,
        status: Optional[int] = None,
        **kwargs
    ):
        """
        Log a failed call

        Args:
            error_kind: Error code of the classified failure
            error_message: Error message
            status: HTTP status, for upstream rejections
            **kwargs: Additional fields
        """
        self.error(
            "Request failed",
            event_type="request_error",
            error_type=error_kind,
            error_message=error_message,
            status=status,
            **kwargs
        )

    def log_raw_response(
        self,
        model: str,
        response_data: Any,
        status: Optional[int] = None,
        **kwargs
    ):
        """
        Log a raw upstream response (debug mode only)

        Args:
            model: Model identifier
            response_data: Extracted response content or raw text
            status: HTTP status code
            **kwargs: Additional fields
        """
        self.debug(
            "Raw upstream response",
            event_type="raw_response",
            model=model,
            status=status,
            response=response_data,
            **kwargs
        )


def setup_logging(log_level: str = "INFO"):
    """
    Set up logging configuration

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    # Set level for third-party loggers
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# Shared logger instance
logger = ChatLogger()
