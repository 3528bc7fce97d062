"""
Typed exceptions for the chat toolkit.

Every failure of a conversational round is raised as a subclass of
ChatToolkitError and reaches the caller unchanged:

- CredentialMissingError: no credential configured, raised before any network call
- TransportFailure: RequestTimeoutError, NetworkFailureError, UpstreamRejectedError
- ValidationFailure: InvalidPayloadError, EmptyCompletionError, NoContentError
- SessionBusyError: submit() called while another call is outstanding
- ConfigurationError: the live settings source could not produce valid settings
"""

from typing import Any, Dict, Optional


class ChatToolkitError(Exception):
    """Base exception for all chat toolkit errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error kind
        details: Additional context as key-value pairs
    """

    code = "chat_toolkit_error"
    http_status = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging or API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class CredentialMissingError(ChatToolkitError):
    """No bearer credential is configured."""

    code = "credential_missing"
    http_status = 400

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message or "OpenAI API key is not set. Configure api_key before sending messages."
        )


class SessionBusyError(ChatToolkitError):
    """submit() was called while a previous call is still in flight."""

    code = "session_busy"
    http_status = 409

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "A request is already in progress for this session.")


class TransportFailure(ChatToolkitError):
    """Base class for failures classified by the transport client."""

    http_status = 502


class RequestTimeoutError(TransportFailure):
    """The bounded deadline expired before the upstream answered."""

    code = "timeout"
    http_status = 504

    def __init__(self, timeout: float, model: Optional[str] = None) -> None:
        self.timeout = timeout
        message = f"Request timeout after {timeout:g} seconds."
        if model:
            message += f" This may indicate the model '{model}' is not available or experiencing issues."
        super().__init__(message, details={"timeout": timeout, "model": model})


class NetworkFailureError(TransportFailure):
    """Name resolution, connection or TLS failure."""

    code = "network_failure"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(
            f"Network error: {detail}. Please check your internet connection and try again.",
            details={"detail": detail},
        )


class UpstreamRejectedError(TransportFailure):
    """The upstream service answered with a non-success status code."""

    code = "upstream_rejected"

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.upstream_message = message
        super().__init__(
            f"OpenAI API error: {status}. {message}",
            details={"status": status, "message": message},
        )


class ValidationFailure(ChatToolkitError):
    """Base class for failures raised while validating a response body."""

    http_status = 502


class InvalidPayloadError(ValidationFailure):
    """The response body could not be parsed."""

    code = "invalid_payload"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "Invalid JSON response from OpenAI API")


class EmptyCompletionError(ValidationFailure):
    """The response carried no completion choices."""

    code = "empty_completion"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "No response choices received from the model")


class NoContentError(ValidationFailure):
    """The first choice carried no text."""

    code = "no_content"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "No content in the model response")


class ConfigurationError(ChatToolkitError):
    """The configured settings could not be loaded or failed validation."""

    code = "configuration_error"
    http_status = 500

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(f"Invalid configuration: {message}", details={"path": path})
