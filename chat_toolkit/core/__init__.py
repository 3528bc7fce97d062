"""Core business logic components"""

from .config_loader import ConfigLoader, StaticSettings, load_config
from .config_validator import ConfigValidator, check_api_key_format, validate_config
from .errors import (
    ChatToolkitError,
    CredentialMissingError,
    SessionBusyError,
    TransportFailure,
    RequestTimeoutError,
    NetworkFailureError,
    UpstreamRejectedError,
    ValidationFailure,
    InvalidPayloadError,
    EmptyCompletionError,
    NoContentError,
    ConfigurationError,
)
from .token_budget import HistorySelector, estimate_tokens, select_history
from .model_profiles import ModelProfileResolver, resolve_profile
from .request_builder import RequestBuilder, build_turns
from .transport import TransportClient
from .response_validator import ResponseValidator, validate_response
from .session_controller import SessionController, SessionState
from .note_actions import NoteAssistant

__all__ = [
    "ConfigLoader",
    "StaticSettings",
    "load_config",
    "ConfigValidator",
    "check_api_key_format",
    "validate_config",
    "ChatToolkitError",
    "CredentialMissingError",
    "SessionBusyError",
    "TransportFailure",
    "RequestTimeoutError",
    "NetworkFailureError",
    "UpstreamRejectedError",
    "ValidationFailure",
    "InvalidPayloadError",
    "EmptyCompletionError",
    "NoContentError",
    "ConfigurationError",
    "HistorySelector",
    "estimate_tokens",
    "select_history",
    "ModelProfileResolver",
    "resolve_profile",
    "RequestBuilder",
    "build_turns",
    "TransportClient",
    "ResponseValidator",
    "validate_response",
    "SessionController",
    "SessionState",
    "NoteAssistant",
]
