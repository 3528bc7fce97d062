"""Data models for the chat toolkit"""

from .conversation import (
    Role,
    Turn,
    Usage,
    CompletionResult,
    ModelProfile,
)

from .openai import (
    ErrorDetail,
    ErrorResponse,
)

from .config import (
    DEFAULT_SYSTEM_PROMPT,
    ChatSettings,
    ServerConfig,
    AppConfig,
)

from .api import (
    ChatRequest,
    ChatReply,
    NoteRequest,
    NoteActionResult,
    HistoryResponse,
)

__all__ = [
    # Conversation models
    "Role",
    "Turn",
    "Usage",
    "CompletionResult",
    "ModelProfile",
    # Wire models
    "ErrorDetail",
    "ErrorResponse",
    # Config models
    "DEFAULT_SYSTEM_PROMPT",
    "ChatSettings",
    "ServerConfig",
    "AppConfig",
    # Host API models
    "ChatRequest",
    "ChatReply",
    "NoteRequest",
    "NoteActionResult",
    "HistoryResponse",
]
