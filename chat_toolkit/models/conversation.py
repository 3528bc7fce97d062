"""Conversation data models"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict


Role = Literal["system", "user", "assistant"]


class Turn(BaseModel):
    """One message attributed to a role"""
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class Usage(BaseModel):
    """Token usage reported by the upstream service"""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class CompletionResult(BaseModel):
    """Validated completion returned to the caller"""
    text: str
    model: Optional[str] = None
    usage: Optional[Usage] = None


class ModelProfile(BaseModel):
    """Dispatch parameters derived from a model identifier"""
    model_config = ConfigDict(frozen=True)

    endpoint_kind: Literal["chat", "responses"] = "chat"
    payload_field: Literal["messages", "input"] = "messages"
    token_limit_field: Literal["max_tokens", "max_completion_tokens"] = "max_tokens"
    uses_reasoning_params: bool = False

    @property
    def endpoint_path(self) -> str:
        """Path of the endpoint relative to the API base"""
        if self.endpoint_kind == "responses":
            return "responses"
        return "chat/completions"
