"""Request and response models for the host HTTP surface"""

from typing import List, Optional, Union
from pydantic import BaseModel, Field

from .conversation import Turn


class ChatRequest(BaseModel):
    """One conversational round"""
    message: str = Field(min_length=1)


class ChatReply(BaseModel):
    """Assistant reply"""
    reply: str


class NoteRequest(BaseModel):
    """Note action input"""
    content: str = Field(min_length=1)
    prompt: Optional[str] = None


class NoteActionResult(BaseModel):
    """Note action output"""
    action: str
    result: Union[str, List[str]]


class HistoryResponse(BaseModel):
    """Snapshot of the session"""
    state: str
    reset_pending: bool = False
    turns: List[Turn] = Field(default_factory=list)
