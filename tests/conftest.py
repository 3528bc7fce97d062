"""Shared fixtures"""

import json
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

import pytest

from chat_toolkit.core import SessionController, StaticSettings, TransportClient
from chat_toolkit.models import ChatSettings


TEST_API_KEY = "sk-test-0123456789abcdefghij"


def completion_body(
    content: Optional[str] = "Hi",
    model: str = "gpt-4.1",
    usage: Optional[Dict[str, int]] = None,
) -> str:
    """Build a chat-completions style response body"""
    data: Dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1677652288,
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }
    if usage is not None:
        data["usage"] = usage
    return json.dumps(data)


@pytest.fixture
def settings() -> ChatSettings:
    """Settings with a conventional credential"""
    return ChatSettings(api_key=TEST_API_KEY, model="gpt-4.1", max_tokens=1000)


@pytest.fixture
def settings_source(settings) -> StaticSettings:
    return StaticSettings(settings)


@pytest.fixture
def transport() -> AsyncMock:
    """Transport mock answering "Hi" by default"""
    mock = AsyncMock(spec=TransportClient)
    mock.send.return_value = completion_body("Hi")
    return mock


@pytest.fixture
def controller(settings_source, transport) -> SessionController:
    return SessionController(settings_source=settings_source, transport=transport)
