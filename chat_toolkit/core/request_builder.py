"""Outbound request payload assembly"""

from typing import Any, Dict, List, Sequence

from ..models.config import ChatSettings
from ..models.conversation import ModelProfile, Turn


FORMAT_INSTRUCTION = "Please format your responses using Markdown syntax for better readability."


def build_system_prompt(system_prompt: str) -> str:
    """Append the fixed formatting instruction to a system preamble"""
    return f"{system_prompt}\n\n{FORMAT_INSTRUCTION}"


def build_turns(
    system_prompt: str,
    history: Sequence[Turn],
    user_text: str,
) -> List[Turn]:
    """
    Build the ordered turn list sent on the wire

    Args:
        system_prompt: The system-level instruction (formatting instruction appended)
        history: Retained conversation turns, oldest first
        user_text: The new user message

    Returns:
        [system, *history, user]
    """
    turns = [Turn(role="system", content=build_system_prompt(system_prompt))]
    turns.extend(history)
    turns.append(Turn(role="user", content=user_text))
    return turns


class RequestBuilder:
    """Assemble payloads for either wire shape from a ModelProfile"""

    def build(
        self,
        profile: ModelProfile,
        settings: ChatSettings,
        history: Sequence[Turn],
        user_text: str,
    ) -> Dict[str, Any]:
        """
        Build a request payload

        The turn list is stored under profile.payload_field and the
        response length limit under profile.token_limit_field.

        Args:
            profile: Dispatch profile for the configured model
            settings: Live settings snapshot
            history: Retained turns to include
            user_text: The new user message

        Returns:
            JSON-serializable payload
        """
        turns = build_turns(settings.system_prompt, history, user_text)

        payload: Dict[str, Any] = {
            "model": settings.model,
            profile.payload_field: [turn.model_dump() for turn in turns],
            profile.token_limit_field: settings.max_tokens,
            "stream": False,
        }

        if profile.uses_reasoning_params:
            payload["reasoning_effort"] = settings.reasoning_effort
            payload["verbosity"] = settings.verbosity

        # Remove None values
        return {k: v for k, v in payload.items() if v is not None}
