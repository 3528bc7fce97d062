"""Validation of raw completion response bodies"""

import json
from typing import Any, Dict

from pydantic import ValidationError

from ..models.conversation import CompletionResult, Usage
from .errors import InvalidPayloadError, EmptyCompletionError, NoContentError


class ResponseValidator:
    """Turn a raw successful response body into a CompletionResult"""

    @staticmethod
    def parse(body: str) -> Dict[str, Any]:
        """
        Parse a response body as a JSON object

        Raises:
            InvalidPayloadError: If the body is not a JSON object
        """
        try:
            data = json.loads(body)
        except (TypeError, ValueError) as e:
            raise InvalidPayloadError() from e

        if not isinstance(data, dict):
            raise InvalidPayloadError("Response from OpenAI API is not a JSON object")

        return data

    @staticmethod
    def extract_text(data: Dict[str, Any]) -> str:
        """
        Extract the first choice's text

        Raises:
            EmptyCompletionError: If choices are missing or empty
            NoContentError: If the first choice carries no text
        """
        choices = data.get("choices")
        if not choices or not isinstance(choices, list):
            raise EmptyCompletionError()

        first_choice = choices[0]
        message = first_choice.get("message") if isinstance(first_choice, dict) else None
        content = message.get("content") if isinstance(message, dict) else None

        if not content or not isinstance(content, str):
            raise NoContentError()

        return content

    @classmethod
    def validate(cls, body: str) -> CompletionResult:
        """
        Validate a raw response body

        Args:
            body: Raw response body text

        Returns:
            CompletionResult carrying the text plus model and usage when reported
        """
        data = cls.parse(body)
        text = cls.extract_text(data)

        usage = None
        if isinstance(data.get("usage"), dict):
            try:
                usage = Usage(**data["usage"])
            except ValidationError:
                usage = None

        model = data.get("model")
        return CompletionResult(
            text=text,
            model=model if isinstance(model, str) else None,
            usage=usage,
        )


def validate_response(body: str) -> str:
    """Validate a raw response body and return the completion text"""
    return ResponseValidator.validate(body).text
