"""Response diagnostics utilities for analyzing completion responses"""

import json
from typing import Dict, Any


class ResponseDiagnostics:
    """Helpers for summarizing upstream responses in logs"""

    @staticmethod
    def extract_response_content(
        response_data: Any
    ) -> Dict[str, Any]:
        """
        Extract the key fields of a response for logging

        Args:
            response_data: Parsed response body

        Returns:
            Dict with choices_count, content, role, finish_reason, model and usage
        """
        extracted = {
            "has_choices": False,
            "choices_count": 0,
            "content": None,
            "role": None,
            "finish_reason": None,
            "model": None,
            "usage": None,
        }

        if not isinstance(response_data, dict):
            return extracted

        extracted["model"] = response_data.get("model")
        extracted["usage"] = response_data.get("usage")

        choices = response_data.get("choices")
        if not choices or not isinstance(choices, list):
            return extracted

        extracted["has_choices"] = True
        extracted["choices_count"] = len(choices)

        first_choice = choices[0]
        if not isinstance(first_choice, dict):
            return extracted

        extracted["finish_reason"] = first_choice.get("finish_reason")

        message = first_choice.get("message")
        if not isinstance(message, dict):
            return extracted

        extracted["role"] = message.get("role")
        content = message.get("content")
        if isinstance(content, str):
            content = ResponseDiagnostics.truncate_for_logging(content)
        extracted["content"] = content

        return extracted

    @staticmethod
    def truncate_for_logging(
        content: Any,
        max_length: int = 2000
    ) -> str:
        """
        Truncate content for logging

        Args:
            content: Original content
            max_length: Maximum length

        Returns:
            Truncated content, marked with [TRUNCATED] when shortened
        """
        if not isinstance(content, str):
            content = str(content)

        if len(content) <= max_length:
            return content

        return content[:max_length] + " [TRUNCATED]"

    @staticmethod
    def describe_body(body: str) -> Any:
        """
        Summarize a raw response body for logging

        Returns the extracted key fields when the body is JSON, otherwise
        the truncated raw text.
        """
        try:
            data = json.loads(body)
        except (TypeError, ValueError):
            return ResponseDiagnostics.truncate_for_logging(body)
        return ResponseDiagnostics.extract_response_content(data)
