"""Configuration validation"""

import re
from typing import List

from ..models.config import AppConfig, ChatSettings
from ..utils import logger


API_KEY_PATTERN = re.compile(r'^sk-[A-Za-z0-9\-_.]+$')
KNOWN_LEVELS = ("low", "medium", "high")


def check_api_key_format(api_key: str) -> List[str]:
    """
    Check a credential against the conventional OpenAI key format

    Unconventional credentials are accepted; the returned warnings are
    advisory only.

    Args:
        api_key: Bearer credential

    Returns:
        List of warning messages (empty if the key looks conventional)
    """
    warnings: List[str] = []
    if not api_key:
        return warnings

    if not api_key.startswith('sk-'):
        warnings.append('API key should start with "sk-"')
        return warnings

    if len(api_key) < 20 or len(api_key) > 200:
        warnings.append("API key length looks unusual (expected 20-200 characters)")

    if not API_KEY_PATTERN.match(api_key):
        warnings.append("API key contains unexpected characters")

    return warnings


class ConfigValidator:
    """Validate application configuration for consistency and completeness"""

    def __init__(self, config: AppConfig):
        """
        Initialize validator with configuration

        Args:
            config: Application configuration to validate
        """
        self.config = config
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_model(self) -> None:
        """Validate that a model identifier is configured"""
        if not self.config.chat.model.strip():
            self.errors.append("chat.model must not be empty")

    def validate_reasoning_levels(self) -> None:
        """Warn about reasoning levels the upstream is unlikely to accept"""
        chat: ChatSettings = self.config.chat
        for name in ("reasoning_effort", "verbosity"):
            value = getattr(chat, name)
            if value not in KNOWN_LEVELS:
                self.warnings.append(
                    f"chat.{name} '{value}' is not one of {', '.join(KNOWN_LEVELS)}"
                )

    def validate_api_key(self) -> None:
        """Check credential presence and format (warnings only)"""
        if not self.config.chat.api_key:
            self.warnings.append("chat.api_key is not configured; requests will fail until it is set")
            return
        self.warnings.extend(check_api_key_format(self.config.chat.api_key))

    def validate_all(self) -> List[str]:
        """
        Run all validation checks

        Returns:
            List of validation error messages (empty if valid)
        """
        self.errors = []
        self.warnings = []

        self.validate_model()
        self.validate_reasoning_levels()
        self.validate_api_key()

        return self.errors

    def is_valid(self) -> bool:
        """
        Check if configuration is valid

        Returns:
            True if valid, False otherwise
        """
        errors = self.validate_all()
        return len(errors) == 0


def validate_config(config: AppConfig) -> List[str]:
    """
    Validate configuration and raise exception if invalid

    Args:
        config: Configuration to validate

    Returns:
        Warning messages, which are logged but never fatal

    Raises:
        ValueError: If configuration is invalid
    """
    validator = ConfigValidator(config)
    errors = validator.validate_all()

    if errors:
        error_message = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
        raise ValueError(error_message)

    for warning in validator.warnings:
        logger.warning(f"Configuration warning: {warning}")

    return validator.warnings
