"""Configuration loader with YAML parsing and environment variable substitution"""

import os
import re
import yaml
from typing import Any, Dict, Optional, Tuple
from pathlib import Path
from dotenv import load_dotenv

from ..models.config import AppConfig, ChatSettings, ServerConfig
from .errors import ConfigurationError


DEFAULT_CONFIG_PATH = "config/config.yaml"


class ConfigLoader:
    """Load and parse configuration from YAML files with environment variable support"""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize configuration loader

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        self._cache_key: Optional[Tuple[int, int]] = None
        self._cached_data: Any = None
        # Load environment variables from .env file if it exists
        load_dotenv()

    def _substitute_env_vars(self, value: Any) -> Any:
        """
        Recursively substitute environment variables in configuration values

        Supports ${VAR_NAME} syntax; unset variables become empty strings so
        a missing credential surfaces at call time rather than at load time.
        """
        if isinstance(value, str):
            pattern = r'\$\{([^}]+)\}'
            return re.sub(pattern, lambda match: os.getenv(match.group(1), ""), value)

        elif isinstance(value, dict):
            return {k: self._substitute_env_vars(v) for k, v in value.items()}

        elif isinstance(value, list):
            return [self._substitute_env_vars(item) for item in value]

        else:
            return value

    def _read_yaml(self) -> Any:
        """
        Parse the file, reusing the last parse while its mtime and size are unchanged

        Environment substitution is applied by the caller on every read.
        """
        try:
            stat = self.config_path.stat()
        except FileNotFoundError:
            self._cache_key = None
            self._cached_data = None
            return None

        key = (stat.st_mtime_ns, stat.st_size)
        if key == self._cache_key:
            return self._cached_data

        with open(self.config_path, 'r', encoding='utf-8') as f:
            try:
                config_data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Failed to parse YAML configuration: {e}")

        self._cache_key = key
        self._cached_data = config_data
        return config_data

    def load_yaml(self) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Returns:
            Raw configuration dictionary (empty if the file does not exist)

        Raises:
            ValueError: If YAML parsing fails
        """
        config_data = self._read_yaml()

        if config_data is None:
            return {}
        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a mapping")

        return self._substitute_env_vars(config_data)

    def _parse_server_config(self, data: Dict[str, Any]) -> ServerConfig:
        """Parse server configuration section"""
        server_data = dict(data.get('server') or {})

        # Override with environment variables if present
        if os.getenv('CHAT_TOOLKIT_HOST'):
            server_data['host'] = os.getenv('CHAT_TOOLKIT_HOST')
        if os.getenv('CHAT_TOOLKIT_PORT'):
            server_data['port'] = int(os.getenv('CHAT_TOOLKIT_PORT'))
        if os.getenv('CHAT_TOOLKIT_LOG_LEVEL'):
            server_data['log_level'] = os.getenv('CHAT_TOOLKIT_LOG_LEVEL')

        return ServerConfig(**server_data)

    def _parse_chat_settings(self, data: Dict[str, Any]) -> ChatSettings:
        """Parse chat settings section"""
        chat_data = dict(data.get('chat') or {})

        if os.getenv('OPENAI_API_KEY'):
            chat_data['api_key'] = os.getenv('OPENAI_API_KEY')
        if os.getenv('OPENAI_MODEL'):
            chat_data['model'] = os.getenv('OPENAI_MODEL')

        # Drop empty values so model defaults apply
        chat_data = {k: v for k, v in chat_data.items() if v is not None}

        return ChatSettings(**chat_data)

    def load(self) -> AppConfig:
        """
        Load and parse complete application configuration

        Returns:
            Validated AppConfig object

        Raises:
            ValueError: If configuration is invalid
        """
        raw_config = self.load_yaml()

        return AppConfig(
            server=self._parse_server_config(raw_config),
            chat=self._parse_chat_settings(raw_config),
        )

    def load_chat_settings(self) -> ChatSettings:
        """
        Re-read the file and return only the chat settings

        Raises:
            ConfigurationError: If the file is unreadable or the settings are invalid
        """
        try:
            return self._parse_chat_settings(self.load_yaml())
        except (OSError, ValueError) as e:
            raise ConfigurationError(str(e), path=str(self.config_path)) from e

    def __call__(self) -> ChatSettings:
        return self.load_chat_settings()


class StaticSettings:
    """Settings source returning a fixed, host-managed snapshot"""

    def __init__(self, settings: Optional[ChatSettings] = None, **overrides):
        self.settings = settings or ChatSettings()
        if overrides:
            self.update(**overrides)

    def update(self, **changes) -> None:
        """
        Replace the snapshot; takes effect on the next call

        Raises:
            pydantic.ValidationError: If the merged settings are invalid
        """
        self.settings = ChatSettings.model_validate(
            {**self.settings.model_dump(), **changes}
        )

    def __call__(self) -> ChatSettings:
        return self.settings


def resolve_config_path(config_path: Optional[str] = None) -> str:
    """Return config_path, CHAT_TOOLKIT_CONFIG_PATH or the default path"""
    if config_path is None:
        config_path = os.getenv('CHAT_TOOLKIT_CONFIG_PATH', DEFAULT_CONFIG_PATH)
    return config_path


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Convenience function to load configuration

    Args:
        config_path: Path to configuration file (defaults to CHAT_TOOLKIT_CONFIG_PATH env var or config/config.yaml)

    Returns:
        Loaded and validated AppConfig
    """
    return ConfigLoader(resolve_config_path(config_path)).load()
