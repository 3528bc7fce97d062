"""Tests for configuration loading and validation"""

from unittest.mock import MagicMock

import pytest
import yaml
from pydantic import ValidationError

from chat_toolkit.core.config_loader import ConfigLoader, StaticSettings, load_config
from chat_toolkit.core.errors import ConfigurationError
from chat_toolkit.core.config_validator import (
    ConfigValidator,
    check_api_key_format,
    validate_config,
)
from chat_toolkit.models import AppConfig, ChatSettings


CONFIG_YAML = """
server:
  port: 9001
  log_level: debug
chat:
  api_key: ${TEST_CHAT_KEY}
  model: gpt-5-mini
  max_tokens: 2000
  reasoning_effort: medium
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ambient environment overrides out of the tests"""
    for name in ("OPENAI_API_KEY", "OPENAI_MODEL", "CHAT_TOOLKIT_PORT", "CHAT_TOOLKIT_HOST",
                 "CHAT_TOOLKIT_LOG_LEVEL", "CHAT_TOOLKIT_CONFIG_PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


class TestChatSettings:
    """Test settings model defaults and validation"""

    def test_defaults(self):
        """Test default settings match the documented values"""
        settings = ChatSettings()
        assert settings.api_key == ""
        assert settings.model == "gpt-4.1"
        assert settings.max_tokens == 1000
        assert settings.reasoning_effort == "low"
        assert settings.verbosity == "low"
        assert settings.timeout == 60.0
        assert settings.history_budget == 500

    def test_history_budget_floors(self):
        """Test the sub-budget is floor(max_tokens / 2)"""
        assert ChatSettings(max_tokens=1).history_budget == 0
        assert ChatSettings(max_tokens=999).history_budget == 499

    def test_api_base_validation(self):
        """Test API base must be an http(s) URL and loses its trailing slash"""
        assert ChatSettings(api_base="https://example.test/v1/").api_base == "https://example.test/v1"
        with pytest.raises(ValidationError):
            ChatSettings(api_base="example.test")

    def test_max_tokens_must_be_positive(self):
        """Test max_tokens >= 1"""
        with pytest.raises(ValidationError):
            ChatSettings(max_tokens=0)


class TestConfigLoader:
    """Test YAML loading"""

    def test_load_with_env_substitution(self, config_file, monkeypatch):
        """Test ${VAR} placeholders are substituted"""
        monkeypatch.setenv("TEST_CHAT_KEY", "sk-from-env-0123456789")

        config = ConfigLoader(str(config_file)).load()

        assert config.server.port == 9001
        assert config.server.log_level == "DEBUG"
        assert config.chat.api_key == "sk-from-env-0123456789"
        assert config.chat.model == "gpt-5-mini"
        assert config.chat.max_tokens == 2000
        assert config.chat.reasoning_effort == "medium"

    def test_unset_variable_means_no_credential(self, config_file, monkeypatch):
        """Test an unset credential variable loads as empty"""
        monkeypatch.delenv("TEST_CHAT_KEY", raising=False)
        assert ConfigLoader(str(config_file)).load().chat.api_key == ""

    def test_environment_overrides(self, config_file, monkeypatch):
        """Test OPENAI_API_KEY and OPENAI_MODEL override the file"""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-override-0123456789")
        monkeypatch.setenv("OPENAI_MODEL", "o3")

        settings = ConfigLoader(str(config_file)).load_chat_settings()

        assert settings.api_key == "sk-override-0123456789"
        assert settings.model == "o3"

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test a missing file yields default configuration"""
        config = load_config(str(tmp_path / "absent.yaml"))
        assert config == AppConfig()

    def test_invalid_yaml(self, tmp_path):
        """Test YAML syntax errors are reported as ValueError"""
        path = tmp_path / "broken.yaml"
        path.write_text("chat: [unclosed", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigLoader(str(path)).load()

    def test_loader_rereads_file_each_call(self, config_file):
        """Test the loader acts as a live settings source"""
        loader = ConfigLoader(str(config_file))
        assert loader().model == "gpt-5-mini"

        config_file.write_text("chat:\n  model: gpt-4o\n", encoding="utf-8")
        assert loader().model == "gpt-4o"

    def test_unchanged_file_is_parsed_once(self, config_file, monkeypatch):
        """Test repeated reads of an unchanged file reuse the last parse"""
        calls = []
        real_safe_load = yaml.safe_load

        def counting_safe_load(stream):
            calls.append(stream)
            return real_safe_load(stream)

        monkeypatch.setattr(yaml, "safe_load", counting_safe_load)
        loader = ConfigLoader(str(config_file))

        assert loader().model == "gpt-5-mini"
        assert loader().model == "gpt-5-mini"
        assert len(calls) == 1

    def test_environment_applies_to_cached_parse(self, config_file, monkeypatch):
        """Test environment changes are seen even when the file is unchanged"""
        loader = ConfigLoader(str(config_file))
        monkeypatch.setenv("TEST_CHAT_KEY", "sk-first-0123456789abc")
        assert loader().api_key == "sk-first-0123456789abc"

        monkeypatch.setenv("TEST_CHAT_KEY", "sk-second-0123456789ab")
        assert loader().api_key == "sk-second-0123456789ab"

    def test_invalid_settings_raise_configuration_error(self, tmp_path):
        """Test a broken file surfaces as a server-side configuration failure"""
        path = tmp_path / "config.yaml"
        path.write_text("chat:\n  max_tokens: 0\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(str(path))()

        assert exc_info.value.http_status == 500
        assert exc_info.value.details["path"] == str(path)

    def test_unparseable_file_raises_configuration_error(self, tmp_path):
        """Test YAML syntax errors from the live source are wrapped too"""
        path = tmp_path / "config.yaml"
        path.write_text("chat: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigLoader(str(path)).load_chat_settings()

    def test_server_overrides(self, config_file, monkeypatch):
        """Test CHAT_TOOLKIT_HOST and CHAT_TOOLKIT_PORT override the file"""
        monkeypatch.setenv("CHAT_TOOLKIT_HOST", "0.0.0.0")
        monkeypatch.setenv("CHAT_TOOLKIT_PORT", "9100")

        server = ConfigLoader(str(config_file)).load().server

        assert server.host == "0.0.0.0"
        assert server.port == 9100

    def test_config_path_from_environment(self, config_file, monkeypatch):
        """Test CHAT_TOOLKIT_CONFIG_PATH selects the file"""
        monkeypatch.setenv("CHAT_TOOLKIT_CONFIG_PATH", str(config_file))
        assert load_config().chat.model == "gpt-5-mini"


class TestStaticSettings:
    """Test the host-managed settings source"""

    def test_update_replaces_snapshot(self):
        """Test updates are visible on the next call"""
        source = StaticSettings(api_key="sk-a")
        first = source()
        source.update(model="o4-mini")

        assert first.model == "gpt-4.1"
        assert source().model == "o4-mini"
        assert source().api_key == "sk-a"

    def test_update_normalizes_api_base(self):
        """Test updates go through the same validators as loaded settings"""
        source = StaticSettings(api_key="sk-a")
        source.update(api_base="https://proxy.example/v1/")

        assert source().api_base == "https://proxy.example/v1"

    def test_update_rejects_invalid_values(self):
        """Test out-of-range updates are rejected and the snapshot kept"""
        source = StaticSettings(api_key="sk-a")

        with pytest.raises(ValidationError):
            source.update(max_tokens=0)
        with pytest.raises(ValidationError):
            source.update(timeout=-1)

        assert source().max_tokens == 1000
        assert source().timeout == 60.0

    def test_constructor_overrides_are_validated(self):
        """Test keyword overrides at construction are validated"""
        with pytest.raises(ValidationError):
            StaticSettings(api_key="sk-a", api_base="ftp://proxy.example")


class TestApiKeyFormat:
    """Test the accept-with-warning credential check"""

    def test_conventional_key(self):
        """Test a well-formed key produces no warnings"""
        assert check_api_key_format("sk-proj-" + "A1b2_c3.d4-" * 5) == []

    def test_missing_prefix_only_warns(self):
        """Test keys without sk- are accepted with a warning"""
        assert check_api_key_format("proj-abcdef") == ['API key should start with "sk-"']

    def test_unusual_length(self):
        """Test short and long sk- keys warn"""
        assert len(check_api_key_format("sk-short")) == 1
        assert len(check_api_key_format("sk-" + "a" * 250)) == 1

    def test_unexpected_characters(self):
        """Test sk- keys with odd characters warn"""
        warnings = check_api_key_format("sk-" + "a" * 30 + " !")
        assert warnings == ["API key contains unexpected characters"]

    def test_empty_key_has_no_format_warnings(self):
        """Test absence is handled separately from format"""
        assert check_api_key_format("") == []


class TestConfigValidator:
    """Test configuration validation"""

    def test_valid_config(self):
        """Test defaults with a key are valid"""
        config = AppConfig(chat=ChatSettings(api_key="sk-" + "a" * 40))
        validator = ConfigValidator(config)

        assert validator.is_valid()
        assert validator.warnings == []

    def test_missing_key_is_a_warning(self):
        """Test an unset key does not fail validation"""
        warnings = validate_config(AppConfig())
        assert any("api_key" in w for w in warnings)

    def test_unknown_reasoning_level_warns(self):
        """Test unexpected reasoning levels only warn"""
        config = AppConfig(chat=ChatSettings(api_key="sk-" + "a" * 40, verbosity="extreme"))
        warnings = validate_config(config)
        assert any("verbosity" in w for w in warnings)

    def test_empty_model_is_an_error(self):
        """Test an empty model identifier fails validation"""
        config = AppConfig(chat=ChatSettings(model="  "))
        with pytest.raises(ValueError, match="chat.model"):
            validate_config(config)


class TestEntryPoint:
    """Test the uvicorn entry point uses the server section"""

    def test_main_uses_configured_server(self, config_file, monkeypatch):
        """Test host, port and log level come from the loaded configuration"""
        from chat_toolkit import main as entry_point

        run = MagicMock()
        monkeypatch.setattr(entry_point.uvicorn, "run", run)
        monkeypatch.setenv("CHAT_TOOLKIT_CONFIG_PATH", str(config_file))
        monkeypatch.setenv("CHAT_TOOLKIT_HOST", "0.0.0.0")

        entry_point.main()

        run.assert_called_once()
        kwargs = run.call_args.kwargs
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9001
        assert kwargs["log_level"] == "debug"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
