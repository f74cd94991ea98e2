"""Unit tests for configuration resolution.

These tests verify the core behaviors of the configuration module:
- Loading settings from environment variables, .env files and pyproject.toml.
- Applying defaults and validation.
- Keeping the API key out of every rendering.
"""

import os
from unittest.mock import patch

import pytest

from openai_engines import ConfigurationError
from openai_engines.config import (
    DEFAULT_BASE_URL,
    ConfigFileError,
    FileConfigLoader,
    resolve_config,
)


class TestConfigurationSystem:
    """A test suite for the configuration resolution logic."""

    @pytest.mark.unit
    def test_reads_environment_variables(self):
        with patch.dict(
            os.environ,
            {
                "OPENAI_API_KEY": "env-api-key-123",
                "OPENAI_ORGANIZATION": "org-env",
                "OPENAI_TIMEOUT_SECONDS": "12.5",
            },
        ):
            resolved = resolve_config()

        assert resolved.api_key == "env-api-key-123"
        assert resolved.organization == "org-env"
        assert resolved.timeout_seconds == 12.5
        assert resolved.origin["api_key"] == "env"
        assert resolved.origin["base_url"] == "default"

    @pytest.mark.unit
    def test_defaults_without_any_source(self):
        resolved = resolve_config()

        assert resolved.api_key is None
        assert resolved.organization is None
        assert resolved.base_url == DEFAULT_BASE_URL
        assert resolved.timeout_seconds == 60.0
        assert set(resolved.origin.values()) == {"default"}

    @pytest.mark.unit
    def test_base_url_is_normalized(self):
        resolved = resolve_config({"base_url": "http://localhost:8080/v1/"})
        assert resolved.base_url == "http://localhost:8080/v1"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "overrides",
        [
            {"base_url": "ftp://example.com"},
            {"timeout_seconds": 0},
            {"timeout_seconds": "soon"},
        ],
    )
    def test_invalid_values_are_configuration_errors(self, overrides):
        with pytest.raises(ConfigurationError):
            resolve_config(overrides)

    @pytest.mark.unit
    def test_invalid_environment_value_is_a_configuration_error(self):
        with (
            patch.dict(os.environ, {"OPENAI_TIMEOUT_SECONDS": "-1"}),
            pytest.raises(ConfigurationError),
        ):
            resolve_config()

    @pytest.mark.unit
    def test_blank_api_key_counts_as_missing(self):
        assert resolve_config({"api_key": "   "}).api_key is None

    @pytest.mark.unit
    def test_unknown_programmatic_fields_are_ignored_with_a_warning(self, caplog):
        resolved = resolve_config({"api_key": "k", "model": "davinci"})

        assert resolved.api_key == "k"
        assert "model" not in resolved.origin
        assert "Ignoring unknown configuration fields" in caplog.text


class TestConfigFiles:
    @pytest.mark.unit
    def test_env_file_values(self, tmp_path):
        env_file = tmp_path / "test.env"
        env_file.write_text(
            "OPENAI_API_KEY=sk-from-file\nOPENAI_BASE_URL=https://proxy.local/v1\nOTHER=x\n"
        )
        resolved = resolve_config(env_file=env_file)

        assert resolved.api_key == "sk-from-file"
        assert resolved.base_url == "https://proxy.local/v1"
        assert resolved.origin["api_key"] == "env_file"

    @pytest.mark.unit
    def test_missing_env_file_is_an_error(self, tmp_path):
        with pytest.raises(ConfigFileError):
            resolve_config(env_file=tmp_path / "missing.env")

    @pytest.mark.unit
    def test_pyproject_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.openai_engines]\norganization = "org-file"\ntimeout_seconds = 30\n'
        )
        resolved = resolve_config(project_root=tmp_path)

        assert resolved.organization == "org-file"
        assert resolved.timeout_seconds == 30.0
        assert resolved.origin["organization"] == "file"

    @pytest.mark.unit
    def test_pyproject_is_found_from_the_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "pyproject.toml").write_text('[tool.openai_engines]\napi_key = "k"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert resolve_config().api_key == "k"

    @pytest.mark.unit
    def test_pyproject_without_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert FileConfigLoader().load_project_config(tmp_path) == {}

    @pytest.mark.unit
    def test_malformed_pyproject_is_an_error(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.openai_engines\n")
        with pytest.raises(ConfigFileError, match="Failed to parse TOML"):
            resolve_config(project_root=tmp_path)


class TestRedaction:
    @pytest.mark.unit
    def test_api_key_never_rendered(self):
        resolved = resolve_config({"api_key": "sk-secret-value"})
        frozen = resolved.to_frozen()

        for text in (str(resolved), repr(resolved), resolved.audit(), repr(frozen)):
            assert "sk-secret-value" not in text
            assert "[REDACTED]" in text

    @pytest.mark.unit
    def test_audit_reports_origins(self):
        audit = resolve_config({"timeout_seconds": 5}).audit()
        assert "timeout_seconds: 5.0 (from programmatic)" in audit
        assert "base_url: 'https://api.openai.com/v1' (from default)" in audit
