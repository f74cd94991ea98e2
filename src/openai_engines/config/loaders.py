"""Configuration loaders for the environment, .env files and pyproject.toml."""

from pathlib import Path
import tomllib
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError

from openai_engines.core.exceptions import ConfigurationError

from .schema import ClientSettings

ENV_VARS = {
    "OPENAI_API_KEY": "api_key",
    "OPENAI_ORGANIZATION": "organization",
    "OPENAI_BASE_URL": "base_url",
    "OPENAI_TIMEOUT_SECONDS": "timeout_seconds",
}

TOOL_SECTION = "openai_engines"


class ConfigFileError(ConfigurationError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, file_path: Path, message: str) -> None:
        self.file_path = file_path
        self.message = message
        super().__init__(f"Config file error in {file_path}: {message}")


class EnvironmentConfigLoader:
    """Loads ``OPENAI_*`` values from the process environment or a .env file."""

    def load_env_config(self) -> dict[str, Any]:
        """Return the fields actually set in the environment, validated.

        Raises:
            ConfigurationError: If an environment variable has an invalid value.
        """
        try:
            settings = ClientSettings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e
        return {field: getattr(settings, field) for field in settings.model_fields_set}

    def load_env_file(self, env_file: str | Path) -> dict[str, Any]:
        """Read ``OPENAI_*`` values from a .env file without touching os.environ.

        Raises:
            ConfigFileError: If the file does not exist.
        """
        env_path = Path(env_file)
        if not env_path.is_file():
            raise ConfigFileError(env_path, "environment file not found")
        values = dotenv_values(env_path, encoding="utf-8")
        return {
            ENV_VARS[key.upper()]: value
            for key, value in values.items()
            if key.upper() in ENV_VARS and value is not None
        }


class FileConfigLoader:
    """Loads the ``[tool.openai_engines]`` table of a pyproject.toml."""

    def load_project_config(self, project_root: Path | None = None) -> dict[str, Any]:
        """Return the project table, or an empty dict when there is none.

        Raises:
            ConfigFileError: If pyproject.toml exists but cannot be parsed.
        """
        pyproject_path = self._find_pyproject_toml(project_root)
        if pyproject_path is None:
            return {}
        try:
            with pyproject_path.open(mode="rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigFileError(pyproject_path, f"Failed to parse TOML: {e}") from e

        section = data.get("tool", {}).get(TOOL_SECTION, {})
        if not isinstance(section, dict):
            raise ConfigFileError(
                pyproject_path, f"[tool.{TOOL_SECTION}] must be a table"
            )
        return dict(section)

    def _find_pyproject_toml(self, project_root: Path | None) -> Path | None:
        if project_root is not None:
            candidate = project_root / "pyproject.toml"
            return candidate if candidate.is_file() else None
        current = Path.cwd()
        for directory in (current, *current.parents):
            candidate = directory / "pyproject.toml"
            if candidate.is_file():
                return candidate
        return None
