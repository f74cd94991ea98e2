"""Configuration resolution with precedence handling.

Sources are merged in this order, later ones winning:
Defaults < pyproject.toml < .env file < Environment < Programmatic
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from openai_engines.core.exceptions import ConfigurationError

from .loaders import EnvironmentConfigLoader, FileConfigLoader
from .schema import ClientSettings
from .types import ConfigOrigin, ResolvedConfig

logger = logging.getLogger(__name__)


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        env_file: str | Path | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources.

        Args:
            programmatic: Overrides with the highest precedence.
            env_file: Optional .env file to read ``OPENAI_*`` values from.
            project_root: Directory holding pyproject.toml; searched upwards
                from the working directory when omitted.

        Raises:
            ConfigurationError: If a source is malformed or the merged values
                fail validation.
        """
        merged: dict[str, Any] = {}
        origin: dict[str, ConfigOrigin] = {}

        def apply(values: dict[str, Any], source: ConfigOrigin) -> None:
            for field, value in values.items():
                if field in merged:  # Only override known fields
                    merged[field] = value
                    origin[field] = source

        # Step 1: schema defaults, without reading the environment
        for field, info in ClientSettings.model_fields.items():
            merged[field] = info.default
            origin[field] = "default"

        # Step 2: project file
        apply(self.file_loader.load_project_config(project_root), "file")

        # Step 3: .env file
        if env_file is not None:
            apply(self.env_loader.load_env_file(env_file), "env_file")

        # Step 4: environment variables
        apply(self.env_loader.load_env_config(), "env")

        # Step 5: programmatic overrides
        if programmatic:
            unknown = sorted(set(programmatic) - set(merged))
            if unknown:
                logger.warning("Ignoring unknown configuration fields: %s", unknown)
            apply(programmatic, "programmatic")

        try:
            settings = ClientSettings(**merged)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        final = settings.to_dict()
        resolved = ResolvedConfig(**final, origin=origin)
        logger.debug("Resolved configuration: %s", resolved)
        return resolved


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    env_file: str | Path | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration using the default resolver."""
    return ConfigResolver().resolve(
        programmatic, env_file=env_file, project_root=project_root
    )
