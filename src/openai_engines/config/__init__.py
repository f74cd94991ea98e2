"""Configuration for the client.

Resolve once, freeze, then hand the frozen config to the client:

    config = resolve_config({"timeout_seconds": 30}).to_frozen()
"""

from .loaders import ConfigFileError, EnvironmentConfigLoader, FileConfigLoader
from .resolver import ConfigResolver, resolve_config
from .schema import DEFAULT_BASE_URL, ClientSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "DEFAULT_BASE_URL",
    "ClientSettings",
    "ConfigFileError",
    "ConfigOrigin",
    "ConfigResolver",
    "EnvironmentConfigLoader",
    "FileConfigLoader",
    "FrozenConfig",
    "ResolvedConfig",
    "SourceMap",
    "resolve_config",
]
