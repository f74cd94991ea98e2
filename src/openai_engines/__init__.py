"""Typed asynchronous client for the OpenAI engines API."""

import importlib.metadata
import logging

from openai_engines.client import HTTPXTransport, OpenAIClient, Transport
from openai_engines.config import FrozenConfig, ResolvedConfig, resolve_config
from openai_engines.core.engines import EngineID, KnownEngine
from openai_engines.core.exceptions import (
    APIError,
    ConfigurationError,
    DecodeError,
    EmptyResultError,
    ErrorRecord,
    OpenAIEnginesError,
    TransportError,
)
from openai_engines.core.models import (
    Answers,
    Choice,
    Classification,
    ClassificationExample,
    Completion,
    DeletedFile,
    DocumentSource,
    Engine,
    File,
    FilePurpose,
    FileSource,
    FinishReason,
    LogProbs,
    SearchResult,
)
from openai_engines.core.safety import Safety
from openai_engines.core.sampling import Sampling
from openai_engines.core.types import Failure, Result, Success, unwrap
from openai_engines.response import decode_envelope
from openai_engines.telemetry import TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("openai-engines")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Client
    "OpenAIClient",
    "Transport",
    "HTTPXTransport",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
    # Identifiers and values
    "EngineID",
    "KnownEngine",
    "Safety",
    "Sampling",
    # Records
    "Engine",
    "Completion",
    "Choice",
    "FinishReason",
    "LogProbs",
    "SearchResult",
    "Classification",
    "ClassificationExample",
    "DocumentSource",
    "FileSource",
    "Answers",
    "File",
    "FilePurpose",
    "DeletedFile",
    # Results
    "Result",
    "Success",
    "Failure",
    "unwrap",
    "decode_envelope",
    # Exceptions
    "OpenAIEnginesError",
    "TransportError",
    "DecodeError",
    "EmptyResultError",
    "APIError",
    "ErrorRecord",
    "ConfigurationError",
]
