"""Exception hierarchy for the OpenAI engines client.

Every failure reaching a caller is one of three kinds: a transport failure
(connection level, opaque), a structural decode failure (the payload matched
none of the known shapes) or an API error reported by the backend itself.
All three share the ``OpenAIEnginesError`` base so they can travel through
the same ``Failure`` channel while staying distinguishable by type.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class OpenAIEnginesError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(OpenAIEnginesError):
    """Raised when client configuration is invalid or incomplete."""


class TransportError(OpenAIEnginesError):
    """A connection-level failure raised by the transport.

    The underlying exception is kept as ``cause`` (and as ``__cause__`` when
    raised with ``from``) and is never interpreted by the client.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class DecodeError(OpenAIEnginesError):
    """The payload could not be decoded into any recognized shape."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class EmptyResultError(DecodeError):
    """A single item was expected but the decoded list was empty."""


class ErrorRecord(BaseModel):
    """An error object as returned by the backend."""

    model_config = ConfigDict(frozen=True)

    type: str
    code: int | str | None = None
    param: str | None = None
    message: str


class APIError(OpenAIEnginesError):
    """An error reported by the API.

    ``str()`` renders the backend message verbatim; ``repr()`` includes the
    kind, code and offending parameter for debugging.
    """

    def __init__(self, record: ErrorRecord):
        super().__init__(record.message)
        self.record = record

    @property
    def type(self) -> str:
        return self.record.type

    @property
    def code(self) -> int | str | None:
        return self.record.code

    @property
    def param(self) -> str | None:
        return self.record.param

    @property
    def message(self) -> str:
        return self.record.message

    def __str__(self) -> str:
        return self.record.message

    def debug_description(self) -> str:
        """Render kind, code, parameter and message, omitting absent parts."""
        parts = [self.record.type]
        if self.record.code is not None:
            parts.append(f"({self.record.code})")
        parts.append("-")
        if self.record.param is not None:
            parts.append(f"{self.record.param}:")
        parts.append(self.record.message)
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"APIError({self.debug_description()!r})"
