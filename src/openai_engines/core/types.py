"""Result types shared by the decoder, the projection layer and the client.

Operations never raise for expected failures. They return a ``Result``: a
``Success`` carrying the value or a ``Failure`` carrying the error, so every
call delivers exactly one outcome.
"""

from __future__ import annotations

import dataclasses
import typing

# --- Result Monad for Explicit Error Handling ---

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful outcome."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed outcome, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


def unwrap[T](result: Success[T] | Failure[Exception]) -> T:
    """Return the success value or raise the carried error."""
    if isinstance(result, Failure):
        raise result.error
    return result.value
