"""Projection of a transport outcome into the caller-facing result.

A dispatch produces either the raw body or a transport error. Projection
merges that outcome with the decoded envelope into a single ``Result``:

- a transport failure is passed through verbatim and nothing is decoded
- a structural decode failure becomes ``Failure(DecodeError)``
- an error record from the backend becomes ``Failure(APIError)``
- a decoded value becomes ``Success``, optionally narrowed to its first item
  or transformed for the public contract of the operation

Exactly one of value or error reaches the caller.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from openai_engines.core.exceptions import (
    APIError,
    DecodeError,
    EmptyResultError,
    OpenAIEnginesError,
    TransportError,
)
from openai_engines.core.types import Failure, Result, Success
from openai_engines.response.envelope import decode_envelope

__all__ = ["Outcome", "project", "project_first", "project_map"]

type Outcome = Success[bytes] | Failure[TransportError]


def project[V](outcome: Outcome, value_type: type[V] | Any) -> Result[V, OpenAIEnginesError]:
    """Decode a successful outcome into ``value_type`` or surface the failure."""
    if isinstance(outcome, Failure):
        return outcome
    try:
        envelope = decode_envelope(outcome.value, value_type)
    except DecodeError as e:
        return Failure(e)
    if isinstance(envelope, Failure):
        return Failure(APIError(envelope.error))
    return envelope


def project_map[V, U](
    outcome: Outcome,
    value_type: type[V] | Any,
    transform: Callable[[V], U],
) -> Result[U, OpenAIEnginesError]:
    """Decode into ``value_type`` and apply a pure transform to the value."""
    result = project(outcome, value_type)
    if isinstance(result, Failure):
        return result
    return Success(transform(result.value))


def _identity(value: Any) -> Any:
    return value


def project_first[V, T](
    outcome: Outcome,
    value_type: type[V] | Any,
    items: Callable[[V], Sequence[T]] = _identity,
) -> Result[T, OpenAIEnginesError]:
    """Decode a list-shaped value and deliver its first element.

    Args:
        outcome: The dispatch outcome.
        value_type: The type decoded from the wire.
        items: Selects the sequence to narrow; the decoded value itself by
            default, for endpoints returning a bare list.

    Returns:
        The first item, or ``Failure(EmptyResultError)`` when there is none.
    """
    result = project(outcome, value_type)
    if isinstance(result, Failure):
        return result
    sequence = items(result.value)
    if not sequence:
        return Failure(EmptyResultError(f"empty result for {_type_name(value_type)}"))
    return Success(sequence[0])


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or repr(value_type)
