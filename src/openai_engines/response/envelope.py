"""Decoding of raw response bodies into a success value or an API error.

The backend is not consistent about how it shapes responses: some endpoints
return a naked object or array, listings wrap the value under ``data`` (the
engine listing as ``{"object": "list", "data": [...]}``) and errors arrive
either as a naked error object or under ``error``. The decoder tries each
shape in a fixed order and commits to the first one that validates:

1. the whole payload as the value type
2. the whole payload as an error record
3. the ``data`` member as the value type
4. the ``error`` member as an error record

Value shapes are tried before error shapes, so a payload satisfying both is
always a value. A payload matching none of them is a ``DecodeError``; it is
never defaulted.

Decoding is a pure function of its input: no I/O, no logging, no retries.
"""

from __future__ import annotations

from collections.abc import Callable
import functools
import json
from typing import Any

from pydantic import TypeAdapter, ValidationError

from openai_engines.core.exceptions import DecodeError, ErrorRecord
from openai_engines.core.types import Failure, Success

__all__ = ["Envelope", "decode_envelope", "load_payload"]

type Envelope[V] = Success[V] | Failure[ErrorRecord]

_NO_MATCH: Any = object()

_ERROR_ADAPTER: TypeAdapter[ErrorRecord] = TypeAdapter(ErrorRecord)


@functools.lru_cache(maxsize=128)
def _value_adapter(value_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(value_type)


def load_payload(raw: bytes | str) -> Any:
    """Parse a raw body as JSON, raising ``DecodeError`` when it is not JSON."""
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"response body is not valid JSON: {e}") from e
    except RecursionError as e:
        raise DecodeError("response body is nested too deeply") from e


def _member(payload: Any, key: str) -> Any:
    if isinstance(payload, dict) and key in payload:
        return payload[key]
    return _NO_MATCH


def _validate(
    adapter: TypeAdapter[Any],
    candidate: Any,
    errors: list[ValidationError] | None = None,
) -> Any:
    if candidate is _NO_MATCH:
        return _NO_MATCH
    try:
        return adapter.validate_python(candidate)
    except ValidationError as e:
        if errors is not None:
            errors.append(e)
        return _NO_MATCH


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or repr(value_type)


def _undecodable(value_type: Any, value_errors: list[ValidationError]) -> DecodeError:
    message = f"unable to decode {_type_name(value_type)} or error from payload"
    if not value_errors:
        return DecodeError(message)
    # The last value attempt is the one closest to the payload's real shape.
    detail = value_errors[-1].errors()[0]
    location = ".".join(str(part) for part in detail["loc"])
    if location:
        return DecodeError(f"{message}: {location}: {detail['msg']}", field=location)
    return DecodeError(f"{message}: {detail['msg']}")


def decode_envelope[V](raw: bytes | str, value_type: type[V] | Any) -> Envelope[V]:
    """Decode a response body into ``Success(value)`` or ``Failure(ErrorRecord)``.

    Args:
        raw: The response body.
        value_type: The expected value type, e.g. ``Completion`` or
            ``list[SearchResult]``.

    Returns:
        ``Success`` with the decoded value, or ``Failure`` with the error
        record reported by the backend.

    Raises:
        DecodeError: If the body is not JSON or matches none of the shapes.
    """
    payload = load_payload(raw)
    value_adapter = _value_adapter(value_type)
    value_errors: list[ValidationError] = []

    def value(candidate: Any) -> Any:
        return _validate(value_adapter, candidate, value_errors)

    def error(candidate: Any) -> Any:
        return _validate(_ERROR_ADAPTER, candidate)

    strategies: tuple[tuple[Callable[[], Any], Callable[[Any], Envelope[V]]], ...] = (
        (lambda: value(payload), Success),
        (lambda: error(payload), Failure),
        (lambda: value(_member(payload, "data")), Success),
        (lambda: error(_member(payload, "error")), Failure),
    )
    for attempt, envelope in strategies:
        decoded = attempt()
        if decoded is not _NO_MATCH:
            return envelope(decoded)
    raise _undecodable(value_type, value_errors)
