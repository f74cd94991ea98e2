"""Request parameter marshaling.

Each builder maps typed arguments to the wire dictionary of one endpoint.
Arguments left as ``None`` are omitted so the backend applies its defaults.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import json
from typing import Any

from openai_engines.core.engines import EngineID, KnownEngine
from openai_engines.core.sampling import Sampling

type EngineLike = EngineID | KnownEngine | str

# Content filter prompt and the threshold under which an "unsafe" label is
# not trusted.
CONTENT_FILTER_PROMPT = "<|endoftext|>{text}\n--\nLabel:"
TOXIC_THRESHOLD = -0.355


def compact(parameters: Mapping[str, Any]) -> dict[str, Any]:
    """Drop parameters whose value is None."""
    return {key: value for key, value in parameters.items() if value is not None}


def engine_name(engine: EngineLike | None) -> str | None:
    if engine is None:
        return None
    return str(EngineID.parse(engine))


def _one_source(documents: Sequence[str] | None, file: str | None) -> None:
    if (documents is None) == (file is None):
        raise ValueError("provide exactly one of documents or file")


def completion_parameters(
    prompt: str | None = None,
    *,
    sampling: Sampling | None = None,
    max_tokens: int | None = None,
    n: int | None = None,
    echo: bool | None = None,
    stop: Sequence[str] | None = None,
    user: str | None = None,
    presence_penalty: float | None = None,
    frequency_penalty: float | None = None,
    best_of: int | None = None,
    logprobs: int | None = None,
) -> dict[str, Any]:
    parameters = compact(
        {
            "prompt": prompt,
            "max_tokens": max_tokens,
            "n": n,
            "echo": echo,
            "stop": list(stop) if stop is not None else None,
            "user": user,
            "presence_penalty": presence_penalty,
            "frequency_penalty": frequency_penalty,
            "best_of": best_of,
            "logprobs": logprobs,
        }
    )
    if sampling is not None:
        parameters.update(sampling.to_parameters())
    return parameters


def search_parameters(
    query: str,
    *,
    documents: Sequence[str] | None = None,
    file: str | None = None,
    max_rerank: int | None = None,
    return_metadata: bool | None = None,
) -> dict[str, Any]:
    """Search over inline documents (up to 200) or over an uploaded file."""
    _one_source(documents, file)
    return compact(
        {
            "documents": list(documents) if documents is not None else None,
            "file": file,
            "query": query,
            "max_rerank": max_rerank,
            "return_metadata": return_metadata,
        }
    )


def classification_parameters(
    engine: EngineLike,
    query: str,
    *,
    examples: Sequence[tuple[str, str]] | None = None,
    file: str | None = None,
    labels: Sequence[str] | None = None,
    search_engine: EngineLike | None = None,
    temperature: float | None = None,
    max_examples: int | None = None,
    logprobs: int | None = None,
    return_prompt: bool | None = None,
    return_metadata: bool | None = None,
) -> dict[str, Any]:
    """Classify ``query`` against ``(text, label)`` examples or a file of examples."""
    if (examples is None) == (file is None):
        raise ValueError("provide exactly one of examples or file")
    return compact(
        {
            "model": engine_name(engine),
            "query": query,
            "examples": [[text, label] for text, label in examples]
            if examples is not None
            else None,
            "file": file,
            "labels": list(labels) if labels is not None else None,
            "search_model": engine_name(search_engine),
            "temperature": temperature,
            "logprobs": logprobs,
            "max_examples": max_examples,
            "return_prompt": return_prompt,
            "return_metadata": return_metadata,
        }
    )


def answer_parameters(
    engine: EngineLike,
    question: str,
    *,
    examples: Sequence[tuple[str, str]],
    examples_context: str,
    search_engine: EngineLike,
    documents: Sequence[str] | None = None,
    file: str | None = None,
    temperature: float | None = None,
    stop: Sequence[str] | None = None,
    max_rerank: int | None = None,
    max_tokens: int | None = None,
    n: int | None = None,
    logprobs: int | None = None,
    return_prompt: bool | None = None,
    return_metadata: bool | None = None,
) -> dict[str, Any]:
    """Answer ``question`` from documents or a file, steered by (question, answer) examples."""
    _one_source(documents, file)
    return compact(
        {
            "model": engine_name(engine),
            "question": question,
            "examples": [[q, a] for q, a in examples],
            "examples_context": examples_context,
            "documents": list(documents) if documents is not None else None,
            "file": file,
            "search_model": engine_name(search_engine),
            "max_rerank": max_rerank,
            "temperature": temperature,
            "logprobs": logprobs,
            "max_tokens": max_tokens,
            "stop": list(stop) if stop is not None else None,
            "n": n,
            "return_metadata": return_metadata,
            "return_prompt": return_prompt,
        }
    )


def content_filter_parameters(text: str) -> dict[str, Any]:
    return completion_parameters(
        CONTENT_FILTER_PROMPT.format(text=text),
        sampling=Sampling.temperature(0),
        max_tokens=1,
        logprobs=10,
    ) | {"top_p": 0}


def encode_json_lines(lines: Iterable[Any]) -> bytes:
    """Encode objects as a JSON Lines document for upload."""
    return "\n".join(json.dumps(line) for line in lines).encode("utf-8")
