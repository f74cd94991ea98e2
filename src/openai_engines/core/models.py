"""Immutable records decoded from API responses.

Each record keeps the wire schema of one response payload. Wire names are
mapped through aliases (``model`` becomes ``engine``, ``bytes`` becomes
``size``) and records can also be built by field name. Derived values such
as ``creation_date`` are computed from the stored epoch integer on every
access and are never stored separately.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
import functools
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    computed_field,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)

from openai_engines.core.engines import EngineID


def _timestamp(value: int) -> datetime:
    return datetime.fromtimestamp(value, tz=UTC)


class WireModel(BaseModel):
    """Base for all response records: frozen, aliased, tolerant of extra keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """Dump the record with wire field names, without derived fields."""
        return self.model_dump(
            mode="json", by_alias=True, exclude=set(type(self).model_computed_fields)
        )


# --- Engines ---


@functools.total_ordering
class Engine(WireModel):
    """An engine (model) available through the API, with owner and availability."""

    id: EngineID
    owner: str
    ready: bool
    created: int | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def creation_date(self) -> datetime | None:
        if self.created is None:
            return None
        return _timestamp(self.created)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Engine):
            return NotImplemented
        return self.id < other.id


# --- Completions ---


class FinishReason(StrEnum):
    LENGTH = "length"
    STOP = "stop"


class LogProbs(WireModel):
    """Log probabilities of the sampled tokens and of the most likely alternatives."""

    tokens: list[str] | None = None
    token_logprobs: list[float | None] | None = None
    top_logprobs: list[dict[str, float] | None] | None = None
    text_offset: list[int] | None = None


class Choice(WireModel):
    text: str
    index: int
    finish_reason: FinishReason
    logprobs: LogProbs | None = None


class Completion(WireModel):
    """The result of a completion request.

    Given a prompt, the model returns one or more predicted completions and
    can also return the probabilities of alternative tokens at each position.
    """

    id: str
    choices: list[Choice]
    created: int
    engine: EngineID = Field(alias="model")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def creation_date(self) -> datetime:
        return _timestamp(self.created)


# --- Search ---


class SearchResult(WireModel):
    """A document ranked by its semantic similarity to a query.

    Scores are positive and usually range from 0 to 300; above 200 usually
    means the document is semantically similar to the query. Results order
    by score alone, so two results with the same score are both ``<=`` and ``>=``
    each other while equality still compares every field.
    """

    document: int
    score: float
    metadata: dict[str, Any] | None = None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return self.score < other.score

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return self.score <= other.score

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return self.score > other.score

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return self.score >= other.score

    def __hash__(self) -> int:
        return hash((self.document, self.score))


# --- Classifications ---


class DocumentSource(WireModel):
    """An example taken from the documents passed with the request."""

    document: int


class FileSource(WireModel):
    """An example taken from an uploaded file."""

    file: str


def _document_source(data: dict[str, Any]) -> DocumentSource | None:
    value = data.get("document")
    if isinstance(value, int) and not isinstance(value, bool):
        return DocumentSource(document=value)
    return None


def _file_source(data: dict[str, Any]) -> FileSource | None:
    value = data.get("file")
    if isinstance(value, str):
        return FileSource(file=value)
    return None


# Tried in order; the first alternative that decodes wins.
_EXAMPLE_SOURCES = (_document_source, _file_source)


class ClassificationExample(WireModel):
    """A labeled example selected to classify the query."""

    source: DocumentSource | FileSource
    label: str
    text: str

    @model_validator(mode="before")
    @classmethod
    def _decode_source(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "source" in data:
            return data
        for decode in _EXAMPLE_SOURCES:
            source = decode(data)
            if source is not None:
                return {**data, "source": source}
        raise ValueError("source: unable to decode document or file")

    @model_serializer(mode="wrap")
    def _flatten_source(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        data.update(data.pop("source"))
        return data


class Classification(WireModel):
    """The result of a classification request.

    Given a query and a set of labeled examples, the model predicts the most
    likely label for the query.
    """

    completion: str
    label: str
    engine: EngineID = Field(alias="model")
    search_engine: EngineID = Field(alias="search_model")
    selected_examples: list[ClassificationExample]


# --- Answers ---


class Answers(WireModel):
    """The result of a question answering request.

    ``selected_documents`` maps the position of each document used as context
    to its text.
    """

    completion: str
    answers: list[str]
    engine: EngineID = Field(alias="model")
    search_engine: EngineID = Field(alias="search_model")
    selected_documents: dict[int, str]

    @field_validator("selected_documents", mode="before")
    @classmethod
    def _index_documents(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        documents: dict[int, str] = {}
        for entry in value:
            if not isinstance(entry, dict) or "document" not in entry:
                raise ValueError("selected document must have a 'document' key")
            if entry["document"] in documents:
                raise ValueError(f"duplicate selected document {entry['document']!r}")
            documents[entry["document"]] = entry.get("text")
        return documents

    @field_serializer("selected_documents")
    def _list_documents(self, value: dict[int, str]) -> list[dict[str, Any]]:
        return [{"document": key, "text": text} for key, text in value.items()]


# --- Files ---


class FilePurpose(StrEnum):
    """The intended purpose of an uploaded file."""

    SEARCH = "search"
    ANSWERS = "answers"
    CLASSIFICATIONS = "classifications"


class File(WireModel):
    """An uploaded file of documents usable by search, answers and classifications."""

    id: str
    filename: str
    size: int = Field(alias="bytes")
    created: int = Field(alias="created_at")
    purpose: FilePurpose | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def creation_date(self) -> datetime:
        return _timestamp(self.created)


class DeletedFile(WireModel):
    id: str
    deleted: bool
