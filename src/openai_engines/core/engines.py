"""Engine identifiers.

Engines describe and provide access to the models available in the API.
The backend introduces new engines over time, so the identifier type is an
open set: a fixed catalog of known names plus an escape hatch that keeps any
other string verbatim.
"""

from __future__ import annotations

import dataclasses
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic_core import core_schema

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler


class KnownEngine(StrEnum):
    """Catalog of engines with canonical names."""

    # Instruct series
    TEXT_DAVINCI_002 = "text-davinci-002"
    TEXT_CURIE_001 = "text-curie-001"
    TEXT_BABBAGE_001 = "text-babbage-001"
    TEXT_ADA_001 = "text-ada-001"
    # Base GPT-3 series, used by search, classification and answers
    DAVINCI = "davinci"
    CURIE = "curie"
    BABBAGE = "babbage"
    ADA = "ada"
    # Codex
    CODE_DAVINCI_002 = "code-davinci-002"
    CODE_CUSHMAN_001 = "code-cushman-001"
    # Content filter
    CONTENT_FILTER_ALPHA = "content-filter-alpha"


@dataclasses.dataclass(frozen=True, slots=True, order=True)
class EngineID:
    """Identifier of an engine.

    Construction never fails: a string outside the catalog becomes the
    "other" variant and renders back exactly as given. Equality, hashing and
    ordering only look at the rendered string.
    """

    value: str

    TEXT_DAVINCI_002: ClassVar[EngineID]
    TEXT_CURIE_001: ClassVar[EngineID]
    TEXT_BABBAGE_001: ClassVar[EngineID]
    TEXT_ADA_001: ClassVar[EngineID]
    DAVINCI: ClassVar[EngineID]
    CURIE: ClassVar[EngineID]
    BABBAGE: ClassVar[EngineID]
    ADA: ClassVar[EngineID]
    CODE_DAVINCI_002: ClassVar[EngineID]
    CODE_CUSHMAN_001: ClassVar[EngineID]
    CONTENT_FILTER_ALPHA: ClassVar[EngineID]

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(
                f"engine id must be a str, got {type(self.value).__name__}"
            )

    @classmethod
    def parse(cls, value: str | KnownEngine | EngineID) -> EngineID:
        """Build an identifier from a string, a catalog member or an identifier."""
        if isinstance(value, EngineID):
            return value
        return cls(str(value))

    @property
    def known(self) -> KnownEngine | None:
        """The catalog member for this identifier, or None for other engines."""
        try:
            return KnownEngine(self.value)
        except ValueError:
            return None

    @property
    def is_other(self) -> bool:
        return self.known is None

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        known = self.known
        if known is None:
            return f"EngineID.other({self.value!r})"
        return f"EngineID.{known.name}"

    # --- Pydantic integration: a bare JSON string on the wire ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any) -> EngineID:
        if isinstance(value, EngineID):
            return value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"engine id must be a string, got {type(value).__name__}")


for _member in KnownEngine:
    setattr(EngineID, _member.name, EngineID(_member.value))
del _member
