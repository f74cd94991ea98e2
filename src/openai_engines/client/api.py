"""Asynchronous client for the engines, completions, search, classifications,
answers and files endpoints.

Every operation is a coroutine delivering exactly one ``Result``: ``Success``
with the decoded value, or ``Failure`` carrying a ``TransportError``, a
``DecodeError`` or an ``APIError``. Calls are independent; nothing is
retried, cached or coalesced.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from operator import attrgetter
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Any, Self

from openai_engines.client import parameters as wire
from openai_engines.client.content_filter import rate_choice
from openai_engines.client.transport import HTTPXTransport, Transport
from openai_engines.config import FrozenConfig, resolve_config
from openai_engines.core.engines import EngineID
from openai_engines.core.exceptions import OpenAIEnginesError, TransportError
from openai_engines.core.models import (
    Answers,
    Classification,
    Completion,
    DeletedFile,
    Engine,
    File,
    FilePurpose,
    SearchResult,
)
from openai_engines.core.types import Failure, Result, Success
from openai_engines.response.projection import (
    Outcome,
    project,
    project_first,
    project_map,
)
from openai_engines.telemetry import TelemetryContext

if TYPE_CHECKING:
    from openai_engines.client.parameters import EngineLike
    from openai_engines.core.safety import Safety
    from openai_engines.core.sampling import Sampling
    from openai_engines.telemetry import TelemetryContextProtocol

T_REQUEST = "client.request"
T_TRANSPORT_ERROR = "client.transport_error"


class OpenAIClient:
    """A client for the OpenAI engines API.

    Example:
        async with OpenAIClient.from_env() as client:
            result = await client.search("davinci", "president",
                                         documents=["White House", "school"])
            if isinstance(result, Success):
                best = max(result.value)
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        config: FrozenConfig | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            transport: Transport used for every request; an ``HTTPXTransport``
                built from ``config`` by default.
            config: Frozen configuration; resolved from the environment and
                project files when omitted.
            telemetry: Optional telemetry context.
        """
        self.config = config or resolve_config().to_frozen()
        self._transport = transport or HTTPXTransport(self.config)
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    @classmethod
    def from_env(
        cls, *, env_file: str | Path | None = None, **overrides: Any
    ) -> OpenAIClient:
        """Create a client from resolved configuration plus overrides."""
        return cls(config=resolve_config(overrides, env_file=env_file).to_frozen())

    async def aclose(self) -> None:
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # --- Dispatch ---

    def _url(self, *path: str | EngineID) -> str:
        return "/".join((self.config.base_url, *(str(part) for part in path)))

    async def _dispatch(
        self,
        method: str,
        path: tuple[str | EngineID, ...],
        parameters: Mapping[str, Any] | None = None,
    ) -> Outcome:
        url = self._url(*path)
        with self._telemetry(T_REQUEST, method=method, endpoint=str(path[0])):
            try:
                body = await self._transport.send(method, url, parameters)
            except TransportError as e:
                self._telemetry.count(T_TRANSPORT_ERROR, endpoint=str(path[0]))
                return Failure(e)
        return Success(body)

    async def _dispatch_upload(
        self, content: bytes, purpose: FilePurpose | str, filename: str
    ) -> Outcome:
        with self._telemetry(T_REQUEST, method="POST", endpoint="files"):
            try:
                body = await self._transport.upload(
                    self._url("files"),
                    fields={"purpose": str(FilePurpose(purpose))},
                    file_field="file",
                    content=content,
                    filename=filename,
                )
            except TransportError as e:
                self._telemetry.count(T_TRANSPORT_ERROR, endpoint="files")
                return Failure(e)
        return Success(body)

    # --- Engines ---

    async def engines(self) -> Result[list[Engine], OpenAIEnginesError]:
        """List the available engines with their owner and availability."""
        outcome = await self._dispatch("GET", ("engines",))
        return project(outcome, list[Engine])

    async def engine(self, engine_id: EngineLike) -> Result[Engine, OpenAIEnginesError]:
        """Retrieve one engine."""
        outcome = await self._dispatch("GET", ("engines", EngineID.parse(engine_id)))
        return project(outcome, Engine)

    # --- Completions ---

    async def completions(
        self,
        engine: EngineLike,
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
    ) -> Result[list[Completion], OpenAIEnginesError]:
        """Create completions for ``prompt``.

        ``n`` and ``best_of`` can quickly consume the token quota; use them
        with reasonable ``max_tokens`` and ``stop`` settings.
        """
        params = wire.completion_parameters(
            prompt,
            sampling=sampling,
            max_tokens=max_tokens,
            n=n,
            echo=echo,
            stop=stop,
            user=user,
            presence_penalty=presence_penalty,
            frequency_penalty=frequency_penalty,
            best_of=best_of,
            logprobs=logprobs,
        )
        outcome = await self._dispatch(
            "POST", ("engines", EngineID.parse(engine), "completions"), params
        )
        return project_map(outcome, Completion, lambda completion: [completion])

    async def content_filter(self, text: str) -> Result[Safety, OpenAIEnginesError]:
        """Rate ``text`` with the content filter engine."""
        outcome = await self._dispatch(
            "POST",
            ("engines", EngineID.CONTENT_FILTER_ALPHA, "completions"),
            wire.content_filter_parameters(text),
        )
        choice = project_first(outcome, Completion, attrgetter("choices"))
        if isinstance(choice, Failure):
            return choice
        return Success(rate_choice(choice.value))

    # --- Search ---

    async def search(
        self,
        engine: EngineLike,
        query: str,
        *,
        documents: Sequence[str] | None = None,
        file: str | None = None,
        max_rerank: int | None = None,
        return_metadata: bool | None = None,
    ) -> Result[list[SearchResult], OpenAIEnginesError]:
        """Rank documents, given inline or as an uploaded file, against ``query``.

        With ``file``, up to ``max_rerank`` documents are returned.
        """
        params = wire.search_parameters(
            query,
            documents=documents,
            file=file,
            max_rerank=max_rerank,
            return_metadata=return_metadata,
        )
        outcome = await self._dispatch(
            "POST", ("engines", EngineID.parse(engine), "search"), params
        )
        return project(outcome, list[SearchResult])

    # --- Classifications ---

    async def classify(
        self,
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
    ) -> Result[Classification, OpenAIEnginesError]:
        """Classify ``query`` using labeled examples or a file of examples."""
        params = wire.classification_parameters(
            engine,
            query,
            examples=examples,
            file=file,
            labels=labels,
            search_engine=search_engine,
            temperature=temperature,
            max_examples=max_examples,
            logprobs=logprobs,
            return_prompt=return_prompt,
            return_metadata=return_metadata,
        )
        outcome = await self._dispatch("POST", ("classifications",), params)
        return project(outcome, Classification)

    # --- Answers ---

    async def answer(
        self,
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
    ) -> Result[Answers, OpenAIEnginesError]:
        """Answer ``question`` from documents or a file, steered by examples."""
        params = wire.answer_parameters(
            engine,
            question,
            examples=examples,
            examples_context=examples_context,
            search_engine=search_engine,
            documents=documents,
            file=file,
            temperature=temperature,
            stop=stop,
            max_rerank=max_rerank,
            max_tokens=max_tokens,
            n=n,
            logprobs=logprobs,
            return_prompt=return_prompt,
            return_metadata=return_metadata,
        )
        outcome = await self._dispatch("POST", ("answers",), params)
        return project(outcome, Answers)

    # --- Files ---

    async def files(self) -> Result[list[File], OpenAIEnginesError]:
        """List the files that belong to the organization."""
        outcome = await self._dispatch("GET", ("files",))
        return project(outcome, list[File])

    async def file(self, file_id: str) -> Result[File, OpenAIEnginesError]:
        outcome = await self._dispatch("GET", ("files", file_id))
        return project(outcome, File)

    async def delete_file(self, file_id: str) -> Result[DeletedFile, OpenAIEnginesError]:
        outcome = await self._dispatch("DELETE", ("files", file_id))
        return project(outcome, DeletedFile)

    async def upload_file(
        self,
        data: bytes,
        purpose: FilePurpose | str,
        *,
        filename: str = "data.jsonl",
    ) -> Result[File, OpenAIEnginesError]:
        """Upload a JSON Lines document for use by search, answers or classifications."""
        outcome = await self._dispatch_upload(data, purpose, filename)
        return project(outcome, File)

    async def upload_lines(
        self, lines: Iterable[Any], purpose: FilePurpose | str
    ) -> Result[File, OpenAIEnginesError]:
        """Encode objects as JSON Lines and upload them."""
        return await self.upload_file(wire.encode_json_lines(lines), purpose)

    async def upload_path(
        self, path: str | Path, purpose: FilePurpose | str
    ) -> Result[File, OpenAIEnginesError]:
        """Upload a JSON Lines file from disk."""
        path = Path(path)
        return await self.upload_file(path.read_bytes(), purpose, filename=path.name)
