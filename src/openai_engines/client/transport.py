"""HTTP transport for API requests.

The transport only moves bytes: it sends a request and returns the response
body whatever the status code, because the backend reports errors in the
body. Connection-level failures raise ``TransportError``. No retries and no
timeouts beyond the configured client timeout.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from types import TracebackType
from typing import Any, Protocol, Self, runtime_checkable

import httpx

from openai_engines.config import FrozenConfig
from openai_engines.core.exceptions import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """What the client needs from a transport."""

    async def send(
        self, method: str, url: str, parameters: Mapping[str, Any] | None = None
    ) -> bytes:
        """Send a request and return the raw response body."""
        ...

    async def upload(
        self,
        url: str,
        *,
        fields: Mapping[str, str],
        file_field: str,
        content: bytes,
        filename: str,
    ) -> bytes:
        """Send a multipart upload and return the raw response body."""
        ...


def auth_headers(config: FrozenConfig) -> dict[str, str]:
    if not config.api_key:
        raise ConfigurationError(
            "api_key is required. Set OPENAI_API_KEY, add it to "
            "[tool.openai_engines] or pass it programmatically."
        )
    headers = {"Authorization": f"Bearer {config.api_key}"}
    if config.organization:
        headers["OpenAI-Organization"] = config.organization
    return headers


class HTTPXTransport:
    """Transport backed by ``httpx.AsyncClient``.

    Pass ``client`` to reuse a connection pool or to mount a mock transport;
    an injected client is left open by ``aclose()``.
    """

    def __init__(
        self,
        config: FrozenConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._headers = auth_headers(config)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_seconds),
        )

    async def send(
        self, method: str, url: str, parameters: Mapping[str, Any] | None = None
    ) -> bytes:
        method = method.upper()
        kwargs: dict[str, Any] = {"headers": self._headers}
        if parameters:
            if method in ("GET", "DELETE"):
                kwargs["params"] = dict(parameters)
            else:
                kwargs["json"] = dict(parameters)
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {url} failed: {e}", cause=e) from e
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response.content

    async def upload(
        self,
        url: str,
        *,
        fields: Mapping[str, str],
        file_field: str,
        content: bytes,
        filename: str,
    ) -> bytes:
        logger.debug("POST %s (multipart, %d bytes)", url, len(content))
        try:
            response = await self._client.post(
                url,
                headers=self._headers,
                data=dict(fields),
                files={file_field: (filename, content, "application/jsonl")},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"POST {url} failed: {e}", cause=e) from e
        logger.debug("POST %s -> %s", url, response.status_code)
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
