"""A mocked HTTP backend for client tests."""

from collections.abc import Callable
import json
from typing import Any

import httpx

from openai_engines import OpenAIClient
from openai_engines.client import HTTPXTransport
from openai_engines.config import FrozenConfig

Route = tuple[str, str]


class FakeBackend:
    """Serves canned bodies by (method, path) and records every request."""

    def __init__(self, routes: dict[Route, Any] | None = None):
        self.routes: dict[Route, Any] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body: Any, status_code: int = 200) -> None:
        self.routes[(method, path)] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": _not_found(request)})
        if callable(route):
            return route(request)
        status_code, body = route if isinstance(route, tuple) else (200, route)
        if isinstance(body, bytes):
            return httpx.Response(status_code, content=body)
        return httpx.Response(status_code, json=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)

    def client(self, config: FrozenConfig, **kwargs: Any) -> OpenAIClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return OpenAIClient(HTTPXTransport(config, client=http), config=config, **kwargs)


def _not_found(request: httpx.Request) -> dict[str, Any]:
    return {
        "type": "invalid_request_error",
        "code": None,
        "param": None,
        "message": f"Unknown route: {request.method} {request.url.path}",
    }


def raising(exc: Exception) -> Callable[[httpx.Request], httpx.Response]:
    """A route that fails at the connection level."""

    def route(request: httpx.Request) -> httpx.Response:
        raise exc

    return route
