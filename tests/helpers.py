"""Shared test utilities."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import typing as typ

import httpx

GRAPHQL_BASE_URL = "https://api.example.test"


def run_async[T](coro_func: typ.Callable[[], typ.Coroutine[typ.Any, typ.Any, T]]) -> T:
    """Execute an async callable within the test context."""
    return asyncio.run(coro_func())


@dataclasses.dataclass(frozen=True, slots=True)
class RecordedRequest:
    """A GraphQL request captured by :class:`GraphQLStub`."""

    url: str
    query: str
    variables: dict[str, typ.Any]
    headers: httpx.Headers


class GraphQLStub:
    """Answer GraphQL requests from a queue of canned responses.

    Responses are consumed in order; each request is recorded so tests can
    assert on the query, variables and headers that were sent.
    """

    def __init__(self) -> None:
        """Start with an empty response queue."""
        self.requests: list[RecordedRequest] = []
        self._responses: list[tuple[int, object]] = []
        self.client = httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    def respond(self, status: int, payload: object) -> GraphQLStub:
        """Queue a raw response body with ``status``."""
        self._responses.append((status, payload))
        return self

    def respond_data(self, data: dict[str, typ.Any]) -> GraphQLStub:
        """Queue a successful response carrying ``data``."""
        return self.respond(200, {"data": data})

    def _handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content.decode("utf-8"))
        self.requests.append(
            RecordedRequest(
                url=str(request.url),
                query=body["query"],
                variables=body.get("variables") or {},
                headers=request.headers,
            )
        )
        if len(self.requests) > len(self._responses):
            msg = f"unexpected GraphQL request #{len(self.requests)}"
            raise AssertionError(msg)
        status, payload = self._responses[len(self.requests) - 1]
        if isinstance(payload, str):
            return httpx.Response(status_code=status, text=payload)
        return httpx.Response(status_code=status, json=payload)
