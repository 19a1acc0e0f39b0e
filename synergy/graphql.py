"""Async GraphQL executor shared by the GitHub and GitLab providers.

The executor is bound to one API base URL and a fixed header set; requests
go to ``{api_base_url}/graphql``. Failures are raised as
:class:`GraphQLRequestError` carrying the HTTP status and the raw response
body so callers can decide how to present them.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import httpx

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DEFAULT_TIMEOUT_S = 30.0
_USER_AGENT = "synergy/0.1"


class GraphQLRequestError(RuntimeError):
    """Raised when a GraphQL request fails at the transport or query level.

    Attributes
    ----------
    status
        HTTP status code, when a response was received.
    response
        Decoded response body (or raw text) when one is available.

    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        response: object | None = None,
    ) -> None:
        """Initialise with a message and optional status and raw body."""
        self.status = status
        self.response = response
        super().__init__(message)

    @property
    def message(self) -> str:
        """Return the human-readable error message."""
        return str(self)

    @classmethod
    def http_error(cls, status: int, response: object) -> GraphQLRequestError:
        """Return an error for non-2xx HTTP responses."""
        return cls(f"GraphQL HTTP {status}", status=status, response=response)

    @classmethod
    def graphql_errors(
        cls, errors: object, *, status: int, response: object
    ) -> GraphQLRequestError:
        """Return an error for a GraphQL ``errors`` payload."""
        return cls(
            f"GraphQL errors: {_summarise_errors(errors)}",
            status=status,
            response=response,
        )

    @classmethod
    def network_error(cls, detail: str) -> GraphQLRequestError:
        """Return an error for failures before a response arrived."""
        return cls(f"GraphQL request failed: {detail}")

    @classmethod
    def malformed(cls, detail: str, *, status: int) -> GraphQLRequestError:
        """Return an error for a response body that is not a GraphQL payload."""
        return cls(f"Malformed GraphQL response: {detail}", status=status)


def _summarise_errors(errors: object) -> str:
    if isinstance(errors, list):
        messages = [
            str(error.get("message", error)) if isinstance(error, dict) else str(error)
            for error in errors
        ]
        return "; ".join(messages)
    return str(errors)


def graphql_endpoint(api_base_url: str) -> str:
    """Return the GraphQL endpoint for an API base URL."""
    return f"{api_base_url.rstrip('/')}/graphql"


class GraphQLClient:
    """Execute GraphQL queries against one endpoint with fixed headers."""

    def __init__(
        self,
        api_base_url: str,
        headers: cabc.Mapping[str, str],
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_s: float = _DEFAULT_TIMEOUT_S,
    ) -> None:
        """Bind the executor to ``api_base_url`` and ``headers``.

        When ``http_client`` is supplied the caller keeps ownership of it;
        otherwise the executor creates a client and closes it in
        :meth:`aclose`.
        """
        self._endpoint = graphql_endpoint(api_base_url)
        self._headers = {
            "User-Agent": _USER_AGENT,
            "Accept": "application/json",
            **headers,
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout_s)

    @property
    def endpoint(self) -> str:
        """Return the GraphQL endpoint URL."""
        return self._endpoint

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def execute(
        self,
        query: str,
        variables: cabc.Mapping[str, typ.Any] | None = None,
    ) -> dict[str, typ.Any]:
        """Run ``query`` and return the ``data`` mapping of the response.

        Raises
        ------
        GraphQLRequestError
            On network failures, HTTP errors, GraphQL ``errors`` payloads and
            responses without a ``data`` object.

        """
        try:
            response = await self._client.post(
                self._endpoint,
                json={"query": query, "variables": dict(variables or {})},
                headers=self._headers,
            )
        except httpx.HTTPError as exc:
            raise GraphQLRequestError.network_error(str(exc)) from exc

        body = _response_body(response)
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GraphQLRequestError.http_error(response.status_code, body)
        return _parse_graphql_payload(body, status=response.status_code)


def _response_body(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text


def _parse_graphql_payload(payload: object, *, status: int) -> dict[str, typ.Any]:
    """Validate a GraphQL payload and extract its ``data`` field."""
    if not isinstance(payload, dict):
        raise GraphQLRequestError.malformed("expected a JSON object", status=status)

    errors = payload.get("errors")
    if errors:
        raise GraphQLRequestError.graphql_errors(
            errors, status=status, response=payload
        )

    data = payload.get("data")
    if not isinstance(data, dict):
        raise GraphQLRequestError.malformed("missing data", status=status)
    return data
