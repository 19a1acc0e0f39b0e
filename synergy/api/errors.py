"""Domain exceptions and Falcon error handlers for the API layer.

Provider failures are translated into JSON error bodies. GitLab errors map
their ``kind`` onto the matching HTTP status; every other upstream failure
is reported as a bad gateway unless the platform itself answered 401, 403
or 404.

Usage
-----
Register error handlers on the Falcon app::

    app.add_error_handler(GitLabApiError, handle_gitlab_error)
    app.add_error_handler(GraphQLRequestError, handle_graphql_error)

"""

from __future__ import annotations

import typing as typ

import falcon

from synergy.gitlab.errors import GitLabErrorKind
from synergy.logging import get_logger, log_warning

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from synergy.gitlab.errors import GitLabApiError
    from synergy.graphql import GraphQLRequestError
    from synergy.providers.errors import ResponseShapeError

__all__ = [
    "UnsupportedOperationError",
    "handle_gitlab_error",
    "handle_graphql_error",
    "handle_response_shape_error",
    "handle_unsupported_operation",
]

logger = get_logger(__name__)

_GITLAB_STATUS: dict[GitLabErrorKind, str] = {
    GitLabErrorKind.AUTH: falcon.HTTP_401,
    GitLabErrorKind.FORBIDDEN: falcon.HTTP_403,
    GitLabErrorKind.NOT_FOUND: falcon.HTTP_404,
    GitLabErrorKind.GENERIC: falcon.HTTP_502,
}

_PASSTHROUGH_STATUS: dict[int, str] = {
    401: falcon.HTTP_401,
    403: falcon.HTTP_403,
    404: falcon.HTTP_404,
}


class UnsupportedOperationError(Exception):
    """Raised when the active provider does not offer an operation.

    Attributes
    ----------
    operation
        Name of the requested operation.
    provider
        Provider that lacks it.

    """

    def __init__(self, operation: str, provider: str) -> None:
        """Initialize with the operation and provider names."""
        self.operation = operation
        self.provider = provider
        super().__init__(f"{provider} does not support {operation}.")


async def handle_gitlab_error(
    _req: Request,
    resp: Response,
    ex: GitLabApiError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``GitLabApiError`` to a status chosen by its ``kind``."""
    resp.status = _GITLAB_STATUS[ex.kind]
    resp.media = {
        "title": "GitLab request failed",
        "description": ex.message,
        "kind": ex.kind.value,
    }


async def handle_graphql_error(
    _req: Request,
    resp: Response,
    ex: GraphQLRequestError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``GraphQLRequestError`` to the upstream status or HTTP 502."""
    log_warning(logger, "GraphQL request failed status=%s: %s", ex.status, ex.message)
    resp.status = _PASSTHROUGH_STATUS.get(ex.status or 0, falcon.HTTP_502)
    resp.media = {
        "title": "Upstream request failed",
        "description": ex.message,
    }


async def handle_response_shape_error(
    _req: Request,
    resp: Response,
    ex: ResponseShapeError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``ResponseShapeError`` to an HTTP 502 JSON response."""
    resp.status = falcon.HTTP_502
    resp.media = {
        "title": "Unexpected upstream response",
        "description": str(ex),
    }


async def handle_unsupported_operation(
    _req: Request,
    resp: Response,
    ex: UnsupportedOperationError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``UnsupportedOperationError`` to an HTTP 404 JSON response."""
    resp.status = falcon.HTTP_404
    resp.media = {
        "title": "Operation not supported",
        "description": str(ex),
    }
