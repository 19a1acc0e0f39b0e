"""Provider lifecycle middleware for Falcon ASGI applications.

The shared provider owns an HTTP connection pool. This middleware closes
it when the ASGI server signals lifespan shutdown, and logs portal
requests that the provider could not satisfy.

Usage
-----
Register the middleware when creating the Falcon app::

    app = falcon.asgi.App(middleware=[ProviderLifecycle(source)])

"""

from __future__ import annotations

import typing as typ

from synergy.logging import get_logger, log_info, log_warning

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from synergy.api.source import SynergyApiSource

__all__ = ["ProviderLifecycle"]

logger = get_logger(__name__)


class ProviderLifecycle:
    """Falcon middleware that releases the shared provider on shutdown.

    Parameters
    ----------
    source
        Supplier of the provider whose resources are closed on shutdown.

    """

    def __init__(self, source: SynergyApiSource) -> None:
        """Initialize the middleware with the provider source."""
        self._source = source

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Close the provider when the server shuts down."""
        await self._source.aclose()
        log_info(logger, "Provider closed on shutdown")

    async def process_response(
        self,
        req: Request,
        resp: Response,
        _resource: object,
        req_succeeded: bool,  # noqa: FBT001 - Falcon signature
    ) -> None:
        """Log portal requests that ended in an upstream error status."""
        status = str(resp.status)
        if not req_succeeded or status.startswith(("4", "5")):
            log_warning(logger, "%s %s -> %s", req.method, req.path, status)
