"""Probe resources for container liveness and readiness checks.

Neither probe touches the source-control platform, so a slow or
unreachable GitHub or GitLab never takes the service out of rotation.

Usage
-----
Register health endpoints on the Falcon app::

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(provider="gitlab"))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe reporting which provider, if any, is configured.

    Parameters
    ----------
    provider
        Active provider type, or ``None`` when the service runs without a
        Synergy configuration and serves probes only.

    """

    def __init__(self, provider: str | None = None) -> None:
        """Record the configured provider type."""
        self._provider = provider

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response populated with readiness status.

        """
        resp.media = {"status": "ready", "provider": self._provider}
        resp.status = HTTPStatus.OK
