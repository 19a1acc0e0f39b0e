"""Portal resources serving projects, issues and statistics.

Each resource asks the shared :class:`SynergyApiSource` for the provider
and returns the provider's models as camelCase JSON. Provider failures are
left to the error handlers registered in :mod:`synergy.api.app`.

Usage
-----
Register the resources on the Falcon app::

    app.add_route("/projects", ProjectsResource(source))
    app.add_route("/projects/{path:path}", ProjectResource(source))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import falcon

from synergy.api.errors import UnsupportedOperationError
from synergy.providers.models import encode
from synergy.providers.protocol import SynergyInsightsApi

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from synergy.api.source import SynergyApiSource
    from synergy.config import DataProviderConfig

__all__ = [
    "ConfigResource",
    "ContributionsResource",
    "IssuesResource",
    "MyIssuesResource",
    "ProjectResource",
    "ProjectsResource",
    "StatsResource",
    "split_project_path",
]


def split_project_path(path: str) -> tuple[str, str]:
    """Split ``owner/name`` at its last separator.

    The owner may itself contain separators when it names a nested GitLab
    group.

    Raises
    ------
    falcon.HTTPNotFound
        If ``path`` lacks either an owner or a name.

    Examples
    --------
    >>> split_project_path("platform/tools/synergy")
    ('platform/tools', 'synergy')

    """
    owner, _, name = path.strip("/").rpartition("/")
    if not owner or not name:
        raise falcon.HTTPNotFound(
            title="Project not found",
            description="Project paths take the form owner/name.",
        )
    return owner, name


class _ProviderResource:
    def __init__(self, source: SynergyApiSource) -> None:
        self._source = source


class ConfigResource:
    """Expose the settings the portal UI needs to render."""

    def __init__(self, config: DataProviderConfig) -> None:
        """Keep the active provider configuration."""
        self._config = config

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /config requests."""
        resp.media = {
            "provider": self._config.provider,
            "hideIssues": self._config.hide_issues,
        }
        resp.status = HTTPStatus.OK


class ProjectsResource(_ProviderResource):
    """``GET /projects`` lists inner-source projects."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Return projects, most recently updated first."""
        api = await self._source.get()
        resp.media = encode(await api.get_projects())
        resp.status = HTTPStatus.OK


class ProjectResource(_ProviderResource):
    """``GET /projects/{owner}/{name}`` returns one project with details."""

    async def on_get(self, _req: Request, resp: Response, *, path: str) -> None:
        """Return the project named by the remainder of the URL path."""
        owner, name = split_project_path(path)
        api = await self._source.get()
        resp.media = encode(await api.get_project(name, owner))
        resp.status = HTTPStatus.OK


class IssuesResource(_ProviderResource):
    """``GET /issues`` lists open inner-source issues."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Return issues, most recently updated first."""
        api = await self._source.get()
        resp.media = encode(await api.get_issues())
        resp.status = HTTPStatus.OK


class MyIssuesResource(_ProviderResource):
    """``GET /my-issues`` lists issues assigned to the token's user."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Return the caller's inner-source issues."""
        api = await self._source.get()
        resp.media = encode(await api.get_my_issues())
        resp.status = HTTPStatus.OK


class _InsightsResource(_ProviderResource):
    operation: typ.ClassVar[str]

    async def _insights(self) -> SynergyInsightsApi:
        api = await self._source.get()
        if not isinstance(api, SynergyInsightsApi):
            raise UnsupportedOperationError(self.operation, type(api).__name__)
        return api


class ContributionsResource(_InsightsResource):
    """``GET /contributions`` lists contributors where supported."""

    operation = "contributions"

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Return contributors with their merge-request counts."""
        api = await self._insights()
        resp.media = encode(await api.get_contributions())
        resp.status = HTTPStatus.OK


class StatsResource(_InsightsResource):
    """``GET /stats`` reports issue statistics where supported."""

    operation = "stats"

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Return project and issue counts."""
        api = await self._insights()
        resp.media = encode(await api.get_stats())
        resp.status = HTTPStatus.OK
