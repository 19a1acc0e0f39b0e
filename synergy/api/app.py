"""Application factory for the Synergy Falcon ASGI application.

This module provides ``create_app()`` which builds the Falcon ASGI
application with health endpoints and, when a provider is configured, the
portal endpoints.

Usage
-----
Create a health-only app (no Synergy configuration)::

    app = create_app()

Create a full app serving the configured provider::

    from synergy.api.app import AppDependencies, create_app
    from synergy.api.source import LazySynergyApi

    deps = AppDependencies(
        api_source=LazySynergyApi(provider_config),
        provider_config=provider_config,
    )
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from synergy.api.errors import (
    UnsupportedOperationError,
    handle_gitlab_error,
    handle_graphql_error,
    handle_response_shape_error,
    handle_unsupported_operation,
)
from synergy.api.health.resources import HealthResource, ReadyResource
from synergy.gitlab.errors import GitLabApiError
from synergy.graphql import GraphQLRequestError
from synergy.providers.errors import ResponseShapeError

if typ.TYPE_CHECKING:
    from synergy.api.source import SynergyApiSource
    from synergy.config import DataProviderConfig

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    api_source
        Supplier of the active provider.
    provider_config
        Settings of the active provider, exposed to the UI via ``/config``.

    """

    api_source: SynergyApiSource
    provider_config: DataProviderConfig


def _add_portal_routes(app: falcon.asgi.App, deps: AppDependencies) -> None:
    from synergy.api.portal.resources import (
        ConfigResource,
        ContributionsResource,
        IssuesResource,
        MyIssuesResource,
        ProjectResource,
        ProjectsResource,
        StatsResource,
    )

    source = deps.api_source
    app.add_route("/config", ConfigResource(deps.provider_config))
    app.add_route("/projects", ProjectsResource(source))
    # Owners may be nested GitLab groups, so the rest of the path is split
    # at its last separator by the resource.
    app.add_route("/projects/{path:path}", ProjectResource(source))
    app.add_route("/issues", IssuesResource(source))
    app.add_route("/my-issues", MyIssuesResource(source))
    app.add_route("/contributions", ContributionsResource(source))
    app.add_route("/stats", StatsResource(source))


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional application dependencies.  When ``None``, only ``/health``
        and ``/ready`` are available.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    middleware: list[object] = []
    if dependencies is not None:
        from synergy.api.middleware import ProviderLifecycle

        middleware.append(ProviderLifecycle(dependencies.api_source))

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]  # Falcon stubs

    provider = dependencies.provider_config.provider if dependencies else None
    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(provider))

    if dependencies is not None:
        _add_portal_routes(app, dependencies)

    app.add_error_handler(GitLabApiError, handle_gitlab_error)
    app.add_error_handler(GraphQLRequestError, handle_graphql_error)
    app.add_error_handler(ResponseShapeError, handle_response_shape_error)
    app.add_error_handler(UnsupportedOperationError, handle_unsupported_operation)

    return app
