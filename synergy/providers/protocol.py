"""SynergyApi protocol implemented by every provider."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from synergy.providers.models import (
        Project,
        ProjectContributor,
        ProjectDetails,
        ProjectIssue,
        ProjectStats,
    )


@typ.runtime_checkable
class SynergyApi(typ.Protocol):
    """Read-only view of inner-source projects and issues on one platform.

    Implementations hide platform query shapes, label and topic semantics
    and deduplication behind the shared output models. Every call performs
    a fresh fetch; nothing is cached between calls.

    Examples
    --------
    >>> api: SynergyApi = await create_synergy_api(config)
    >>> projects = await api.get_projects()

    """

    async def get_projects(self) -> list[Project]:
        """Return inner-source projects, most recently updated first."""
        ...

    async def get_project(self, name: str, owner: str) -> ProjectDetails:
        """Return one project with its README, issues and pinned issues.

        Parameters
        ----------
        name
            Project or repository name.
        owner
            GitHub owner login or GitLab namespace path.

        """
        ...

    async def get_issues(self) -> list[ProjectIssue]:
        """Return open inner-source issues across the organisation."""
        ...

    async def get_my_issues(self) -> list[ProjectIssue]:
        """Return inner-source issues assigned to the authenticated user."""
        ...

    async def aclose(self) -> None:
        """Release transport resources owned by the provider."""
        ...


@typ.runtime_checkable
class SynergyInsightsApi(SynergyApi, typ.Protocol):
    """Provider extension offering contributor and issue statistics."""

    async def get_contributions(self) -> list[ProjectContributor]:
        """Return merge-request authors across inner-source projects."""
        ...

    async def get_stats(self) -> ProjectStats:
        """Return inner-source project and issue counts."""
        ...
