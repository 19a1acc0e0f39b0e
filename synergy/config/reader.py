"""Extract the active provider configuration from a Synergy config tree."""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from .errors import SynergyConfigError

if typ.TYPE_CHECKING:
    from .tree import ConfigTree


class ProviderType(enum.StrEnum):
    """Source-control platforms Synergy can read from."""

    GITHUB = "github"
    GITLAB = "gitlab"


# Deployments that predate GitLab support omit ``synergy.provider.type``.
DEFAULT_PROVIDER = ProviderType.GITHUB


@dataclasses.dataclass(frozen=True, slots=True)
class DataProviderConfig:
    """Settings for the active provider.

    Attributes
    ----------
    provider
        Provider type name, ``"github"`` or ``"gitlab"``.
    api_base_url
        Base URL of the platform API; GraphQL requests go to
        ``{api_base_url}/graphql``.
    token
        Access token for the platform API.
    repo_tag
        Topic or label marking inner-source projects and issues.
    org
        GitHub organisation; ``None`` for GitLab.
    host
        GitHub host such as ``github.com``; ``None`` for GitLab.
    hide_issues
        Whether the portal hides its issue views for this provider.

    """

    provider: str
    api_base_url: str
    token: str = dataclasses.field(repr=False)
    repo_tag: str
    org: str | None = None
    host: str | None = None
    hide_issues: bool = False


def read_config(config: ConfigTree) -> DataProviderConfig:
    """Read the active provider settings from ``config``.

    Parameters
    ----------
    config
        Root configuration tree containing the ``synergy`` section.

    Returns
    -------
    DataProviderConfig
        Settings for the provider named by ``synergy.provider.type``.

    Raises
    ------
    SynergyConfigError
        If a required key is missing or the section named by
        ``synergy.provider.type`` does not exist under ``synergy.provider``.

    """
    repo_tag = config.get_string("synergy.repoTag")
    providers = config.get_config("synergy.provider")
    provider = providers.get_optional_string("type") or DEFAULT_PROVIDER.value

    if not providers.has(provider):
        raise SynergyConfigError.missing_provider_section(provider)

    section = providers.get_config(provider)
    org: str | None = None
    host: str | None = None
    if provider == ProviderType.GITHUB:
        org = section.get_string("org")
        host = section.get_string("host")

    return DataProviderConfig(
        provider=provider,
        api_base_url=section.get_string("apiBaseUrl"),
        token=section.get_string("token"),
        repo_tag=repo_tag,
        org=org,
        host=host,
        hide_issues=bool(section.get_optional_bool("hideIssues")),
    )
