"""Factory for creating SynergyApi implementations from provider config."""

from __future__ import annotations

import typing as typ

from synergy.config import ProviderType, SynergyConfigError

if typ.TYPE_CHECKING:
    import httpx

    from synergy.config import DataProviderConfig
    from synergy.github import GitHubCredentialsProvider
    from synergy.providers.protocol import SynergyApi

_VALID_PROVIDERS = frozenset(provider.value for provider in ProviderType)


async def create_synergy_api(
    config: DataProviderConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
    credentials_provider: GitHubCredentialsProvider | None = None,
) -> SynergyApi:
    """Create the provider named by ``config.provider``.

    Parameters
    ----------
    config
        Provider settings produced by :func:`synergy.config.read_config`.
    http_client
        Optional shared HTTP client. The caller keeps ownership of it.
    credentials_provider
        Source of GitHub request headers; ignored for GitLab.

    Returns
    -------
    SynergyApi
        Ready provider. GitHub providers have already exchanged their
        organisation credentials.

    Raises
    ------
    SynergyConfigError
        If ``config.provider`` names no supported platform.

    Examples
    --------
    >>> api = await create_synergy_api(read_config(tree))
    >>> isinstance(api, SynergyApi)
    True

    """
    provider = config.provider.strip().lower()
    if provider not in _VALID_PROVIDERS:
        raise SynergyConfigError.invalid_provider(config.provider, _VALID_PROVIDERS)

    if provider == ProviderType.GITLAB:
        from synergy.gitlab import GitLabProvider

        return await GitLabProvider.create(config, http_client=http_client)

    from synergy.github import GitHubProvider

    return await GitHubProvider.create(
        config,
        credentials_provider=credentials_provider,
        http_client=http_client,
    )
