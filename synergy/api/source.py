"""Lazily created, shared provider instance for the HTTP layer.

The GitHub provider performs a credentials exchange when it is created, so
the runtime defers creation until the first request needs it and then
reuses the same provider for the life of the process.
"""

from __future__ import annotations

import asyncio
import typing as typ

from synergy.logging import get_logger, log_info
from synergy.providers.factory import create_synergy_api

if typ.TYPE_CHECKING:
    import httpx

    from synergy.config import DataProviderConfig
    from synergy.github import GitHubCredentialsProvider
    from synergy.providers.protocol import SynergyApi

__all__ = ["LazySynergyApi", "SynergyApiSource"]

logger = get_logger(__name__)


class SynergyApiSource(typ.Protocol):
    """Anything that can hand out the active provider."""

    async def get(self) -> SynergyApi:
        """Return the provider, creating it if necessary."""
        ...

    async def aclose(self) -> None:
        """Release the provider if one was created."""
        ...


class LazySynergyApi:
    """Create the provider on first use and share it afterwards.

    Concurrent first requests wait on a lock so the factory runs once. A
    failed creation is not cached; the next request tries again.
    """

    def __init__(
        self,
        config: DataProviderConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        credentials_provider: GitHubCredentialsProvider | None = None,
    ) -> None:
        """Store the settings used when the provider is first requested."""
        self._config = config
        self._http_client = http_client
        self._credentials_provider = credentials_provider
        self._api: SynergyApi | None = None
        self._lock = asyncio.Lock()

    async def get(self) -> SynergyApi:
        """Return the shared provider."""
        if self._api is not None:
            return self._api
        async with self._lock:
            if self._api is None:
                self._api = await create_synergy_api(
                    self._config,
                    http_client=self._http_client,
                    credentials_provider=self._credentials_provider,
                )
                log_info(logger, "Created %s provider", self._config.provider)
            return self._api

    async def aclose(self) -> None:
        """Close the provider if it was ever created."""
        if self._api is not None:
            await self._api.aclose()
            self._api = None
