"""Credential resolution for GitHub organisation URLs."""

from __future__ import annotations

import collections.abc as cabc  # noqa: TC003
import dataclasses
import typing as typ
import urllib.parse

from .errors import GitHubCredentialsError


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubCredentials:
    """Headers to attach to GitHub API requests."""

    headers: cabc.Mapping[str, str]


class GitHubCredentialsProvider(typ.Protocol):
    """Resolve request headers for a GitHub organisation or repository URL."""

    async def get_credentials(self, url: str) -> GitHubCredentials:
        """Return credentials scoped to ``url``."""
        ...


class TokenCredentialsProvider:
    """Issue personal-access-token credentials for one GitHub host."""

    def __init__(self, *, host: str, token: str) -> None:
        """Bind the provider to ``host`` and ``token``."""
        if not token.strip():
            raise GitHubCredentialsError.empty_token()
        self._host = host.lower()
        self._token = token

    async def get_credentials(self, url: str) -> GitHubCredentials:
        """Return bearer-token headers when ``url`` belongs to the host."""
        requested = urllib.parse.urlsplit(url).netloc.lower()
        if requested != self._host:
            raise GitHubCredentialsError.host_mismatch(url, self._host)
        return GitHubCredentials(headers={"Authorization": f"Bearer {self._token}"})
