"""GitHub provider for Synergy."""

from __future__ import annotations

from .credentials import (
    GitHubCredentials,
    GitHubCredentialsProvider,
    TokenCredentialsProvider,
)
from .errors import GitHubCredentialsError
from .provider import GitHubProvider

__all__ = [
    "GitHubCredentials",
    "GitHubCredentialsError",
    "GitHubCredentialsProvider",
    "GitHubProvider",
    "TokenCredentialsProvider",
]
