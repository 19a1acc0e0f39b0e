"""GitHub provider errors.

Query failures are not wrapped: :class:`synergy.graphql.GraphQLRequestError`
reaches the caller unchanged. Only credential resolution has its own error.
"""

from __future__ import annotations


class GitHubCredentialsError(RuntimeError):
    """Raised when no credentials can be issued for a GitHub URL."""

    @classmethod
    def host_mismatch(cls, url: str, host: str) -> GitHubCredentialsError:
        """Return an error for a URL outside the configured host."""
        return cls(f"No GitHub credentials configured for {url} (host {host})")

    @classmethod
    def empty_token(cls) -> GitHubCredentialsError:
        """Return an error when the configured token is blank."""
        return cls("GitHub token must be non-empty")
