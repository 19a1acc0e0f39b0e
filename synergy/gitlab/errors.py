"""GitLab provider errors.

GitLab failures are reported through one exception type whose ``kind``
tells callers what went wrong, rather than through a subclass per failure.
"""

from __future__ import annotations

import enum
import typing as typ

if typ.TYPE_CHECKING:
    from synergy.graphql import GraphQLRequestError


class GitLabErrorKind(enum.StrEnum):
    """Classification of GitLab API failures."""

    AUTH = "auth"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    GENERIC = "generic"


_STATUS_ERRORS: dict[int, tuple[GitLabErrorKind, str]] = {
    401: (
        GitLabErrorKind.AUTH,
        "Authentication failed. Please check your GitLab token. Make sure it "
        "has the correct scopes (api, read_api) and is not expired.",
    ),
    404: (
        GitLabErrorKind.NOT_FOUND,
        "Resource not found. Please check your GitLab token permissions.",
    ),
    403: (
        GitLabErrorKind.FORBIDDEN,
        "Access denied. Please check your GitLab permissions.",
    ),
}


class GitLabApiError(RuntimeError):
    """Raised when a GitLab GraphQL call fails.

    Attributes
    ----------
    kind
        Failure classification.
    status
        HTTP status code, when the failure came with one.
    raw
        Raw response body returned by GitLab, when available.

    """

    def __init__(
        self,
        message: str,
        *,
        kind: GitLabErrorKind = GitLabErrorKind.GENERIC,
        status: int | None = None,
        raw: object | None = None,
    ) -> None:
        """Initialise the error with its classification and context."""
        self.kind = kind
        self.status = status
        self.raw = raw
        super().__init__(message)

    @property
    def message(self) -> str:
        """Return the human-readable error message."""
        return str(self)

    @classmethod
    def from_request_error(cls, exc: GraphQLRequestError) -> GitLabApiError:
        """Classify a transport failure by its HTTP status.

        Examples
        --------
        >>> from synergy.graphql import GraphQLRequestError
        >>> GitLabApiError.from_request_error(
        ...     GraphQLRequestError("GraphQL HTTP 403", status=403)
        ... ).kind
        <GitLabErrorKind.FORBIDDEN: 'forbidden'>

        """
        classified = _STATUS_ERRORS.get(exc.status) if exc.status else None
        if classified is None:
            return cls.generic(exc.message, status=exc.status, raw=exc.response)
        kind, message = classified
        return cls(message, kind=kind, status=exc.status, raw=exc.response)

    @classmethod
    def generic(
        cls, detail: str, *, status: int | None = None, raw: object | None = None
    ) -> GitLabApiError:
        """Return an error wrapping any other failure message."""
        return cls(f"GitLab API error: {detail}", status=status, raw=raw)

    @classmethod
    def empty_response(cls) -> GitLabApiError:
        """Return an error for a response without data."""
        return cls("Empty response from GitLab API")

    @classmethod
    def project_not_found(cls, full_path: str) -> GitLabApiError:
        """Return an error for a project the token cannot see."""
        return cls(
            f"Project '{full_path}' not found or not accessible",
            kind=GitLabErrorKind.NOT_FOUND,
        )

    @classmethod
    def unknown_current_user(cls) -> GitLabApiError:
        """Return an error when the token is not bound to a user."""
        return cls(
            "Unable to resolve the current GitLab user. Please check your "
            "GitLab token.",
            kind=GitLabErrorKind.AUTH,
        )
