"""GitLab provider for Synergy."""

from __future__ import annotations

from .errors import GitLabApiError, GitLabErrorKind
from .provider import GitLabProvider

__all__ = ["GitLabApiError", "GitLabErrorKind", "GitLabProvider"]
