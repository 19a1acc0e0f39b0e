"""Platform-agnostic output structures shared by every provider.

Every value is built fresh for a single provider call and never mutated
afterwards. Field names encode to camelCase so the JSON produced for the
portal matches the shape the UI consumes.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003

import msgspec

Contributors = dict[str, int]
"""Contributor identity mapped to the number of merged change requests."""


class IssueAuthor(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Author of an issue."""

    login: str
    url: str | None = None
    avatar_url: str | None = None


class Project(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Inner-source project summary.

    Attributes
    ----------
    id
        Platform-assigned node identifier.
    owner
        GitHub owner login or GitLab namespace full path.
    primary_language
        Lower-cased GitHub primary language, or the GitLab language with the
        largest share.
    topics
        Lower-cased topics, never including the configured repository tag.
    issues_count
        Open issues returned with the project (first page only).
    contributions_count
        Total merged change requests reported by the platform.
    contributors
        Merge counts per contributor.

    """

    id: str
    name: str
    description: str
    url: str
    visibility: str
    is_private: bool
    owner: str
    updated_at: dt.datetime
    primary_language: str | None
    languages: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()
    stars_count: int = 0
    issues_count: int = 0
    contributions_count: int = 0
    contributors: Contributors = msgspec.field(default_factory=dict)


class ProjectIssue(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Issue normalised across platforms.

    ``is_open`` is computed from the platform state string and ``repository``
    names the project the issue belongs to.
    """

    id: str
    url: str
    author: IssueAuthor
    title: str
    body: str
    created_at: dt.datetime
    updated_at: dt.datetime
    is_open: bool
    repository: str
    primary_language: str | None = None


class ProjectDetails(Project, kw_only=True, frozen=True, rename="camel"):
    """A project with its documents and issues."""

    readme: str = ""
    contributing_guidelines: str | None = None
    issues: tuple[ProjectIssue, ...] = ()
    pinned_issues: tuple[ProjectIssue, ...] = ()


class ProjectContributor(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Contributor across all inner-source projects."""

    login: str
    url: str | None
    avatar_url: str | None
    contributions_count: int


class ProjectStats(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Aggregate inner-source issue statistics."""

    projects_count: int
    open_issues_count: int
    closed_issues_count: int
    pinned_issues_count: int
    standalone_issues_count: int


_OPEN_STATES = frozenset({"OPEN", "opened"})


def is_open_state(state: str | None) -> bool:
    """Return whether a raw platform issue state denotes an open issue.

    GitHub reports ``"OPEN"`` and GitLab ``"opened"``; every other value,
    including differently cased variants, is treated as not open.

    Examples
    --------
    >>> is_open_state("OPEN"), is_open_state("opened"), is_open_state("CLOSED")
    (True, True, False)

    """
    return state in _OPEN_STATES


def normalise_topics(
    topics: list[str] | tuple[str, ...], repo_tag: str
) -> tuple[str, ...]:
    """Lower-case ``topics`` and drop the repository tag (case-insensitive)."""
    excluded = repo_tag.lower()
    lowered = (topic.lower() for topic in topics)
    return tuple(topic for topic in lowered if topic != excluded)


def sort_by_updated_desc[T: (Project, ProjectIssue)](items: list[T]) -> list[T]:
    """Return ``items`` ordered from most to least recently updated."""
    return sorted(items, key=lambda item: item.updated_at, reverse=True)


def encode(value: object) -> object:
    """Convert models to JSON-compatible builtins using camelCase names."""
    return msgspec.to_builtins(value)
