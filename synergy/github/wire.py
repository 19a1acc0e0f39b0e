"""Typed GitHub GraphQL response shapes.

Each query's ``data`` payload is converted into these structs once, at the
query boundary. Nullable GraphQL fields are optional here so gaps such as a
missing README, a deleted author or an empty repository decode cleanly.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import typing as typ

import msgspec


class _Wire(msgspec.Struct, kw_only=True, rename="camel"):
    """Base for GitHub response structs."""


class Named(_Wire):
    name: str


class Login(_Wire):
    login: str


class TopicNode(_Wire):
    topic: Named | None = None


class TopicConnection(_Wire):
    nodes: list[TopicNode] = msgspec.field(default_factory=list)


class NamedConnection(_Wire):
    nodes: list[Named] = msgspec.field(default_factory=list)


class PullRequestNode(_Wire):
    author: Login | None = None
    base_ref: Named | None = None


class PullRequestConnection(_Wire):
    total_count: int = 0
    nodes: list[PullRequestNode] = msgspec.field(default_factory=list)


class IssueState(_Wire):
    state: str


class IssueStateConnection(_Wire):
    nodes: list[IssueState] = msgspec.field(default_factory=list)


class IssueAuthorNode(_Wire):
    login: str
    url: str | None = None


class IssueRepository(_Wire):
    name: str
    primary_language: Named | None = None
    repository_topics: TopicConnection | None = None


class IssueNode(_Wire):
    id: str
    url: str
    title: str
    state: str
    created_at: dt.datetime
    updated_at: dt.datetime
    body: str = ""
    author: IssueAuthorNode | None = None
    is_pinned: bool | None = None
    labels: NamedConnection | None = None
    repository: IssueRepository | None = None


class IssueConnection(_Wire):
    nodes: list[IssueNode] = msgspec.field(default_factory=list)


class PinnedIssueNode(_Wire):
    issue: IssueNode


class PinnedIssueConnection(_Wire):
    nodes: list[PinnedIssueNode] = msgspec.field(default_factory=list)


class Blob(_Wire):
    text: str | None = None


class RepositoryNode(_Wire):
    """Fields shared by every repository query."""

    id: str
    name: str
    url: str
    visibility: str
    is_private: bool
    owner: Login
    updated_at: dt.datetime
    description: str | None = None
    primary_language: Named | None = None
    default_branch_ref: Named | None = None
    languages: NamedConnection | None = None
    repository_topics: TopicConnection | None = None
    stargazer_count: int = 0
    pull_requests: PullRequestConnection = msgspec.field(
        default_factory=PullRequestConnection
    )


class SearchRepositoryNode(RepositoryNode):
    issues: IssueStateConnection = msgspec.field(default_factory=IssueStateConnection)


class RepositoryDetailsNode(RepositoryNode):
    issues: IssueConnection = msgspec.field(default_factory=IssueConnection)
    pinned_issues: PinnedIssueConnection | None = None
    readme: Blob | None = None


class PageInfo(_Wire):
    has_next_page: bool = False
    end_cursor: str | None = None


class RepositorySearch(_Wire):
    nodes: list[SearchRepositoryNode] = msgspec.field(default_factory=list)
    page_info: PageInfo | None = None


class ProjectsResponse(_Wire):
    search: RepositorySearch


class ProjectResponse(_Wire):
    repository: RepositoryDetailsNode | None = None


class IssueSearch(_Wire):
    # Issue searches can return pull requests, which the `... on Issue`
    # fragment renders as empty objects; they are dropped before decoding.
    nodes: list[dict[str, typ.Any]] = msgspec.field(default_factory=list)
    page_info: PageInfo | None = None


class IssuesResponse(_Wire):
    search: IssueSearch
