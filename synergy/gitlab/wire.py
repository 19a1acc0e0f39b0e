"""Typed GitLab GraphQL response shapes, one set per query.

Every query's ``data`` payload is decoded into these structs at the query
boundary. GitLab returns ``null`` for several list fields (languages,
topics, descriptions) on sparse projects, so those decode to defaults.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003

import msgspec


class _Wire(msgspec.Struct, kw_only=True, rename="camel"):
    """Base for GitLab response structs."""


class Language(_Wire):
    name: str
    share: float | None = None


class Namespace(_Wire):
    full_path: str
    name: str = ""


class Username(_Wire):
    username: str


class MergeRequestNode(_Wire):
    author: Username | None = None
    target_branch: str = ""


class MergeRequestConnection(_Wire):
    nodes: list[MergeRequestNode] = msgspec.field(default_factory=list)
    count: int | None = None


class IssueState(_Wire):
    state: str


class IssueStateConnection(_Wire):
    nodes: list[IssueState] = msgspec.field(default_factory=list)


class IssueAuthorNode(_Wire):
    username: str
    web_url: str | None = None
    avatar_url: str | None = None


class LabelNode(_Wire):
    title: str


class LabelConnection(_Wire):
    nodes: list[LabelNode] = msgspec.field(default_factory=list)


class IssueNode(_Wire):
    id: str
    web_url: str
    title: str
    state: str
    created_at: dt.datetime
    updated_at: dt.datetime
    iid: str = ""
    description: str | None = None
    author: IssueAuthorNode | None = None
    labels: LabelConnection | None = None


class IssueConnection(_Wire):
    nodes: list[IssueNode] = msgspec.field(default_factory=list)


class BlobNode(_Wire):
    path: str
    raw_blob: str | None = None


class BlobConnection(_Wire):
    nodes: list[BlobNode] = msgspec.field(default_factory=list)


class Repository(_Wire):
    blobs: BlobConnection | None = None


class ProjectNode(_Wire):
    """Fields shared by project listings and project details."""

    id: str
    name: str
    web_url: str
    visibility: str
    full_path: str
    updated_at: dt.datetime
    description: str | None = None
    archived: bool = False
    namespace: Namespace | None = None
    languages: list[Language] | None = None
    topics: list[str] | None = None
    star_count: int = 0
    merge_requests: MergeRequestConnection | None = None


class ListedProjectNode(ProjectNode):
    issues: IssueStateConnection | None = None


class ProjectDetailsNode(ProjectNode):
    issues: IssueConnection | None = None
    repository: Repository | None = None


class ListedProjectConnection(_Wire):
    nodes: list[ListedProjectNode] = msgspec.field(default_factory=list)


class ProjectsResponse(_Wire):
    projects: ListedProjectConnection | None = None


class ProjectResponse(_Wire):
    project: ProjectDetailsNode | None = None


class IssueProjectLanguage(_Wire):
    name: str


class IssueProject(_Wire):
    """Project context attached to issues."""

    name: str
    full_path: str
    namespace: Namespace | None = None
    languages: list[IssueProjectLanguage] | None = None
    issues: IssueConnection | None = None


class IssueProjectConnection(_Wire):
    nodes: list[IssueProject] = msgspec.field(default_factory=list)


class IssuesResponse(_Wire):
    inner_source_projects: IssueProjectConnection
    all_projects: IssueProjectConnection


class CurrentUser(_Wire):
    username: str


class CurrentUserResponse(_Wire):
    current_user: CurrentUser | None = None


class MyIssuesResponse(_Wire):
    projects: IssueProjectConnection


class ContributionAuthor(_Wire):
    name: str
    web_url: str | None = None
    avatar_url: str | None = None


class ContributionMergeRequest(_Wire):
    author: ContributionAuthor | None = None


class ContributionMergeRequestConnection(_Wire):
    nodes: list[ContributionMergeRequest] = msgspec.field(default_factory=list)


class ContributionProject(_Wire):
    merge_requests: ContributionMergeRequestConnection | None = None


class ContributionProjectConnection(_Wire):
    nodes: list[ContributionProject] = msgspec.field(default_factory=list)


class ContributionsResponse(_Wire):
    projects: ContributionProjectConnection


class IssueStatusCounts(_Wire):
    closed: int | None = None


class TaggedProjectCounts(_Wire):
    full_path: str
    open_issues_count: int | None = None
    issue_status_counts: IssueStatusCounts | None = None


class TaggedProjectCountsConnection(_Wire):
    count: int = 0
    nodes: list[TaggedProjectCounts] = msgspec.field(default_factory=list)


class IssueCount(_Wire):
    count: int | None = None


class LabelledProjectCounts(_Wire):
    full_path: str
    open_issues_count: IssueCount | None = None
    closed_issues_count: IssueCount | None = None


class LabelledProjectCountsConnection(_Wire):
    nodes: list[LabelledProjectCounts] = msgspec.field(default_factory=list)


class StatsResponse(_Wire):
    inner_source_projects: TaggedProjectCountsConnection
    all_projects: LabelledProjectCountsConnection
