"""Pure folds over decoded GitLab responses.

These functions hold the aggregation rules of the GitLab provider (primary
language choice, contributor counts, issue deduplication, statistics) so
they can be exercised without a GraphQL round trip. Each returns a fresh
value and leaves its inputs untouched.
"""

from __future__ import annotations

import collections
import functools
import itertools
import typing as typ

from synergy.providers.models import Contributors, ProjectContributor, ProjectStats

from .wire import Language

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .wire import (
        ContributionProject,
        IssueNode,
        IssueProject,
        MergeRequestConnection,
        StatsResponse,
    )

_NO_LANGUAGE = Language(name="", share=0)


def _larger_share(best: Language, candidate: Language) -> Language:
    return candidate if (candidate.share or 0) > (best.share or 0) else best


def primary_language(languages: cabc.Iterable[Language] | None) -> str:
    """Return the language with the largest share.

    Ties keep the language encountered first; no languages yields ``""``.

    Examples
    --------
    >>> langs = [Language(name="Go", share=30), Language(name="Rust", share=70)]
    >>> primary_language(langs)
    'Rust'
    >>> primary_language([])
    ''

    """
    return functools.reduce(_larger_share, languages or (), _NO_LANGUAGE).name


def count_merge_authors(merge_requests: MergeRequestConnection | None) -> Contributors:
    """Count merged merge requests per author username.

    GitLab's project query cannot cheaply compare target branches with the
    default branch, so every merged merge request is counted.
    """
    if merge_requests is None:
        return {}
    return dict(
        collections.Counter(
            node.author.username for node in merge_requests.nodes if node.author
        )
    )


type IssueOrigin = tuple[IssueNode, IssueProject]


def _project_issues(project: IssueProject) -> cabc.Iterator[tuple[str, IssueOrigin]]:
    issues = project.issues.nodes if project.issues else []
    return ((issue.id, (issue, project)) for issue in issues)


def merge_issue_sources(
    tagged: cabc.Sequence[IssueProject],
    labelled: cabc.Sequence[IssueProject],
) -> dict[str, IssueOrigin]:
    """Merge issues from tagged projects with label-matched issues.

    Parameters
    ----------
    tagged
        Projects carrying the repository tag, with their open issues.
    labelled
        All member projects, with only issues labelled with the tag.

    Returns
    -------
    dict[str, IssueOrigin]
        Issue id mapped to the issue and the project it is attributed to.
        Issues from tagged projects come first and always win; label-matched
        issues of a tagged project are skipped entirely.

    """
    tagged_paths = frozenset(project.full_path for project in tagged)
    entries = itertools.chain(
        itertools.chain.from_iterable(_project_issues(p) for p in tagged),
        itertools.chain.from_iterable(
            _project_issues(p) for p in labelled if p.full_path not in tagged_paths
        ),
    )
    merged: dict[str, IssueOrigin] = {}
    for issue_id, origin in entries:
        merged.setdefault(issue_id, origin)
    return merged


def tally_contributions(
    projects: cabc.Iterable[ContributionProject],
) -> list[ProjectContributor]:
    """Count merge requests per author display name across ``projects``.

    The first merge request seen for an author supplies the profile URL and
    avatar; contributors are returned in first-seen order.
    """
    authors = [
        node.author
        for project in projects
        if project.merge_requests
        for node in project.merge_requests.nodes
        if node.author is not None
    ]
    counts = collections.Counter(author.name for author in authors)
    first_seen = {author.name: author for author in reversed(authors)}
    return [
        ProjectContributor(
            login=name,
            url=first_seen[name].web_url,
            avatar_url=first_seen[name].avatar_url,
            contributions_count=count,
        )
        for name, count in counts.items()
    ]


def summarise_stats(response: StatsResponse) -> ProjectStats:
    """Combine tagged-project and standalone issue counts.

    Open issues of tagged projects and labelled open issues elsewhere
    ("standalone" issues) are reported separately; closed issues are summed
    across both groups. GitLab has no pinned issues.
    """
    tagged = response.inner_source_projects
    tagged_paths = frozenset(project.full_path for project in tagged.nodes)
    standalone = [
        project
        for project in response.all_projects.nodes
        if project.full_path not in tagged_paths
    ]

    open_tagged = sum(project.open_issues_count or 0 for project in tagged.nodes)
    closed_tagged = sum(
        (project.issue_status_counts.closed or 0)
        for project in tagged.nodes
        if project.issue_status_counts
    )
    open_standalone = sum(
        (project.open_issues_count.count or 0)
        for project in standalone
        if project.open_issues_count
    )
    closed_standalone = sum(
        (project.closed_issues_count.count or 0)
        for project in standalone
        if project.closed_issues_count
    )
    return ProjectStats(
        projects_count=tagged.count,
        open_issues_count=open_tagged,
        closed_issues_count=closed_tagged + closed_standalone,
        pinned_issues_count=0,
        standalone_issues_count=open_standalone,
    )
