"""Unit tests for the GitLab aggregation folds."""

from __future__ import annotations

import typing as typ

import msgspec
import pytest

from synergy.gitlab.aggregation import (
    count_merge_authors,
    merge_issue_sources,
    primary_language,
    summarise_stats,
    tally_contributions,
)
from synergy.gitlab.wire import (
    ContributionProject,
    IssueProject,
    Language,
    MergeRequestConnection,
    StatsResponse,
)


def _issue_project(full_path: str, *issue_ids: str) -> IssueProject:
    issues = [
        {
            "id": issue_id,
            "webUrl": f"https://gitlab.example.com/{full_path}/-/issues/{issue_id}",
            "title": issue_id,
            "state": "opened",
            "createdAt": "2024-01-01T00:00:00Z",
            "updatedAt": "2024-01-01T00:00:00Z",
        }
        for issue_id in issue_ids
    ]
    return msgspec.convert(
        {
            "name": full_path.rsplit("/", 1)[-1],
            "fullPath": full_path,
            "issues": {"nodes": issues},
        },
        type=IssueProject,
    )


@pytest.mark.parametrize(
    ("languages", "expected"),
    [
        ([Language(name="Go", share=30.0), Language(name="Rust", share=70.0)], "Rust"),
        ([Language(name="Go", share=50.0), Language(name="C", share=50.0)], "Go"),
        ([Language(name="Shell", share=None)], ""),
        ([], ""),
        (None, ""),
    ],
)
def test_primary_language_picks_largest_share(
    languages: list[Language] | None, expected: str
) -> None:
    """The largest strictly positive share wins; ties keep the first."""
    assert primary_language(languages) == expected


def test_count_merge_authors_counts_every_merge() -> None:
    """Merge authors are counted regardless of target branch."""
    merges = msgspec.convert(
        {
            "nodes": [
                {"author": {"username": "ada"}, "targetBranch": "main"},
                {"author": {"username": "ada"}, "targetBranch": "release"},
                {"author": {"username": "bob"}, "targetBranch": "main"},
                {"author": None, "targetBranch": "main"},
            ]
        },
        type=MergeRequestConnection,
    )

    assert count_merge_authors(merges) == {"ada": 2, "bob": 1}
    assert count_merge_authors(None) == {}


def test_merge_issue_sources_prefers_tagged_projects() -> None:
    """Label matches never duplicate or re-attribute tagged issues."""
    tagged = [_issue_project("platform/portal", "1", "2")]
    labelled = [
        _issue_project("platform/portal", "2"),
        _issue_project("team/tools", "3", "1"),
    ]

    merged = merge_issue_sources(tagged, labelled)

    assert list(merged) == ["1", "2", "3"]
    assert {key: project.full_path for key, (_, project) in merged.items()} == {
        "1": "platform/portal",
        "2": "platform/portal",
        "3": "team/tools",
    }


def test_merge_issue_sources_leaves_inputs_untouched() -> None:
    """The fold returns a new mapping without mutating its inputs."""
    tagged = [_issue_project("a/b", "1")]
    before = msgspec.to_builtins(tagged)

    merge_issue_sources(tagged, [])

    assert msgspec.to_builtins(tagged) == before


def test_tally_contributions_counts_by_author_name() -> None:
    """Contributors are keyed by display name across projects."""
    projects = msgspec.convert(
        [
            {
                "mergeRequests": {
                    "nodes": [
                        {
                            "author": {
                                "name": "Ada",
                                "webUrl": "u/ada",
                                "avatarUrl": "a",
                            }
                        },
                        {"author": {"name": "Bob", "webUrl": "u/bob"}},
                    ]
                }
            },
            {"mergeRequests": {"nodes": [{"author": {"name": "Ada"}}, {}]}},
            {"mergeRequests": None},
        ],
        type=list[ContributionProject],
    )

    contributors = tally_contributions(projects)

    assert [(c.login, c.contributions_count) for c in contributors] == [
        ("Ada", 2),
        ("Bob", 1),
    ]
    assert contributors[0].url == "u/ada"
    assert contributors[0].avatar_url == "a"


def _stats(**data: typ.Any) -> StatsResponse:
    return msgspec.convert(data, type=StatsResponse)


def test_summarise_stats_separates_standalone_issues() -> None:
    """Tagged open issues and labelled issues elsewhere are kept apart."""
    response = _stats(
        innerSourceProjects={
            "count": 2,
            "nodes": [
                {
                    "fullPath": "a/one",
                    "openIssuesCount": 5,
                    "issueStatusCounts": {"closed": 2},
                },
                {"fullPath": "a/two", "openIssuesCount": None},
            ],
        },
        allProjects={
            "nodes": [
                {
                    "fullPath": "a/one",
                    "openIssuesCount": {"count": 4},
                    "closedIssuesCount": {"count": 9},
                },
                {
                    "fullPath": "b/other",
                    "openIssuesCount": {"count": 1},
                    "closedIssuesCount": {"count": 1},
                },
            ]
        },
    )

    stats = summarise_stats(response)

    assert stats.projects_count == 2
    assert stats.open_issues_count == 5
    assert stats.closed_issues_count == 3
    assert stats.standalone_issues_count == 1
    assert stats.pinned_issues_count == 0
