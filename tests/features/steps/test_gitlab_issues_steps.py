"""Behavioural coverage for GitLab issue listing and statistics."""

from __future__ import annotations

import typing as typ

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from synergy.config import DataProviderConfig
from synergy.gitlab import GitLabProvider
from tests.helpers import GRAPHQL_BASE_URL, GraphQLStub, run_async

if typ.TYPE_CHECKING:
    from synergy.providers import ProjectIssue, ProjectStats

_CONFIG = DataProviderConfig(
    provider="gitlab",
    api_base_url=GRAPHQL_BASE_URL,
    token="glpat-token",
    repo_tag="inner-source",
)


class IssuesContext(typ.TypedDict, total=False):
    """Shared mutable scenario state."""

    tagged: list[dict[str, typ.Any]]
    labelled: list[dict[str, typ.Any]]
    issues: list[ProjectIssue]
    stats: ProjectStats


@scenario(
    "../gitlab_issues.feature",
    "Issues found through tags and labels are listed once",
)
def test_issues_listed_once() -> None:
    """Wrap the pytest-bdd scenario for issue deduplication."""


@scenario("../gitlab_issues.feature", "Statistics separate standalone issues")
def test_statistics_separate_standalone() -> None:
    """Wrap the pytest-bdd scenario for issue statistics."""


@pytest.fixture
def issues_context() -> IssuesContext:
    """Provide empty project groups."""
    return {"tagged": [], "labelled": []}


def _issue(issue_id: str) -> dict[str, typ.Any]:
    return {
        "id": issue_id,
        "webUrl": f"https://gitlab.example.com/-/issues/{issue_id}",
        "title": issue_id,
        "state": "opened",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-01T00:00:00Z",
    }


def _project(name: str, *issue_ids: str) -> dict[str, typ.Any]:
    return {
        "name": name,
        "fullPath": f"group/{name}",
        "issues": {"nodes": [_issue(issue_id) for issue_id in issue_ids]},
    }


async def _provider(stub: GraphQLStub) -> GitLabProvider:
    return await GitLabProvider.create(_CONFIG, http_client=stub.client)


@given(
    parsers.parse(
        'a GitLab project "{name}" tagged inner-source with issue "{issue_id}"'
    )
)
def given_tagged_project(
    issues_context: IssuesContext, name: str, issue_id: str
) -> None:
    """Add a tagged project with one open issue."""
    project = _project(name, issue_id)
    issues_context["tagged"].append(project)
    issues_context["labelled"].append(project)


@given(
    parsers.parse(
        'an untagged GitLab project "{name}" with labelled issues '
        '"{first}" and "{second}"'
    )
)
def given_untagged_project(
    issues_context: IssuesContext, name: str, first: str, second: str
) -> None:
    """Add an untagged project whose issues carry the tag label."""
    issues_context["labelled"].append(_project(name, first, second))


@given(
    parsers.parse(
        "a tagged GitLab project with {opened:d} open and {closed:d} closed issues"
    )
)
def given_tagged_counts(
    issues_context: IssuesContext, opened: int, closed: int
) -> None:
    """Add issue counts for a tagged project."""
    issues_context["tagged"].append(
        {
            "fullPath": "group/tagged",
            "openIssuesCount": opened,
            "issueStatusCounts": {"closed": closed},
        }
    )


@given(
    parsers.parse(
        "an untagged GitLab project with {opened:d} open and {closed:d} "
        "closed labelled issue"
    )
)
def given_untagged_counts(
    issues_context: IssuesContext, opened: int, closed: int
) -> None:
    """Add labelled issue counts for an untagged project."""
    issues_context["labelled"].append(
        {
            "fullPath": "group/untagged",
            "openIssuesCount": {"count": opened},
            "closedIssuesCount": {"count": closed},
        }
    )


@when("the inner-source issues are listed")
def when_issues_listed(issues_context: IssuesContext) -> None:
    """List issues from a stubbed GitLab API."""
    stub = GraphQLStub().respond_data(
        {
            "innerSourceProjects": {"nodes": issues_context["tagged"]},
            "allProjects": {"nodes": issues_context["labelled"]},
        }
    )

    async def _list() -> list[ProjectIssue]:
        provider = await _provider(stub)
        return await provider.get_issues()

    issues_context["issues"] = run_async(_list)


@when("the inner-source statistics are requested")
def when_stats_requested(issues_context: IssuesContext) -> None:
    """Request statistics from a stubbed GitLab API."""
    tagged = issues_context["tagged"]
    stub = GraphQLStub().respond_data(
        {
            "innerSourceProjects": {"count": len(tagged), "nodes": tagged},
            "allProjects": {"nodes": issues_context["labelled"]},
        }
    )

    async def _stats() -> ProjectStats:
        provider = await _provider(stub)
        return await provider.get_stats()

    issues_context["stats"] = run_async(_stats)


@then(
    parsers.parse(
        'the issues are "{first}" from "{first_repo}" and '
        '"{second}" from "{second_repo}"'
    )
)
def then_issues_are(
    issues_context: IssuesContext,
    first: str,
    first_repo: str,
    second: str,
    second_repo: str,
) -> None:
    """Assert each issue appears once with its attributed project."""
    listed = sorted((issue.id, issue.repository) for issue in issues_context["issues"])
    assert listed == sorted([(first, first_repo), (second, second_repo)])


@then(
    parsers.parse(
        "there are {opened:d} open, {closed:d} closed and {standalone:d} "
        "standalone issues"
    )
)
def then_stats_are(
    issues_context: IssuesContext, opened: int, closed: int, standalone: int
) -> None:
    """Assert the combined statistics."""
    stats = issues_context["stats"]
    assert stats.open_issues_count == opened
    assert stats.closed_issues_count == closed
    assert stats.standalone_issues_count == standalone
