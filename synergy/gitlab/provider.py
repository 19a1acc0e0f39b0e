"""GitLab GraphQL implementation of :class:`SynergyInsightsApi`."""

from __future__ import annotations

import typing as typ

import msgspec

from synergy.graphql import GraphQLClient, GraphQLRequestError
from synergy.logging import get_logger, log_debug, log_error, log_info
from synergy.providers.errors import ResponseShapeError, decode_response
from synergy.providers.models import (
    IssueAuthor,
    Project,
    ProjectContributor,
    ProjectDetails,
    ProjectIssue,
    ProjectStats,
    is_open_state,
    normalise_topics,
    sort_by_updated_desc,
)

from . import queries
from .aggregation import (
    count_merge_authors,
    merge_issue_sources,
    primary_language,
    summarise_stats,
    tally_contributions,
)
from .errors import GitLabApiError
from .wire import (
    ContributionsResponse,
    CurrentUserResponse,
    IssuesResponse,
    MyIssuesResponse,
    ProjectResponse,
    ProjectsResponse,
    StatsResponse,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    import httpx

    from synergy.config import DataProviderConfig

    from .wire import (
        BlobNode,
        IssueNode,
        IssueProject,
        IssueProjectLanguage,
        Language,
        ListedProjectNode,
        ProjectDetailsNode,
        ProjectNode,
    )

logger = get_logger(__name__)


def format_project(
    project: ProjectNode, repo_tag: str, *, issues_count: int
) -> Project:
    """Build a :class:`Project` from a GitLab project node.

    The owner is the namespace full path, so nested groups are preserved,
    and the primary language is the language with the largest share.
    """
    languages = project.languages or []
    merge_requests = project.merge_requests
    contributions_count = 0
    if merge_requests is not None:
        contributions_count = (
            merge_requests.count
            if merge_requests.count is not None
            else len(merge_requests.nodes)
        )
    return Project(
        id=project.id,
        name=project.name,
        description=project.description or "",
        url=project.web_url,
        visibility=project.visibility,
        is_private=project.visibility == "private",
        owner=project.namespace.full_path if project.namespace else "",
        updated_at=project.updated_at,
        primary_language=primary_language(languages),
        languages=tuple(language.name for language in languages),
        topics=normalise_topics(project.topics or [], repo_tag),
        stars_count=project.star_count,
        issues_count=issues_count,
        contributions_count=contributions_count,
        contributors=count_merge_authors(merge_requests),
    )


def _first_language(
    languages: cabc.Sequence[Language | IssueProjectLanguage] | None,
) -> str | None:
    return languages[0].name if languages else None


def format_issue(
    issue: IssueNode, *, repository: str, language: str | None
) -> ProjectIssue:
    """Build a :class:`ProjectIssue` attributed to ``repository``."""
    author = (
        IssueAuthor(
            login=issue.author.username,
            url=issue.author.web_url,
            avatar_url=issue.author.avatar_url,
        )
        if issue.author is not None
        else IssueAuthor(login="")
    )
    return ProjectIssue(
        id=issue.id,
        url=issue.web_url,
        author=author,
        title=issue.title,
        body=issue.description or "",
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        is_open=is_open_state(issue.state),
        repository=repository,
        primary_language=language,
    )


def _issue_in_project(issue: IssueNode, project: IssueProject) -> ProjectIssue:
    return format_issue(
        issue, repository=project.name, language=_first_language(project.languages)
    )


def _blob_text(blobs: cabc.Iterable[BlobNode], path: str) -> str | None:
    return next((blob.raw_blob for blob in blobs if blob.path == path), None)


class GitLabProvider:
    """Inner-source projects, issues and statistics from GitLab.

    Projects are those the token's user is a member of and that carry the
    repository tag as a topic. Every failure surfaces as
    :class:`GitLabApiError` after being logged with the query and its
    variables.

    Parameters
    ----------
    config
        Provider settings.
    client
        GraphQL executor already carrying the ``PRIVATE-TOKEN`` header.

    """

    def __init__(self, config: DataProviderConfig, client: GraphQLClient) -> None:
        """Bind the provider to its settings and GraphQL executor."""
        self._repo_tag = config.repo_tag
        self._client = client

    @classmethod
    async def create(
        cls,
        config: DataProviderConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> GitLabProvider:
        """Return a provider authenticating with the configured token."""
        client = GraphQLClient(
            config.api_base_url,
            {"PRIVATE-TOKEN": config.token},
            http_client=http_client,
        )
        log_info(logger, "GitLab provider ready endpoint=%s", client.endpoint)
        return cls(config, client)

    async def aclose(self) -> None:
        """Close the underlying GraphQL executor."""
        await self._client.aclose()

    async def _execute[ResponseT: msgspec.Struct](
        self,
        query: str,
        variables: dict[str, typ.Any],
        model: type[ResponseT],
        *,
        query_name: str,
    ) -> ResponseT:
        """Run ``query`` and decode its data, normalising every failure."""
        try:
            data = await self._client.execute(query, variables)
            if not data:
                raise GitLabApiError.empty_response()
            return decode_response(data, model, query_name=query_name)
        except GraphQLRequestError as exc:
            error = GitLabApiError.from_request_error(exc)
            self._log_failure(query, variables, error)
            raise error from exc
        except ResponseShapeError as exc:
            error = GitLabApiError.generic(str(exc))
            self._log_failure(query, variables, error)
            raise error from exc
        except GitLabApiError as exc:
            self._log_failure(query, variables, exc)
            raise

    @staticmethod
    def _log_failure(
        query: str, variables: dict[str, typ.Any], error: GitLabApiError
    ) -> None:
        log_error(
            logger,
            "GitLab query failed query=%s variables=%s status=%s kind=%s "
            "message=%s raw=%s",
            queries.first_line(query),
            variables,
            error.status,
            error.kind,
            error.message,
            error.raw,
        )

    def _tag_variables(self) -> dict[str, typ.Any]:
        return {"tags": [self._repo_tag]}

    async def get_projects(self) -> list[Project]:
        """Return tagged, non-archived member projects."""
        response = await self._execute(
            queries.PROJECTS_QUERY,
            self._tag_variables(),
            ProjectsResponse,
            query_name="projects",
        )
        nodes = response.projects.nodes if response.projects else []
        projects = [self._project_from_listing(node) for node in nodes]
        log_debug(logger, "GitLab get_projects returned %d projects", len(projects))
        return sort_by_updated_desc(projects)

    def _project_from_listing(self, node: ListedProjectNode) -> Project:
        issues_count = len(node.issues.nodes) if node.issues else 0
        return format_project(node, self._repo_tag, issues_count=issues_count)

    async def get_project(self, name: str, owner: str) -> ProjectDetails:
        """Return ``owner/name`` with README, CONTRIBUTING and its issues.

        ``owner`` is a namespace path and may name a nested group. Issues of
        every state are included. GitLab has no pinned issues, so
        ``pinned_issues`` is always empty.

        Raises
        ------
        GitLabApiError
            With kind ``not_found`` when the project is not visible.

        """
        full_path = f"{owner}/{name}"
        variables = {"fullPath": full_path}
        response = await self._execute(
            queries.PROJECT_QUERY,
            variables,
            ProjectResponse,
            query_name="project",
        )
        node = response.project
        if node is None:
            error = GitLabApiError.project_not_found(full_path)
            self._log_failure(queries.PROJECT_QUERY, variables, error)
            raise error
        return self._project_details(node)

    def _project_details(self, node: ProjectDetailsNode) -> ProjectDetails:
        issue_nodes = node.issues.nodes if node.issues else []
        project = format_project(node, self._repo_tag, issues_count=len(issue_nodes))
        blobs = (
            node.repository.blobs.nodes
            if node.repository and node.repository.blobs
            else []
        )
        language = _first_language(node.languages)
        return ProjectDetails(
            **msgspec.structs.asdict(project),
            readme=_blob_text(blobs, queries.README_PATH) or "",
            contributing_guidelines=_blob_text(blobs, queries.CONTRIBUTING_PATH),
            issues=tuple(
                format_issue(issue, repository=node.name, language=language)
                for issue in issue_nodes
            ),
            pinned_issues=(),
        )

    async def get_issues(self) -> list[ProjectIssue]:
        """Return open issues of tagged projects plus tag-labelled issues.

        An issue reachable through both routes is returned once, attributed
        to its tagged project.
        """
        response = await self._execute(
            queries.ISSUES_QUERY,
            {**self._tag_variables(), "labels": [self._repo_tag]},
            IssuesResponse,
            query_name="issues",
        )
        merged = merge_issue_sources(
            response.inner_source_projects.nodes, response.all_projects.nodes
        )
        issues = [
            _issue_in_project(issue, project) for issue, project in merged.values()
        ]
        log_debug(logger, "GitLab get_issues returned %d issues", len(issues))
        return sort_by_updated_desc(issues)

    async def get_my_issues(self) -> list[ProjectIssue]:
        """Return issues assigned to the token's user in member projects.

        Raises
        ------
        GitLabApiError
            With kind ``auth`` when GitLab reports no current user.

        """
        user = await self._execute(
            queries.CURRENT_USER_QUERY,
            {},
            CurrentUserResponse,
            query_name="currentUser",
        )
        if user.current_user is None:
            error = GitLabApiError.unknown_current_user()
            self._log_failure(queries.CURRENT_USER_QUERY, {}, error)
            raise error

        response = await self._execute(
            queries.MY_ISSUES_QUERY,
            {"assignees": [user.current_user.username]},
            MyIssuesResponse,
            query_name="myIssues",
        )
        issues = [
            _issue_in_project(issue, project)
            for project in response.projects.nodes
            if project.issues
            for issue in project.issues.nodes
        ]
        log_debug(logger, "GitLab get_my_issues returned %d issues", len(issues))
        return sort_by_updated_desc(issues)

    async def get_contributions(self) -> list[ProjectContributor]:
        """Return merge-request authors of tagged projects with their counts."""
        response = await self._execute(
            queries.CONTRIBUTIONS_QUERY,
            self._tag_variables(),
            ContributionsResponse,
            query_name="contributions",
        )
        contributors = tally_contributions(response.projects.nodes)
        log_debug(
            logger,
            "GitLab get_contributions returned %d contributors",
            len(contributors),
        )
        return contributors

    async def get_stats(self) -> ProjectStats:
        """Return project and issue counts for the repository tag."""
        response = await self._execute(
            queries.STATS_QUERY,
            {**self._tag_variables(), "labels": [self._repo_tag]},
            StatsResponse,
            query_name="stats",
        )
        return summarise_stats(response)
