"""GitHub GraphQL implementation of :class:`SynergyApi`."""

from __future__ import annotations

import collections
import typing as typ

import msgspec

from synergy.graphql import GraphQLClient
from synergy.logging import get_logger, log_debug, log_info
from synergy.providers.errors import ResponseShapeError, decode_response
from synergy.providers.models import (
    Contributors,
    IssueAuthor,
    Project,
    ProjectDetails,
    ProjectIssue,
    is_open_state,
    normalise_topics,
    sort_by_updated_desc,
)

from . import queries
from .credentials import GitHubCredentialsProvider, TokenCredentialsProvider
from .wire import (
    IssueNode,
    IssuesResponse,
    ProjectResponse,
    ProjectsResponse,
    RepositoryNode,
    SearchRepositoryNode,
    TopicConnection,
)

if typ.TYPE_CHECKING:
    import httpx

    from synergy.config import DataProviderConfig

logger = get_logger(__name__)


def _topic_names(connection: TopicConnection | None) -> list[str]:
    if connection is None:
        return []
    return [node.topic.name for node in connection.nodes if node.topic is not None]


def count_contributors(repo: RepositoryNode) -> Contributors:
    """Count merged pull requests per author that targeted the default branch.

    Pull requests without an author (deleted accounts) or without a base ref
    are not counted, nor is anything when the repository has no default
    branch.
    """
    default_branch = repo.default_branch_ref.name if repo.default_branch_ref else None
    if default_branch is None:
        return {}
    counts = collections.Counter(
        node.author.login
        for node in repo.pull_requests.nodes
        if node.author is not None
        and node.base_ref is not None
        and node.base_ref.name == default_branch
    )
    return dict(counts)


def format_project(
    repo: RepositoryNode, repo_tag: str, *, issues_count: int
) -> Project:
    """Build a :class:`Project` from a repository node."""
    primary_language = (
        repo.primary_language.name.lower() if repo.primary_language else None
    )
    languages = (
        tuple(node.name for node in repo.languages.nodes) if repo.languages else ()
    )
    return Project(
        id=repo.id,
        name=repo.name,
        description=repo.description or "",
        url=repo.url,
        visibility=repo.visibility,
        is_private=repo.is_private,
        owner=repo.owner.login,
        updated_at=repo.updated_at,
        primary_language=primary_language,
        languages=languages,
        topics=normalise_topics(_topic_names(repo.repository_topics), repo_tag),
        stars_count=repo.stargazer_count,
        issues_count=issues_count,
        contributions_count=repo.pull_requests.total_count,
        contributors=count_contributors(repo),
    )


def convert_issue(
    issue: IssueNode,
    *,
    repository: str | None = None,
    primary_language: str | None = None,
) -> ProjectIssue:
    """Build a :class:`ProjectIssue`; issue-level repository data wins."""
    if issue.repository is not None:
        repository = issue.repository.name
        language = issue.repository.primary_language
        primary_language = language.name if language else None
    author = (
        IssueAuthor(login=issue.author.login, url=issue.author.url)
        if issue.author is not None
        else IssueAuthor(login="")
    )
    return ProjectIssue(
        id=issue.id,
        url=issue.url,
        author=author,
        title=issue.title,
        body=issue.body,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        is_open=is_open_state(issue.state),
        repository=repository or "",
        primary_language=primary_language,
    )


def keep_open_only(issue: IssueNode) -> bool:
    """Return whether a GitHub issue is in the ``OPEN`` state."""
    return issue.state == "OPEN"


def is_inner_source(issue: IssueNode) -> bool:
    """Return whether the issue or its repository carries ``inner-source``.

    Labels and repository topics are compared case-insensitively against the
    fixed ``inner-source`` tag.
    """
    labels = [node.name for node in issue.labels.nodes] if issue.labels else []
    topics = (
        _topic_names(issue.repository.repository_topics)
        if issue.repository is not None
        else []
    )
    return any(name.lower() == queries.INNER_SOURCE_TAG for name in (*labels, *topics))


def _decode_issue_nodes(
    response: IssuesResponse, *, query_name: str
) -> list[IssueNode]:
    nodes = [node for node in response.search.nodes if node]
    return [
        decode_response(node, IssueNode, query_name=query_name) for node in nodes
    ]


class GitHubProvider:
    """Inner-source projects and issues from one GitHub organisation.

    Build instances with :meth:`create`, which performs the organisation
    credentials exchange once; the resulting headers are reused for every
    query the instance issues. Query errors propagate unchanged.

    Parameters
    ----------
    config
        Provider settings; ``org`` must be set.
    client
        GraphQL executor already carrying the GitHub credentials headers.

    """

    def __init__(self, config: DataProviderConfig, client: GraphQLClient) -> None:
        """Bind the provider to its settings and GraphQL executor."""
        if not config.org:
            msg = "GitHub provider requires an organisation"
            raise ValueError(msg)
        self._org = config.org
        self._repo_tag = config.repo_tag
        self._client = client

    @classmethod
    async def create(
        cls,
        config: DataProviderConfig,
        *,
        credentials_provider: GitHubCredentialsProvider | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> GitHubProvider:
        """Exchange organisation credentials and return a ready provider.

        Parameters
        ----------
        config
            GitHub provider settings.
        credentials_provider
            Source of request headers; defaults to the configured token.
        http_client
            Optional shared HTTP client, left open by :meth:`aclose`.

        """
        host = config.host or "github.com"
        provider = credentials_provider or TokenCredentialsProvider(
            host=host, token=config.token
        )
        credentials = await provider.get_credentials(f"https://{host}/{config.org}")
        client = GraphQLClient(
            config.api_base_url, credentials.headers, http_client=http_client
        )
        log_info(
            logger,
            "GitHub provider ready for org=%s endpoint=%s",
            config.org,
            client.endpoint,
        )
        return cls(config, client)

    async def aclose(self) -> None:
        """Close the underlying GraphQL executor."""
        await self._client.aclose()

    async def get_projects(self) -> list[Project]:
        """Return repositories tagged with the repository tag.

        Only the first search page is read; ``pageInfo`` is requested but
        not followed.
        """
        data = await self._client.execute(
            queries.PROJECTS_QUERY,
            {"searchQuery": queries.projects_search(self._org, self._repo_tag)},
        )
        response = decode_response(data, ProjectsResponse, query_name="repositories")
        projects = [self._project_from_search(node) for node in response.search.nodes]
        log_debug(logger, "GitHub get_projects returned %d projects", len(projects))
        return sort_by_updated_desc(projects)

    def _project_from_search(self, repo: SearchRepositoryNode) -> Project:
        return format_project(repo, self._repo_tag, issues_count=len(repo.issues.nodes))

    async def get_project(self, name: str, owner: str) -> ProjectDetails:
        """Return one repository with README, open issues and pinned issues.

        Raises
        ------
        ResponseShapeError
            If GitHub returns no repository for ``owner``/``name``.

        """
        data = await self._client.execute(
            queries.PROJECT_QUERY, {"name": name, "owner": owner}
        )
        response = decode_response(data, ProjectResponse, query_name="repository")
        repo = response.repository
        if repo is None:
            raise ResponseShapeError.missing("repository")

        project = format_project(
            repo, self._repo_tag, issues_count=len(repo.issues.nodes)
        )
        language = repo.primary_language.name if repo.primary_language else None
        pinned = repo.pinned_issues.nodes if repo.pinned_issues else []
        return ProjectDetails(
            **msgspec.structs.asdict(project),
            readme=(repo.readme.text or "") if repo.readme else "",
            issues=tuple(
                convert_issue(issue, repository=repo.name, primary_language=language)
                for issue in repo.issues.nodes
            ),
            pinned_issues=tuple(
                convert_issue(issue, repository=repo.name, primary_language=language)
                for issue in (node.issue for node in pinned)
                if keep_open_only(issue)
            ),
        )

    async def get_issues(self) -> list[ProjectIssue]:
        """Return open issues labelled with the repository tag."""
        data = await self._client.execute(
            queries.ISSUES_QUERY,
            {"searchQuery": queries.issues_search(self._org, self._repo_tag)},
        )
        response = decode_response(data, IssuesResponse, query_name="issues")
        issues = [
            convert_issue(issue)
            for issue in _decode_issue_nodes(response, query_name="issues")
        ]
        log_debug(logger, "GitHub get_issues returned %d issues", len(issues))
        return sort_by_updated_desc(issues)

    async def get_my_issues(self) -> list[ProjectIssue]:
        """Return issues assigned to the caller that are inner-source."""
        data = await self._client.execute(
            queries.MY_ISSUES_QUERY,
            {"searchQuery": queries.my_issues_search(self._org)},
        )
        response = decode_response(data, IssuesResponse, query_name="myIssues")
        issues = [
            convert_issue(issue)
            for issue in _decode_issue_nodes(response, query_name="myIssues")
            if is_inner_source(issue)
        ]
        log_debug(logger, "GitHub get_my_issues returned %d issues", len(issues))
        return sort_by_updated_desc(issues)
