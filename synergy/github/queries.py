"""GraphQL documents for the GitHub provider."""

from __future__ import annotations

SEARCH_PAGE_SIZE = 100

# Issues requesting `assignee:@me` are filtered to this tag regardless of
# the configured repository tag.
INNER_SOURCE_TAG = "inner-source"

_REPOSITORY_FIELDS = """
  id
  name
  description
  url
  visibility
  isPrivate
  updatedAt
  owner {
    login
  }
  primaryLanguage {
    name
  }
  defaultBranchRef {
    name
  }
  languages(first: 100) {
    nodes {
      name
    }
  }
  stargazerCount
  repositoryTopics(first: 100) {
    nodes {
      topic {
        name
      }
    }
  }
  pullRequests(
    states: MERGED
    first: 100
    orderBy: {field: UPDATED_AT, direction: DESC}
  ) {
    totalCount
    nodes {
      author {
        login
      }
      baseRef {
        name
      }
    }
  }
"""

_ISSUE_FIELDS = """
  id
  url
  author {
    login
    url
  }
  title
  body
  createdAt
  updatedAt
  state
"""

PROJECTS_QUERY = f"""
query repositories($searchQuery: String!) {{
  search(type: REPOSITORY, query: $searchQuery, first: {SEARCH_PAGE_SIZE}) {{
    nodes {{
      ... on Repository {{
        {_REPOSITORY_FIELDS}
        issues(states: OPEN, first: 100) {{
          nodes {{
            state
          }}
        }}
      }}
    }}
    pageInfo {{
      hasNextPage
      endCursor
    }}
  }}
}}
"""

PROJECT_QUERY = f"""
query repository($name: String!, $owner: String!) {{
  repository(name: $name, owner: $owner) {{
    {_REPOSITORY_FIELDS}
    issues(
      states: OPEN
      first: 100
      orderBy: {{field: UPDATED_AT, direction: DESC}}
    ) {{
      nodes {{
        {_ISSUE_FIELDS}
      }}
      totalCount
    }}
    pinnedIssues(first: 100) {{
      nodes {{
        issue {{
          {_ISSUE_FIELDS}
        }}
      }}
    }}
    readme: object(expression: "HEAD:README.md") {{
      ... on Blob {{
        text
      }}
    }}
  }}
}}
"""

ISSUES_QUERY = f"""
query issues($searchQuery: String!) {{
  search(type: ISSUE, query: $searchQuery, first: {SEARCH_PAGE_SIZE}) {{
    nodes {{
      ... on Issue {{
        {_ISSUE_FIELDS}
        isPinned
        repository {{
          name
          primaryLanguage {{
            name
          }}
        }}
      }}
    }}
    pageInfo {{
      hasNextPage
      endCursor
    }}
  }}
}}
"""

MY_ISSUES_QUERY = f"""
query myIssues($searchQuery: String!) {{
  search(type: ISSUE, query: $searchQuery, first: {SEARCH_PAGE_SIZE}) {{
    nodes {{
      ... on Issue {{
        {_ISSUE_FIELDS}
        isPinned
        labels(first: 50) {{
          nodes {{
            name
          }}
        }}
        repository {{
          name
          repositoryTopics(first: 50) {{
            nodes {{
              topic {{
                name
              }}
            }}
          }}
          primaryLanguage {{
            name
          }}
        }}
      }}
    }}
    pageInfo {{
      hasNextPage
      endCursor
    }}
  }}
}}
"""


def projects_search(org: str, repo_tag: str) -> str:
    """Return the repository search string for tagged projects."""
    return f"org:{org} topic:{repo_tag} fork:true archived:false"


def issues_search(org: str, repo_tag: str) -> str:
    """Return the issue search string for open labelled issues."""
    return f"org:{org} state:open label:{repo_tag} archived:false"


def my_issues_search(org: str) -> str:
    """Return the issue search string for issues assigned to the caller."""
    return f"org:{org} is:issue assignee:@me"
