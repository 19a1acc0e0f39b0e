"""GraphQL documents for the GitLab provider.

The repository tag is always passed as a variable: ``$tags`` filters
projects by topic and ``$labels`` filters issues by label.
"""

from __future__ import annotations

README_PATH = "README.md"
CONTRIBUTING_PATH = "CONTRIBUTING.md"

_PROJECT_FIELDS = """
  id
  name
  description
  webUrl
  visibility
  archived
  fullPath
  namespace {
    name
    fullPath
  }
  updatedAt
  languages {
    name
    share
  }
  topics
  starCount
  mergeRequests(state: merged, first: 100) {
    nodes {
      author {
        username
      }
      targetBranch
    }
    count
  }
"""

_ISSUE_FIELDS = """
  id
  iid
  webUrl
  author {
    username
    webUrl
    avatarUrl
  }
  title
  description
  createdAt
  updatedAt
  labels {
    nodes {
      title
    }
  }
  state
"""

_ISSUE_PROJECT_FIELDS = """
  name
  fullPath
  namespace {
    fullPath
  }
  languages {
    name
  }
"""

PROJECTS_QUERY = f"""
query GetProjects($tags: [String!]) {{
  projects(membership: true, topics: $tags, archived: EXCLUDE, first: 100) {{
    nodes {{
      {_PROJECT_FIELDS}
      issues(state: opened, first: 100) {{
        nodes {{
          state
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
query GetProject($fullPath: ID!) {{
  project(fullPath: $fullPath) {{
    {_PROJECT_FIELDS}
    issues(first: 100) {{
      nodes {{
        {_ISSUE_FIELDS}
      }}
    }}
    repository {{
      blobs(paths: ["{README_PATH}", "{CONTRIBUTING_PATH}"]) {{
        nodes {{
          rawBlob
          path
        }}
      }}
    }}
  }}
}}
"""

ISSUES_QUERY = f"""
query GetIssues($tags: [String!], $labels: [String]) {{
  innerSourceProjects: projects(
    membership: true
    topics: $tags
    archived: EXCLUDE
    first: 100
  ) {{
    nodes {{
      {_ISSUE_PROJECT_FIELDS}
      issues(state: opened, first: 100) {{
        nodes {{
          {_ISSUE_FIELDS}
        }}
      }}
    }}
  }}
  allProjects: projects(membership: true, archived: EXCLUDE, first: 100) {{
    nodes {{
      {_ISSUE_PROJECT_FIELDS}
      issues(labelName: $labels, state: opened, first: 100) {{
        nodes {{
          {_ISSUE_FIELDS}
        }}
      }}
    }}
  }}
}}
"""

CURRENT_USER_QUERY = """
query GetCurrentUser {
  currentUser {
    username
  }
}
"""

MY_ISSUES_QUERY = f"""
query GetMyIssues($assignees: [String!]) {{
  projects(membership: true, archived: EXCLUDE, first: 100) {{
    nodes {{
      {_ISSUE_PROJECT_FIELDS}
      issues(assigneeUsernames: $assignees, first: 100) {{
        nodes {{
          {_ISSUE_FIELDS}
        }}
      }}
    }}
  }}
}}
"""

CONTRIBUTIONS_QUERY = """
query GetContributions($tags: [String!]) {
  projects(membership: true, topics: $tags, archived: EXCLUDE, first: 100) {
    nodes {
      mergeRequests(first: 100) {
        nodes {
          author {
            name
            webUrl
            avatarUrl
          }
        }
      }
    }
  }
}
"""

STATS_QUERY = """
query GetStats($tags: [String!], $labels: [String]) {
  innerSourceProjects: projects(
    membership: true
    topics: $tags
    archived: EXCLUDE
    first: 100
  ) {
    count
    nodes {
      fullPath
      openIssuesCount
      issueStatusCounts {
        closed
      }
    }
  }
  allProjects: projects(membership: true, archived: EXCLUDE, first: 100) {
    nodes {
      fullPath
      openIssuesCount: issues(labelName: $labels, state: opened) {
        count
      }
      closedIssuesCount: issues(labelName: $labels, state: closed) {
        count
      }
    }
  }
}
"""


def first_line(query: str) -> str:
    """Return the operation line of a query document, for log context."""
    return next((line.strip() for line in query.splitlines() if line.strip()), "")
