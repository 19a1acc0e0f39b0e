"""Provider abstraction shared by the GitHub and GitLab implementations.

Public API
----------
SynergyApi
    Protocol every provider implements.
SynergyInsightsApi
    Optional extension with contributor and statistics queries.
create_synergy_api
    Factory selecting the provider named in the configuration.
"""

from __future__ import annotations

from .errors import ResponseShapeError
from .factory import create_synergy_api
from .models import (
    Contributors,
    IssueAuthor,
    Project,
    ProjectContributor,
    ProjectDetails,
    ProjectIssue,
    ProjectStats,
)
from .protocol import SynergyApi, SynergyInsightsApi

__all__ = [
    "Contributors",
    "IssueAuthor",
    "Project",
    "ProjectContributor",
    "ProjectDetails",
    "ProjectIssue",
    "ProjectStats",
    "ResponseShapeError",
    "SynergyApi",
    "SynergyInsightsApi",
    "create_synergy_api",
]
