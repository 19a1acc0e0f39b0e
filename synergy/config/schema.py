"""Typed schema for the ``synergy`` configuration section."""

from __future__ import annotations

import typing as typ

import msgspec


class GitHubProviderSection(msgspec.Struct, kw_only=True, rename="camel"):
    """``synergy.provider.github`` settings.

    Attributes
    ----------
    org : str
        Organisation whose inner-source projects and issues are listed.
    host : str
        GitHub host, for example ``github.com``.
    api_base_url : str
        API base URL, for example ``https://api.github.com``.
    token : str
        Access token.
    hide_issues : bool
        Hide the issues views when issues are not used.

    """

    org: str
    host: str
    api_base_url: str
    token: str
    hide_issues: bool = False


class GitLabProviderSection(msgspec.Struct, kw_only=True, rename="camel"):
    """``synergy.provider.gitlab`` settings.

    Attributes
    ----------
    api_base_url : str
        API base URL, for example ``https://gitlab.com/api``.
    token : str
        Access token with ``read_api`` scope.
    hide_issues : bool
        Hide the issues views when issues are not used.

    """

    api_base_url: str
    token: str
    hide_issues: bool = False


class ProviderSection(msgspec.Struct, kw_only=True):
    """``synergy.provider``; ``type`` selects the active section."""

    type: typ.Literal["github", "gitlab"] = "github"
    github: GitHubProviderSection | None = None
    gitlab: GitLabProviderSection | None = None


class SynergySection(msgspec.Struct, kw_only=True, rename="camel"):
    """The ``synergy`` section."""

    provider: ProviderSection
    repo_tag: str


class SynergyConfigDocument(msgspec.Struct, kw_only=True):
    """Top-level configuration document; unrelated sections are ignored."""

    synergy: SynergySection
