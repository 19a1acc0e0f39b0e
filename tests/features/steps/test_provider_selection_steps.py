"""Behavioural coverage for choosing a provider from configuration."""

from __future__ import annotations

import typing as typ

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from synergy.config import (
    ConfigTree,
    DataProviderConfig,
    SynergyConfigError,
    read_config,
)
from synergy.providers import SynergyApi, SynergyInsightsApi, create_synergy_api
from tests.helpers import GRAPHQL_BASE_URL, GraphQLStub, run_async

_GITHUB_SECTION = {
    "org": "acme",
    "host": "github.com",
    "apiBaseUrl": GRAPHQL_BASE_URL,
    "token": "ghp-token",
}
_GITLAB_SECTION = {"apiBaseUrl": GRAPHQL_BASE_URL, "token": "glpat-token"}


class SelectionContext(typ.TypedDict, total=False):
    """Shared mutable scenario state."""

    tree: ConfigTree
    config: DataProviderConfig
    api: SynergyApi
    error: SynergyConfigError


@scenario(
    "../provider_selection.feature",
    "GitLab configuration selects the GitLab provider",
)
def test_gitlab_configuration_selects_gitlab() -> None:
    """Wrap the pytest-bdd scenario for GitLab selection."""


@scenario("../provider_selection.feature", "Missing provider type selects GitHub")
def test_missing_type_selects_github() -> None:
    """Wrap the pytest-bdd scenario for the GitHub default."""


@scenario(
    "../provider_selection.feature",
    "Selecting a provider without its section fails",
)
def test_missing_section_fails() -> None:
    """Wrap the pytest-bdd scenario for a missing provider section."""


@pytest.fixture
def selection_context() -> SelectionContext:
    """Provide empty scenario state."""
    return {}


def _tree(provider: dict[str, typ.Any]) -> ConfigTree:
    return ConfigTree({"synergy": {"repoTag": "inner-source", "provider": provider}})


@given(parsers.parse('a Synergy configuration with provider type "{provider}"'))
def given_typed_configuration(
    selection_context: SelectionContext, provider: str
) -> None:
    """Configure both providers and select one by type."""
    selection_context["tree"] = _tree(
        {"type": provider, "github": _GITHUB_SECTION, "gitlab": _GITLAB_SECTION}
    )


@given("a Synergy configuration without a provider type")
def given_untyped_configuration(selection_context: SelectionContext) -> None:
    """Configure only the GitHub section and omit the type."""
    selection_context["tree"] = _tree({"github": _GITHUB_SECTION})


@given(
    parsers.parse(
        'a Synergy configuration with provider type "{provider}" '
        "but only a github section"
    )
)
def given_configuration_missing_section(
    selection_context: SelectionContext, provider: str
) -> None:
    """Select a provider whose section is absent."""
    selection_context["tree"] = _tree({"type": provider, "github": _GITHUB_SECTION})


@when("the provider is created from the configuration")
def when_provider_created(selection_context: SelectionContext) -> None:
    """Read the configuration and build the provider."""
    config = read_config(selection_context["tree"])
    selection_context["config"] = config
    selection_context["api"] = run_async(
        lambda: create_synergy_api(config, http_client=GraphQLStub().client)
    )


@when("the configuration is read")
def when_configuration_read(selection_context: SelectionContext) -> None:
    """Read the configuration, capturing any configuration error."""
    with pytest.raises(SynergyConfigError) as excinfo:
        read_config(selection_context["tree"])
    selection_context["error"] = excinfo.value


@then("the provider offers contributor statistics")
def then_offers_insights(selection_context: SelectionContext) -> None:
    """Assert the provider implements the insights extension."""
    assert isinstance(selection_context["api"], SynergyInsightsApi)


@then("the provider does not offer contributor statistics")
def then_lacks_insights(selection_context: SelectionContext) -> None:
    """Assert the provider implements only the core protocol."""
    api = selection_context["api"]
    assert isinstance(api, SynergyApi)
    assert not isinstance(api, SynergyInsightsApi)


@then("the provider configuration has no organisation")
def then_no_organisation(selection_context: SelectionContext) -> None:
    """Assert GitLab settings omit org and host."""
    config = selection_context["config"]
    assert (config.org, config.host) == (None, None)


@then(parsers.parse('the provider organisation is "{org}"'))
def then_organisation(selection_context: SelectionContext, org: str) -> None:
    """Assert the GitHub organisation was read."""
    assert selection_context["config"].org == org


@then(parsers.parse('a configuration error mentions "{text}"'))
def then_error_mentions(selection_context: SelectionContext, text: str) -> None:
    """Assert the configuration error names the missing section."""
    assert text in str(selection_context["error"])
