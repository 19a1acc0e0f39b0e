"""Unit tests for synergy.api.app application factory.

Usage
-----
Run with pytest::

    pytest tests/unit/test_api_app.py

"""

from __future__ import annotations

import falcon
import falcon.asgi
import falcon.testing
import pytest

from synergy.api.app import AppDependencies, create_app
from tests.unit.api_test_helpers import (
    GITLAB_CONFIG,
    FakeCoreApi,
    FakeInsightsApi,
    StaticSource,
)


def _client(api: FakeCoreApi) -> falcon.testing.TestClient:
    deps = AppDependencies(api_source=StaticSource(api), provider_config=GITLAB_CONFIG)
    return falcon.testing.TestClient(create_app(deps))


@pytest.fixture
def health_client() -> falcon.testing.TestClient:
    """Build a test client for health-only mode."""
    return falcon.testing.TestClient(create_app())


class TestCreateAppHealthOnly:
    """Tests for create_app() without a provider."""

    def test_returns_falcon_app(self) -> None:
        """create_app() returns a Falcon ASGI App."""
        assert isinstance(create_app(), falcon.asgi.App), "expected Falcon ASGI App"

    def test_ready_reports_no_provider(
        self, health_client: falcon.testing.TestClient
    ) -> None:
        """Health-only readiness names no provider."""
        result = health_client.simulate_get("/ready")
        assert result.status == falcon.HTTP_200, "expected HTTP 200 from /ready"
        assert result.json == {"status": "ready", "provider": None}

    @pytest.mark.parametrize("path", ["/config", "/projects", "/issues", "/stats"])
    def test_portal_routes_not_registered(
        self, health_client: falcon.testing.TestClient, path: str
    ) -> None:
        """Without a provider, portal endpoints return 404."""
        result = health_client.simulate_get(path)
        assert result.status == falcon.HTTP_404, f"{path} should not be routed"


class TestPortalRoutes:
    """Tests for the portal endpoints."""

    def test_health_still_available(self) -> None:
        """Full app still responds to /health."""
        result = _client(FakeCoreApi()).simulate_get("/health")
        assert result.json == {"status": "ok"}

    def test_ready_names_provider(self) -> None:
        """Readiness reports the configured provider type."""
        result = _client(FakeCoreApi()).simulate_get("/ready")
        assert result.json == {"status": "ready", "provider": "gitlab"}

    def test_config_exposes_ui_settings(self) -> None:
        """GET /config returns provider and hideIssues."""
        result = _client(FakeCoreApi()).simulate_get("/config")
        assert result.json == {"provider": "gitlab", "hideIssues": True}

    def test_projects_are_camel_case_json(self) -> None:
        """Projects encode with camelCase field names."""
        result = _client(FakeCoreApi()).simulate_get("/projects")

        assert result.status == falcon.HTTP_200
        [project] = result.json
        assert project["owner"] == "platform/tools"
        assert project["isPrivate"] is True
        assert project["updatedAt"] == "2024-03-01T10:00:00Z"

    def test_project_route_accepts_nested_owners(self) -> None:
        """Everything before the last segment is the owner."""
        api = FakeCoreApi()

        result = _client(api).simulate_get("/projects/platform/tools/cli")

        assert result.status == falcon.HTTP_200
        assert api.project_requests == [("cli", "platform/tools")]
        assert result.json["readme"] == "# Readme"
        assert result.json["pinnedIssues"] == []

    def test_project_route_requires_owner(self) -> None:
        """A single path segment names no project."""
        result = _client(FakeCoreApi()).simulate_get("/projects/cli")
        assert result.status == falcon.HTTP_404

    def test_issue_routes(self) -> None:
        """Issues and assigned issues are listed."""
        client = _client(FakeCoreApi())

        assert [i["id"] for i in client.simulate_get("/issues").json] == ["i1"]
        assert client.simulate_get("/my-issues").json == []

    def test_insights_available_for_gitlab(self) -> None:
        """Providers with insights serve contributions and stats."""
        client = _client(FakeInsightsApi())

        contributions = client.simulate_get("/contributions").json
        stats = client.simulate_get("/stats").json

        assert contributions == [
            {"login": "Ada", "url": None, "avatarUrl": None, "contributionsCount": 2}
        ]
        assert stats["standaloneIssuesCount"] == 1

    @pytest.mark.parametrize("path", ["/contributions", "/stats"])
    def test_insights_unsupported_without_extension(self, path: str) -> None:
        """Core-only providers answer insight requests with 404."""
        result = _client(FakeCoreApi()).simulate_get(path)

        assert result.status == falcon.HTTP_404
        assert "does not support" in result.json["description"]
