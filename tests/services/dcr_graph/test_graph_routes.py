"""
DCR Graph Routes Tests
======================

Tests for the graph service API endpoints.

Version: 0.1.0
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import structlog
from fastapi import status
from httpx import AsyncClient

from shared.config import RepositorySettings
from shared.exceptions import RepositoryError
from services.dcr_graph.main import app
from services.dcr_graph.routes.graph import get_repository_client


XML_HEADERS = {"Content-Type": "application/xml"}


# =============================================================================
# Health
# =============================================================================


class TestHealth:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, dcr_graph_client: AsyncClient) -> None:
        response = await dcr_graph_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "dcr-graph"

    @pytest.mark.asyncio
    async def test_root(self, dcr_graph_client: AsyncClient) -> None:
        response = await dcr_graph_client.get("/")

        assert response.json()["service"] == "DCR Graph Service"


# =============================================================================
# Parsing and Views
# =============================================================================


class TestGraphRoutes:
    """Tests for graph view endpoints."""

    @pytest.mark.asyncio
    async def test_parse_summary(
        self, dcr_graph_client: AsyncClient, scenario_xml: str
    ) -> None:
        """Test the summary counts events and relations per kind."""
        response = await dcr_graph_client.post(
            "/api/v1/graph/parse", content=scenario_xml, headers=XML_HEADERS
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["event_count"] == 4
        assert data["relation_count"] == 3
        assert data["relations_by_kind"] == {
            "conditions": 1,
            "responses": 1,
            "includes": 1,
            "excludes": 0,
        }
        assert sorted(data["event_ids"]) == ["A", "B", "C", "D"]

    @pytest.mark.asyncio
    async def test_adjacency(
        self, dcr_graph_client: AsyncClient, scenario_xml: str
    ) -> None:
        """Test the adjacency matrix is indexed by the returned ids."""
        response = await dcr_graph_client.post(
            "/api/v1/graph/adjacency", content=scenario_xml, headers=XML_HEADERS
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        idx = {event_id: i for i, event_id in enumerate(data["event_ids"])}
        matrix = data["matrix"]

        assert matrix[idx["A"]][idx["B"]] == 1
        assert matrix[idx["B"]][idx["C"]] == 1
        assert matrix[idx["B"]][idx["D"]] == 1
        assert sum(map(sum, matrix)) == 3
        assert data["simulation_id"] is None

    @pytest.mark.asyncio
    async def test_all_projections(
        self, dcr_graph_client: AsyncClient, scenario_xml: str
    ) -> None:
        response = await dcr_graph_client.post(
            "/api/v1/graph/projections", content=scenario_xml, headers=XML_HEADERS
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"A": [], "B": ["A"], "C": ["B"], "D": ["B"]}

    @pytest.mark.asyncio
    async def test_single_projection(
        self, dcr_graph_client: AsyncClient, constraints_xml
    ) -> None:
        document = constraints_xml(conditions=[("R", "E")], includes=[("I", "R")])

        response = await dcr_graph_client.post(
            "/api/v1/graph/projections/E", content=document, headers=XML_HEADERS
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"event_id": "E", "projection": ["R", "I"]}

    @pytest.mark.asyncio
    async def test_event_view(
        self, dcr_graph_client: AsyncClient, scenario_xml: str
    ) -> None:
        response = await dcr_graph_client.post(
            "/api/v1/graph/events/B", content=scenario_xml, headers=XML_HEADERS
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "id": "B",
            "conditions": ["A"],
            "responses": [],
            "includes": [],
            "excludes": [],
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/v1/graph/events/Z", "/api/v1/graph/projections/Z"])
    async def test_unknown_event(
        self, dcr_graph_client: AsyncClient, scenario_xml: str, path: str
    ) -> None:
        response = await dcr_graph_client.post(path, content=scenario_xml, headers=XML_HEADERS)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_malformed_document(self, dcr_graph_client: AsyncClient) -> None:
        """Test decode failures map to 400."""
        response = await dcr_graph_client.post(
            "/api/v1/graph/adjacency", content="<constraints>", headers=XML_HEADERS
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["success"] is False
        assert data["status_code"] == 400

    @pytest.mark.asyncio
    async def test_payload_too_large(
        self, dcr_graph_client: AsyncClient, scenario_xml: str
    ) -> None:
        with patch("services.dcr_graph.routes.graph.settings") as mock_settings:
            mock_settings.graph.max_payload_bytes = 10

            response = await dcr_graph_client.post(
                "/api/v1/graph/parse", content=scenario_xml, headers=XML_HEADERS
            )

        assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


# =============================================================================
# Remote Repository
# =============================================================================


class TestRemoteAdjacency:
    """Tests for the remote repository endpoint."""

    @pytest.fixture
    def repository_client(self):
        client = MagicMock()
        client.fetch_relations = AsyncMock()

        async def override():
            yield client

        app.dependency_overrides[get_repository_client] = override
        yield client
        app.dependency_overrides.pop(get_repository_client, None)

    @pytest.mark.asyncio
    async def test_remote_adjacency(
        self,
        dcr_graph_client: AsyncClient,
        repository_client: MagicMock,
        scenario_xml: str,
    ) -> None:
        repository_client.fetch_relations.return_value = ("sim-42", scenario_xml)

        response = await dcr_graph_client.get("/api/v1/graph/remote/1234/adjacency")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["simulation_id"] == "sim-42"
        assert sorted(data["event_ids"]) == ["A", "B", "C", "D"]
        repository_client.fetch_relations.assert_awaited_once_with("1234")

    @pytest.mark.asyncio
    async def test_remote_failure(
        self,
        dcr_graph_client: AsyncClient,
        repository_client: MagicMock,
    ) -> None:
        repository_client.fetch_relations.side_effect = RepositoryError(
            "Repository returned 401", status_code=401
        )

        response = await dcr_graph_client.get("/api/v1/graph/remote/1234/adjacency")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    @pytest.mark.asyncio
    async def test_remote_invalid_document(
        self,
        dcr_graph_client: AsyncClient,
        repository_client: MagicMock,
    ) -> None:
        """Test an undecodable repository body is an upstream failure."""
        repository_client.fetch_relations.return_value = (
            "sim-42",
            "<html>login page</html>",
        )

        response = await dcr_graph_client.get("/api/v1/graph/remote/1234/adjacency")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["status_code"] == 502

    @pytest.mark.asyncio
    async def test_graph_id_bound_to_log_context(
        self,
        dcr_graph_client: AsyncClient,
        repository_client: MagicMock,
        scenario_xml: str,
    ) -> None:
        """Test the graph id is in the log context while fetching."""
        seen: dict = {}

        async def fetch(graph_id: str) -> tuple[str, str]:
            seen.update(structlog.contextvars.get_contextvars())
            return "sim-42", scenario_xml

        repository_client.fetch_relations.side_effect = fetch

        await dcr_graph_client.get("/api/v1/graph/remote/1234/adjacency")

        assert seen["graph_id"] == "1234"
        assert "graph_id" not in structlog.contextvars.get_contextvars()


class TestRepositoryClientDependency:
    """Tests for the per-request repository client."""

    @pytest.mark.asyncio
    async def test_uses_environment_settings(self) -> None:
        config = RepositorySettings(username="alice", password="pw")

        with patch("services.dcr_graph.routes.graph.settings") as mock_settings:
            mock_settings.repository = config
            clients = get_repository_client()
            client = await anext(clients)

        assert client.config is config
        await clients.aclose()

    @pytest.mark.asyncio
    async def test_loads_credentials_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"username": "bob", "password": "pw"}))

        with patch("services.dcr_graph.routes.graph.settings") as mock_settings:
            mock_settings.repository = RepositorySettings(credentials_file=str(path))
            clients = get_repository_client()
            client = await anext(clients)

        assert client.config.username == "bob"
        assert client.config.password.get_secret_value() == "pw"
        await clients.aclose()
