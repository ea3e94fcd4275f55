"""Unit tests for import routes."""

import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from trackboard.api.app import register_exception_handlers
from trackboard.api.dependencies import get_state_store
from trackboard.api.routes import boards, imports
from trackboard.state_store import StateStore

NESTED = json.dumps(
    {
        "boards": [
            {
                "id": "b1",
                "name": "Checkout",
                "key": "CHK",
                "sprints": [{"id": "s1", "name": "Sprint 1"}],
                "tickets": [
                    {"id": "e1", "title": "Payments", "type": "Epic"},
                    {"id": "t1", "title": "Card", "parent_id": "e1", "sprint_id": "s1"},
                ],
            }
        ]
    }
)


@pytest.fixture
def app(store: StateStore):
    """Create a test FastAPI app with the in-memory store injected."""
    app = FastAPI()

    def override_get_state_store():
        yield store

    app.dependency_overrides[get_state_store] = override_get_state_store
    register_exception_handlers(app)
    app.include_router(imports.router, prefix="/api/v1")
    app.include_router(boards.router, prefix="/api/v1")
    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.mark.unit
class TestPreviewImport:
    """Tests for POST /import/preview."""

    def test_preview_counts(self, client: TestClient) -> None:
        """200 with entity counts."""
        response = client.post("/api/v1/import/preview", json={"raw_text": NESTED})

        assert response.status_code == 200
        data = response.json()
        assert data["data"] == {"boards": 1, "sprints": 1, "tickets": 2}
        assert data["error"] is None

    def test_preview_writes_nothing(self, client: TestClient, store: StateStore) -> None:
        """Previewing leaves the store untouched."""
        client.post("/api/v1/import/preview", json={"raw_text": NESTED})

        assert store.list_boards() == []

    def test_preview_invalid_json(self, client: TestClient) -> None:
        """400 with an Invalid JSON message."""
        response = client.post("/api/v1/import/preview", json={"raw_text": "{not valid"})

        assert response.status_code == 400
        data = response.json()
        assert data["data"] is None
        assert data["error"].startswith("Invalid JSON: ")

    def test_preview_missing_raw_text(self, client: TestClient) -> None:
        """422 when the request body has no raw_text."""
        response = client.post("/api/v1/import/preview", json={})

        assert response.status_code == 422


@pytest.mark.unit
class TestCommitImport:
    """Tests for POST /import."""

    def test_commit_returns_linked_batch(self, client: TestClient) -> None:
        """201 with reconciled entities."""
        response = client.post("/api/v1/import", json={"raw_text": NESTED})

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["stats"] == {"boards": 1, "sprints": 1, "tickets": 2}
        board = data["boards"][0]
        epic, story = data["tickets"]
        assert board["key"] == "CHK"
        assert board["type"] == "kanban"
        assert data["sprints"][0]["board_id"] == board["id"]
        assert story["parent_id"] == epic["id"]
        assert story["sprint_id"] == data["sprints"][0]["id"]
        assert epic["type"] == "Epic"
        assert story["priority"] == "Medium"

    def test_commit_stores_batch(self, client: TestClient, store: StateStore) -> None:
        """Committed entities are visible through the board endpoints."""
        client.post("/api/v1/import", json={"raw_text": NESTED})

        response = client.get("/api/v1/boards")
        boards = response.json()["data"]
        assert [b["name"] for b in boards] == ["Checkout"]

        tickets = client.get(f"/api/v1/boards/{boards[0]['id']}/tickets").json()["data"]
        assert len(tickets) == 2

    def test_commit_into_active_board(self, client: TestClient, store: StateStore) -> None:
        """Loose tickets go to the board given in the request."""
        board = store.create_board(name="Web", key="WEB")

        response = client.post(
            "/api/v1/import",
            json={"raw_text": '{"tickets": [{"title": "A"}]}', "board_id": board.id},
        )

        assert response.status_code == 201
        assert response.json()["data"]["tickets"][0]["board_id"] == board.id
        assert len(store.list_tickets(board_id=board.id)) == 1

    def test_commit_invalid_json(self, client: TestClient, store: StateStore) -> None:
        """400 and nothing is stored."""
        response = client.post("/api/v1/import", json={"raw_text": "{not valid"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid JSON: ")
        assert store.list_boards() == []

    def test_commit_boardless_ticket(self, client: TestClient) -> None:
        """422 when a ticket has no board to land on."""
        response = client.post("/api/v1/import", json={"raw_text": '{"tickets": [{}]}'})

        assert response.status_code == 422
        assert "no board" in response.json()["error"]

    def test_commit_unknown_board(self, client: TestClient) -> None:
        """404 when the active board does not exist."""
        response = client.post(
            "/api/v1/import",
            json={"raw_text": '{"tickets": [{}]}', "board_id": "gone"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Board not found"

    def test_commit_drops_oversized_story_points(
        self, client: TestClient, store: StateStore
    ) -> None:
        """Story points too large to store are dropped, not a server error."""
        raw = json.dumps({"boards": [{"id": "b1", "tickets": [{"story_points": 10**20}]}]})

        response = client.post("/api/v1/import", json={"raw_text": raw})

        assert response.status_code == 201
        ticket = response.json()["data"]["tickets"][0]
        assert ticket["story_points"] is None
        assert store.get_ticket(ticket["id"]).story_points is None

    def test_commit_oversized_integer_literal(self, client: TestClient, store: StateStore) -> None:
        """An integer literal the decoder refuses is reported as invalid JSON."""
        raw = '{"tickets": [{"story_points": ' + "9" * 5000 + "}]}"

        response = client.post("/api/v1/import", json={"raw_text": raw})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid JSON: ")
        assert store.list_boards() == []
