"""Integration tests for the import flow through the full application."""

import json
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from trackboard.api.app import create_app


@pytest.fixture
def client():
    """Run the real app (lifespan included) against a temporary database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        app = create_app(db_path=str(Path(tmpdir) / "trackboard.db"))
        with TestClient(app) as client:
            yield client


DOCUMENT = json.dumps(
    {
        "boards": [
            {
                "id": "b1",
                "name": "Platform",
                "key": "PLT",
                "type": "scrum",
                "sprints": [{"id": "s1", "name": "Sprint 1", "status": "active"}],
                "tickets": [
                    {"id": "t1", "title": "Setup Repo", "status": "Done", "sprint_id": "s1"},
                    {"id": "t2", "title": "Core Feature", "parent_id": "epic"},
                ],
            }
        ],
        "tickets": [{"id": "epic", "title": "Platform epic", "type": "Epic", "board_id": "b1"}],
    }
)


@pytest.mark.integration
class TestImportFlow:
    """Preview, commit, then browse what was imported."""

    def test_preview_then_commit(self, client: TestClient) -> None:
        """Preview stats match what the commit stores."""
        preview = client.post("/api/v1/import/preview", json={"raw_text": DOCUMENT})
        assert preview.status_code == 200
        assert preview.json()["data"] == {"boards": 1, "sprints": 1, "tickets": 3}
        assert client.get("/api/v1/boards").json()["data"] == []

        commit = client.post("/api/v1/import", json={"raw_text": DOCUMENT})
        assert commit.status_code == 201
        assert commit.json()["data"]["stats"] == preview.json()["data"]

        boards = client.get("/api/v1/boards").json()["data"]
        assert len(boards) == 1
        board_id = boards[0]["id"]

        sprints = client.get(f"/api/v1/boards/{board_id}/sprints").json()["data"]
        tickets = client.get(f"/api/v1/boards/{board_id}/tickets").json()["data"]
        by_title = {t["title"]: t for t in tickets}

        assert len(tickets) == 3
        assert by_title["Setup Repo"]["sprint_id"] == sprints[0]["id"]
        assert by_title["Core Feature"]["parent_id"] == by_title["Platform epic"]["id"]
        assert by_title["Platform epic"]["board_id"] == board_id

    def test_commit_twice_creates_two_copies(self, client: TestClient) -> None:
        """Each import gets fresh IDs, so re-importing duplicates the data."""
        first = client.post("/api/v1/import", json={"raw_text": DOCUMENT}).json()["data"]
        second = client.post("/api/v1/import", json={"raw_text": DOCUMENT}).json()["data"]

        assert first["boards"][0]["id"] != second["boards"][0]["id"]
        assert len(client.get("/api/v1/boards").json()["data"]) == 2

    def test_invalid_json_changes_nothing(self, client: TestClient) -> None:
        """A parse failure is reported and nothing is imported."""
        response = client.post("/api/v1/import", json={"raw_text": '{"boards": ['})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid JSON: ")
        assert client.get("/api/v1/boards").json()["data"] == []
