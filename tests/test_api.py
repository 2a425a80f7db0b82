"""Tests for the flashcards HTTP routes."""

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from main import create_app

PREFIX = f"/{settings.app.version}/flashcards"


@pytest.fixture
def client(session):
    with TestClient(create_app(session=session)) as c:
        yield c


class TestFlashcardsApi:

    def test_root(self, client):
        assert client.get("/").json()["status"] == "ok"

    def test_generate_then_browse(self, client, text_service, five_cards):
        text_service.replies = [five_cards]
        res = client.post(f"{PREFIX}/generate", json={"subject": "Math"})
        assert res.status_code == 201
        assert res.json()["subject"] == "Math"
        assert len(res.json()["flashcards"]) == 5

        state = client.post(f"{PREFIX}/next").json()
        assert state["current_index"] == 1
        state = client.post(f"{PREFIX}/flip").json()
        assert state["revealed"] is True
        state = client.post(f"{PREFIX}/goto", json={"index": 4}).json()
        assert state["current_index"] == 4
        assert state["revealed"] is False
        state = client.post(f"{PREFIX}/next").json()
        assert state["current_index"] == 4
        assert state["progress"] == "Flashcard 5 of 5"

    def test_generation_failure_reports_kind(self, client, text_service):
        text_service.replies = ["no cards"]
        res = client.post(f"{PREFIX}/generate", json={"subject": "Math"})
        assert res.status_code == 502
        assert res.json()["kind"] == "parse"
        assert client.get(f"{PREFIX}/session").json()["last_error"]
        assert client.get(f"{PREFIX}/sets").json() == []

    def test_blank_subject(self, client):
        res = client.post(f"{PREFIX}/generate", json={"subject": " "})
        assert res.status_code == 422

    def test_add_more(self, client, text_service, five_cards):
        text_service.replies = [five_cards, "Q: Extra? A: Yes"]
        client.post(f"{PREFIX}/generate", json={"subject": "Math"})
        res = client.post(f"{PREFIX}/more")
        assert res.status_code == 200
        assert res.json()["total_flashcards"] == 6
        assert client.get(f"{PREFIX}/session").json()["current_index"] == 5

    def test_add_more_without_set(self, client):
        assert client.post(f"{PREFIX}/more").status_code == 404

    def test_stored_sets_lifecycle(self, client, store):
        from app.modules.flashcards.models.flashcards import Flashcard

        store.add("Biology/Cells", [Flashcard(question="q", answer="a")])
        assert client.get(f"{PREFIX}/sets").json() == [
            {"subject": "Biology/Cells", "total_flashcards": 1}
        ]

        state = client.post(f"{PREFIX}/sets/select", json={"subject": "Biology/Cells"}).json()
        assert state["active_subject"] == "Biology/Cells"

        assert client.delete(f"{PREFIX}/sets/Biology/Cells").status_code == 204
        assert client.get(f"{PREFIX}/sets").json() == []
        assert client.get(f"{PREFIX}/session").json()["active_subject"] is None

    def test_select_unknown(self, client):
        res = client.post(f"{PREFIX}/sets/select", json={"subject": "Nope"})
        assert res.status_code == 404

    def test_back(self, client, text_service, five_cards):
        text_service.replies = [five_cards]
        client.post(f"{PREFIX}/generate", json={"subject": "Math"})
        state = client.post(f"{PREFIX}/back").json()
        assert state["active_subject"] is None
        assert len(client.get(f"{PREFIX}/sets").json()) == 1


class TestRouteContract:

    def test_generate_returns_created_set(self, client, text_service, five_cards):
        text_service.replies = [five_cards]
        res = client.post(f"{PREFIX}/generate", json={"subject": "Math"})
        assert res.status_code == 201
        body = res.json()
        assert set(body) == {"subject", "flashcards"}
        assert body["flashcards"][0] == {"question": "Question 1?", "answer": "Answer 1."}

    def test_more_returns_added_batch(self, client, text_service, five_cards):
        text_service.replies = [five_cards, "Q: Extra? A: Yes"]
        client.post(f"{PREFIX}/generate", json={"subject": "Math"})
        body = client.post(f"{PREFIX}/more").json()
        assert body == {
            "added": [{"question": "Extra?", "answer": "Yes"}],
            "total_flashcards": 6,
        }

    def test_select_returns_snapshot(self, client, store):
        from app.modules.flashcards.models.flashcards import Flashcard

        store.add("Math", [Flashcard(question="q", answer="a")])
        body = client.post(f"{PREFIX}/sets/select", json={"subject": "Math"}).json()
        assert body["active_subject"] == "Math"
        assert body["current_card"] == {"question": "q", "answer": "a"}
        assert body["progress"] == "Flashcard 1 of 1"

    def test_delete_has_no_body(self, client, store):
        from app.modules.flashcards.models.flashcards import Flashcard

        store.add("Math", [Flashcard(question="q", answer="a")])
        res = client.delete(f"{PREFIX}/sets/Math")
        assert res.status_code == 204
        assert res.content == b""
        assert client.delete(f"{PREFIX}/sets/Math").status_code == 204
