"""
Tests for Session API Endpoints
Running a practice session through the REST surface.
"""
from unittest.mock import patch

import pytest

from speech_practice.services.practice_store import PersistenceError


async def list_with_phoneme(client, symbol="/p/"):
    """A list holding one initial-position configuration of five pool words."""
    practice_list = (await client.post("/api/v1/lists", json={"name": "Drill"})).json()
    await client.post(
        f"/api/v1/lists/{practice_list['id']}/configurations",
        json={"phoneme_symbol": symbol, "positions": ["initial"], "level": "isolation"}
    )
    return practice_list


async def start(client, list_id, **extra):
    return await client.post("/api/v1/sessions", json={"list_id": list_id, "seed": 1, **extra})


class TestStartSession:
    """Test POST /api/v1/sessions endpoint."""

    @pytest.mark.asyncio
    async def test_start_session(self, async_client):
        practice_list = await list_with_phoneme(async_client)

        response = await start(async_client, practice_list["id"])

        assert response.status_code == 201
        data = response.json()
        assert data["state"] == "in_progress"
        assert data["total"] == 5
        assert data["position"] == 1
        assert data["responses"] == [None] * 5
        assert data["current_item"]["level"] == "isolation"
        assert data["current_item"]["display"] == "p"

    @pytest.mark.asyncio
    async def test_cap_applied(self, async_client):
        practice_list = await list_with_phoneme(async_client)

        response = await start(async_client, practice_list["id"], max_words_per_configuration=2)

        assert response.json()["total"] == 2
        assert response.json()["max_words_per_configuration"] == 2

    @pytest.mark.asyncio
    async def test_locked_phoneme_only(self, async_client):
        practice_list = await list_with_phoneme(async_client, "/s/")

        response = await start(async_client, practice_list["id"])

        assert response.status_code == 400
        assert "No words available" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_unknown_list(self, async_client):
        response = await start(async_client, "missing")

        assert response.status_code == 404


class TestRunSession:
    """Test stepping through a session."""

    @pytest.mark.asyncio
    async def test_record_advance_finish_complete(self, async_client, store):
        practice_list = await list_with_phoneme(async_client)
        session_id = (await start(async_client, practice_list["id"])).json()["session_id"]

        response = await async_client.post(
            f"/api/v1/sessions/{session_id}/responses", json={"correct": True}
        )
        assert response.json()["responses"][0] is True

        response = await async_client.post(f"/api/v1/sessions/{session_id}/advance")
        assert response.json()["current_index"] == 1

        await async_client.post(f"/api/v1/sessions/{session_id}/responses", json={"correct": False})
        response = await async_client.post(f"/api/v1/sessions/{session_id}/finish")
        assert response.json()["state"] == "completed"
        assert response.json()["current_item"] is None

        response = await async_client.post(f"/api/v1/sessions/{session_id}/complete")

        assert response.status_code == 200
        results = response.json()
        assert results["saved"] is True
        assert (results["correct"], results["incorrect"], results["skipped"]) == (1, 1, 3)
        assert results["live_accuracy_percentage"] == 50
        assert results["stored_percentage"] == 20
        assert results["configuration_breakdowns"][0]["total"] == 5

        history = (await async_client.get(f"/api/v1/lists/{practice_list['id']}/sessions")).json()
        assert len(history["sessions"]) == 1
        assert history["sessions"][0]["id"] == results["record_id"]
        assert history["sessions"][0]["accuracy_percentage"] == 20

    @pytest.mark.asyncio
    async def test_advance_through_all_items(self, async_client):
        practice_list = await list_with_phoneme(async_client)
        session_id = (await start(async_client, practice_list["id"], max_words_per_configuration=2)).json()["session_id"]

        await async_client.post(f"/api/v1/sessions/{session_id}/advance")
        response = await async_client.post(f"/api/v1/sessions/{session_id}/advance")

        assert response.json()["state"] == "completed"
        assert response.json()["responses"] == [None, None]

    @pytest.mark.asyncio
    async def test_complete_before_finishing(self, async_client):
        practice_list = await list_with_phoneme(async_client)
        session_id = (await start(async_client, practice_list["id"])).json()["session_id"]

        response = await async_client.post(f"/api/v1/sessions/{session_id}/complete")

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_complete_twice_saves_once(self, async_client, store):
        practice_list = await list_with_phoneme(async_client)
        session_id = (await start(async_client, practice_list["id"])).json()["session_id"]
        await async_client.post(f"/api/v1/sessions/{session_id}/finish")

        first = (await async_client.post(f"/api/v1/sessions/{session_id}/complete")).json()
        second = (await async_client.post(f"/api/v1/sessions/{session_id}/complete")).json()

        assert first["record_id"] == second["record_id"]
        assert len(store.get_sessions(practice_list["id"])) == 1

    @pytest.mark.asyncio
    async def test_unknown_session(self, async_client):
        response = await async_client.get("/api/v1/sessions/missing")

        assert response.status_code == 404


class TestSaveFailure:
    """Test the results flow when the store cannot save."""

    @pytest.mark.asyncio
    async def test_failed_save_returns_results_and_retry(self, async_client, store):
        practice_list = await list_with_phoneme(async_client)
        session_id = (await start(async_client, practice_list["id"])).json()["session_id"]
        await async_client.post(f"/api/v1/sessions/{session_id}/responses", json={"correct": True})
        await async_client.post(f"/api/v1/sessions/{session_id}/finish")

        with patch.object(store, "save_session", side_effect=PersistenceError("database offline")):
            response = await async_client.post(f"/api/v1/sessions/{session_id}/complete")

        assert response.status_code == 503
        detail = response.json()["detail"]
        assert "database offline" in detail["message"]
        assert detail["results"]["correct"] == 1
        assert detail["results"]["saved"] is False

        results = (await async_client.get(f"/api/v1/sessions/{session_id}/results")).json()
        assert results["save_error"] == "database offline"

        response = await async_client.post(f"/api/v1/sessions/{session_id}/complete")
        assert response.status_code == 200
        assert response.json()["saved"] is True
        assert response.json()["save_error"] is None

    @pytest.mark.asyncio
    async def test_results_not_available_while_running(self, async_client):
        practice_list = await list_with_phoneme(async_client)
        session_id = (await start(async_client, practice_list["id"])).json()["session_id"]

        response = await async_client.get(f"/api/v1/sessions/{session_id}/results")

        assert response.status_code == 409
