"""
Tests for Practice List API Endpoints
"""
import pytest


async def create_list(client, name="Homework"):
    response = await client.post("/api/v1/lists", json={"name": name})
    assert response.status_code == 201
    return response.json()


class TestLists:
    """Test the /api/v1/lists endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_get_list(self, async_client):
        created = await create_list(async_client)

        response = await async_client.get(f"/api/v1/lists/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Homework"
        assert data["configurations"] == []
        assert data["total_word_count"] == 0
        assert data["trend"]["trend"] == "neutral"
        assert data["last_accuracy_percentage"] is None

    @pytest.mark.asyncio
    async def test_create_list_requires_name(self, async_client):
        response = await async_client.post("/api/v1/lists", json={"name": ""})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_unknown_list(self, async_client):
        response = await async_client.get("/api/v1/lists/missing")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_overview(self, async_client):
        await create_list(async_client, "first")
        await create_list(async_client, "second")

        response = await async_client.get("/api/v1/lists")

        assert response.status_code == 200
        assert response.json()["total"] == 2

    @pytest.mark.asyncio
    async def test_delete_list(self, async_client):
        created = await create_list(async_client)

        response = await async_client.delete(f"/api/v1/lists/{created['id']}")
        assert response.status_code == 204

        response = await async_client.delete(f"/api/v1/lists/{created['id']}")
        assert response.status_code == 404


class TestConfigurations:
    """Test configuration and word endpoints."""

    @pytest.mark.asyncio
    async def test_add_phoneme_with_word_pool(self, async_client):
        created = await create_list(async_client)

        response = await async_client.post(
            f"/api/v1/lists/{created['id']}/configurations",
            json={"phoneme_symbol": "/p/", "positions": ["final", "initial"], "level": "phrase"}
        )

        assert response.status_code == 201
        configurations = response.json()
        assert [c["position"] for c in configurations] == ["initial", "final"]
        assert all(c["word_count"] == 5 for c in configurations)
        assert configurations[0]["summary"] == "/p/ - Initial (Phrase)"
        assert [w["word"] for w in configurations[0]["words"]] == ["park", "pat", "pen", "pie", "push"]

        detail = (await async_client.get(f"/api/v1/lists/{created['id']}")).json()
        assert detail["total_word_count"] == 10

    @pytest.mark.asyncio
    async def test_add_phoneme_with_explicit_words(self, async_client):
        created = await create_list(async_client)

        response = await async_client.post(
            f"/api/v1/lists/{created['id']}/configurations",
            json={
                "phoneme_symbol": "/s/",
                "positions": ["medial"],
                "words": [{"word": "pencil", "phoneme_index": 3}]
            }
        )

        assert response.status_code == 201
        configurations = response.json()
        assert len(configurations) == 1
        assert configurations[0]["words"][0]["word"] == "pencil"
        assert configurations[0]["words"][0]["position"] == "medial"

    @pytest.mark.asyncio
    async def test_words_outside_selected_positions_rejected(self, async_client):
        created = await create_list(async_client)

        response = await async_client.post(
            f"/api/v1/lists/{created['id']}/configurations",
            json={
                "phoneme_symbol": "/p/",
                "positions": ["initial", "medial"],
                "words": [
                    {"word": "pat", "phoneme_index": 0, "position": "initial"},
                    {"word": "top", "phoneme_index": 2, "position": "final"}
                ]
            }
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["positions_without_words"] == ["medial"]
        assert detail["word_positions_not_selected"] == ["final"]
        list_detail = (await async_client.get(f"/api/v1/lists/{created['id']}")).json()
        assert list_detail["configurations"] == []

    @pytest.mark.asyncio
    async def test_positions_derived_from_words(self, async_client):
        created = await create_list(async_client)

        response = await async_client.post(
            f"/api/v1/lists/{created['id']}/configurations",
            json={
                "phoneme_symbol": "/p/",
                "words": [
                    {"word": "top", "phoneme_index": 2, "position": "final"},
                    {"word": "pat", "phoneme_index": 0, "position": "initial"}
                ]
            }
        )

        assert response.status_code == 201
        assert [c["position"] for c in response.json()] == ["initial", "final"]

    @pytest.mark.asyncio
    async def test_add_unknown_phoneme(self, async_client):
        created = await create_list(async_client)

        response = await async_client.post(
            f"/api/v1/lists/{created['id']}/configurations",
            json={"phoneme_symbol": "/q/"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_add_to_unknown_list(self, async_client):
        response = await async_client.post(
            "/api/v1/lists/missing/configurations",
            json={"phoneme_symbol": "/p/"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_replace_words_and_remove_configuration(self, async_client):
        created = await create_list(async_client)
        configurations = (await async_client.post(
            f"/api/v1/lists/{created['id']}/configurations",
            json={"phoneme_symbol": "/k/"}
        )).json()
        config_id = configurations[0]["id"]

        response = await async_client.put(
            f"/api/v1/configurations/{config_id}/words",
            json={"words": [{"word": "kite", "phoneme_index": 0}, {"word": "cat", "phoneme_index": 0}]}
        )
        assert response.status_code == 200
        assert [w["word"] for w in response.json()["words"]] == ["cat", "kite"]

        response = await async_client.delete(f"/api/v1/configurations/{config_id}")
        assert response.status_code == 204

        response = await async_client.put(f"/api/v1/configurations/{config_id}/words", json={"words": []})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_session_history_of_new_list(self, async_client):
        created = await create_list(async_client)

        response = await async_client.get(f"/api/v1/lists/{created['id']}/sessions")

        assert response.status_code == 200
        assert response.json()["sessions"] == []
        assert response.json()["trend"]["icon"] == "equal.circle.fill"

    @pytest.mark.asyncio
    async def test_session_history_of_unknown_list(self, async_client):
        response = await async_client.get("/api/v1/lists/missing/sessions")

        assert response.status_code == 404
