"""
Tests for Catalog API Endpoints
"""
from unittest.mock import patch

import pytest

from speech_practice.config import settings


class TestListPhonemes:
    """Test GET /api/v1/phonemes endpoint."""

    @pytest.mark.asyncio
    async def test_all_phonemes_with_lock_state(self, async_client):
        response = await async_client.get("/api/v1/phonemes")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 66
        assert data["premium_unlocked"] is False

        by_symbol = {
            p["symbol"]: p for p in data["phonemes"] if p["language"] == "english"
        }
        assert by_symbol["/p/"]["is_unlocked"] is True
        assert by_symbol["/p/"]["has_curated_words"] is True
        assert by_symbol["/s/"]["is_unlocked"] is False
        assert by_symbol["/b/"]["has_curated_words"] is False

    @pytest.mark.asyncio
    async def test_filter_by_category_groups_subcategories(self, async_client):
        response = await async_client.get(
            "/api/v1/phonemes",
            params={"category": "consonants", "language": "english"}
        )

        assert response.status_code == 200
        data = response.json()
        assert all(p["category"] == "consonants" for p in data["phonemes"])
        assert all(p["language"] == "english" for p in data["phonemes"])

        names = [g["name"] for g in data["subcategories"]]
        assert names == sorted(names)
        assert sum(len(g["phonemes"]) for g in data["subcategories"]) == data["total"]

    @pytest.mark.asyncio
    async def test_invalid_category(self, async_client):
        response = await async_client.get("/api/v1/phonemes", params={"category": "clicks"})

        assert response.status_code == 422


class TestWordPool:
    """Test GET /api/v1/phonemes/words endpoint."""

    @pytest.mark.asyncio
    async def test_words_for_position_and_level(self, async_client):
        response = await async_client.get(
            "/api/v1/phonemes/words",
            params={"symbol": "/p/", "positions": ["initial"], "level": "isolation"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["positions"] == ["initial"]
        assert data["is_unlocked"] is True
        assert [w["word"] for w in data["words"]] == ["pat", "pen", "pie", "park", "push"]
        assert {w["display"] for w in data["words"]} == {"p"}

    @pytest.mark.asyncio
    async def test_all_positions_by_default(self, async_client):
        response = await async_client.get("/api/v1/phonemes/words", params={"symbol": "/tʃ/"})

        assert response.status_code == 200
        data = response.json()
        assert data["positions"] == ["initial", "medial", "final"]
        assert len(data["words"]) == 15
        assert data["is_unlocked"] is False

    @pytest.mark.asyncio
    async def test_language_defaults_to_configured_language(self, async_client):
        with patch.object(settings, "DEFAULT_LANGUAGE", "spanish"):
            response = await async_client.get("/api/v1/phonemes/words", params={"symbol": "/tʃ/"})

        assert response.status_code == 200
        assert response.json()["language"] == "spanish"

    @pytest.mark.asyncio
    async def test_unknown_phoneme(self, async_client):
        response = await async_client.get("/api/v1/phonemes/words", params={"symbol": "/q/"})

        assert response.status_code == 404


class TestLevelsAndHealth:
    """Test GET /api/v1/levels and the status endpoints."""

    @pytest.mark.asyncio
    async def test_levels_in_order(self, async_client):
        response = await async_client.get("/api/v1/levels")

        assert response.status_code == 200
        levels = [entry["level"] for entry in response.json()]
        assert levels == ["isolation", "syllable", "word", "phrase", "sentence"]

    @pytest.mark.asyncio
    async def test_root_and_health(self, async_client):
        root = await async_client.get("/")
        health = await async_client.get("/health")

        assert root.json()["status"] == "healthy"
        assert health.json()["services"]["catalog"] == "up"
        assert health.json()["services"]["active_sessions"] == 0
