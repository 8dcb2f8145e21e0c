"""
Test suite for the FastAPI application.
Tests the recommend, history and herb catalog endpoints and their status codes.
"""

import json
import pytest
import sys
from pathlib import Path
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api import app, get_analyzer, get_bookmark_store, get_history_store
from bookmark_store import InMemoryBookmarkStore
from history_store import InMemoryHistoryStore

AUTH = {"X-User-Id": "user-123"}


class ExplodingAnalyzer:
    def analyze(self, symptoms_text):
        raise RuntimeError("corrupted table: secret internals")


class TestRecommendEndpoint:
    """
    Test cases for the /api/ai/recommend endpoint.
    """

    def setup_method(self):
        """
        Set up test fixtures before each test method.
        """
        self.store = InMemoryHistoryStore()
        app.dependency_overrides[get_history_store] = lambda: self.store
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_recommend_text_input(self):
        response = self.client.post(
            "/api/ai/recommend",
            json={"symptoms": "I have a terrible headache and can't sleep"},
            headers=AUTH,
        )
        assert response.status_code == 200, response.text

        data = response.json()
        assert set(data) == {"analysis", "recommendations", "disclaimer", "lifestyle"}
        assert data["analysis"]["category"] == "mental"
        assert data["analysis"]["severity"] == "moderate"
        assert "headache" in data["analysis"]["keywords"]
        assert 1 <= len(data["recommendations"]) <= 3

        for herb in data["recommendations"]:
            for field in ["herbId", "herbName", "scientificName", "reason", "dosage", "benefits"]:
                assert field in herb, f"Missing recommendation field: {field}"
            assert isinstance(herb["benefits"], list)

    def test_recommend_records_history(self):
        response = self.client.post("/api/ai/recommend", json={"symptoms": "stress"}, headers=AUTH)
        assert response.status_code == 200

        history = self.store.list_for_user("user-123")
        assert len(history) == 1
        assert history[0].symptoms == "stress"
        assert history[0].recommended_herbs == [2, 1]
        assert json.loads(history[0].recommendation) == response.json()

    def test_requires_user(self):
        response = self.client.post("/api/ai/recommend", json={"symptoms": "stress"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    @pytest.mark.parametrize("body", [
        {},
        {"symptoms": None},
        {"symptoms": ""},
        {"symptoms": 42},
        {"symptoms": ["stress"]},
        {"symptoms": {"text": "stress"}},
    ])
    def test_rejects_missing_or_non_string(self, body):
        response = self.client.post("/api/ai/recommend", json=body, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["detail"] == "Symptoms text is required"
        assert self.store.list_for_user("user-123") == []

    def test_no_word_characters_still_recommends(self):
        response = self.client.post("/api/ai/recommend", json={"symptoms": "?!"}, headers=AUTH)
        assert response.status_code == 200
        data = response.json()
        assert data["analysis"]["category"] == "general"
        assert [h["herbId"] for h in data["recommendations"]] == [3, 5]

    def test_internal_failure_is_generic_500(self):
        app.dependency_overrides[get_analyzer] = lambda: ExplodingAnalyzer()

        response = self.client.post("/api/ai/recommend", json={"symptoms": "stress"}, headers=AUTH)
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to generate recommendation"
        assert "secret" not in response.text


class TestHistoryEndpoint:
    """
    Test cases for the /api/user/history endpoint.
    """

    def setup_method(self):
        self.store = InMemoryHistoryStore()
        app.dependency_overrides[get_history_store] = lambda: self.store
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_history_newest_first(self):
        for text in ["stress", "cough"]:
            self.client.post("/api/ai/recommend", json={"symptoms": text}, headers=AUTH)
        self.client.post("/api/ai/recommend", json={"symptoms": "headache"}, headers={"X-User-Id": "other"})

        response = self.client.get("/api/user/history", headers=AUTH)
        assert response.status_code == 200

        entries = response.json()
        assert [e["symptoms"] for e in entries] == ["cough", "stress"]
        for field in ["id", "userId", "symptoms", "recommendation", "recommendedHerbs", "createdAt"]:
            assert field in entries[0], f"Missing history field: {field}"

    def test_history_requires_user(self):
        assert self.client.get("/api/user/history").status_code == 401


class TestBookmarkEndpoints:
    """
    Test cases for the /api/user/bookmarks endpoints.
    """

    def setup_method(self):
        self.store = InMemoryBookmarkStore()
        app.dependency_overrides[get_bookmark_store] = lambda: self.store
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_add_bookmark(self):
        response = self.client.post("/api/user/bookmarks", json={"herbId": 3}, headers=AUTH)
        assert response.status_code == 201, response.text

        data = response.json()
        assert data["herbId"] == 3
        assert data["userId"] == "user-123"
        for field in ["id", "createdAt"]:
            assert field in data, f"Missing bookmark field: {field}"
        assert [b.herb_id for b in self.store.list_for_user("user-123")] == [3]

    def test_add_unknown_herb(self):
        response = self.client.post("/api/user/bookmarks", json={"herbId": 99}, headers=AUTH)
        assert response.status_code == 404
        assert response.json()["detail"] == "Herb not found"
        assert self.store.list_for_user("user-123") == []

    def test_add_invalid_body(self):
        response = self.client.post("/api/user/bookmarks", json={"herbId": "tulsi"}, headers=AUTH)
        assert response.status_code == 422

    def test_list_bookmarks_newest_first(self):
        for herb_id in [1, 5]:
            self.client.post("/api/user/bookmarks", json={"herbId": herb_id}, headers=AUTH)
        self.client.post("/api/user/bookmarks", json={"herbId": 2}, headers={"X-User-Id": "other"})

        response = self.client.get("/api/user/bookmarks", headers=AUTH)
        assert response.status_code == 200
        assert [b["herbId"] for b in response.json()] == [5, 1]

    def test_remove_bookmark(self):
        self.client.post("/api/user/bookmarks", json={"herbId": 1}, headers=AUTH)

        response = self.client.delete("/api/user/bookmarks/1", headers=AUTH)
        assert response.status_code == 204
        assert response.content == b""
        assert self.client.get("/api/user/bookmarks", headers=AUTH).json() == []

    def test_remove_missing_bookmark(self):
        assert self.client.delete("/api/user/bookmarks/4", headers=AUTH).status_code == 204

    def test_bookmarks_require_user(self):
        assert self.client.get("/api/user/bookmarks").status_code == 401
        assert self.client.post("/api/user/bookmarks", json={"herbId": 3}).status_code == 401
        assert self.client.delete("/api/user/bookmarks/3").status_code == 401


class TestHerbEndpoints:
    """
    Test cases for the herb catalog endpoints.
    """

    def setup_method(self):
        self.client = TestClient(app)

    def test_list_herbs(self):
        response = self.client.get("/api/herbs")
        assert response.status_code == 200
        names = [h["plantName"] for h in response.json()]
        assert names == ["Ashwagandha", "Brahmi", "Ginger", "Neem", "Tulsi", "Turmeric"]

    def test_search_herbs(self):
        response = self.client.get("/api/herbs", params={"search": "turmerik"})
        assert [h["plantName"] for h in response.json()] == ["Turmeric"]

        response = self.client.get("/api/herbs", params={"category": "Adaptogen"})
        assert [h["plantName"] for h in response.json()] == ["Ashwagandha", "Tulsi"]

    def test_get_herb(self):
        response = self.client.get("/api/herbs/3")
        assert response.status_code == 200
        assert response.json()["scientificName"] == "Curcuma longa"

    def test_get_missing_herb(self):
        response = self.client.get("/api/herbs/99")
        assert response.status_code == 404
        assert response.json()["detail"] == "Herb not found"

    def test_get_herb_invalid_id(self):
        assert self.client.get("/api/herbs/abc").status_code == 422


class TestServiceEndpoints:
    """
    Test cases for root and health endpoints.
    """

    def test_root_endpoint(self):
        with TestClient(app) as client:
            response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Herb Recommendation API"
        assert "recommend" in data["endpoints"]
        assert "bookmarks" in data["endpoints"]

    def test_health_endpoint(self):
        with TestClient(app) as client:
            response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "artifacts_loaded": True}


if __name__ == "__main__":
    """
    Run tests directly with: python -m pytest tests/test_api_recommend.py -v
    """
    pytest.main([__file__, "-v"])
