"""
Tests for history and clear-data routes.
"""


class TestDataRoutes:
    """Test /api/history and /api/data."""

    def test_history_starts_empty(self, sync_client):
        response = sync_client.get("/api/history")

        assert response.status_code == 200
        assert response.json() == {"activity_ids": []}

    def test_clear_data_erases_history_and_log(self, sync_client, app_store):
        app_store.set("test-completed", ["mind-a"])
        app_store.set("test-history", [{"id": "x", "activity_id": "mind-a", "timestamp": 1, "mood": "happy"}])

        response = sync_client.delete("/api/data")

        assert response.status_code == 204
        assert sync_client.get("/api/history").json() == {"activity_ids": []}
        assert app_store.get("test-history") is None

    def test_completed_session_is_logged(self, sync_client, app_store):
        sid = sync_client.post("/api/sessions", json={"mood": "sad"}).json()["session_id"]
        sync_client.post(f"/api/sessions/{sid}/confirm", json={"category": "move", "minutes": 5})
        sync_client.post(f"/api/sessions/{sid}/complete")

        log = app_store.get("test-history")

        assert len(log) == 1
        assert log[0]["activity_id"] == "move-a"
        assert log[0]["mood"] == "sad"
