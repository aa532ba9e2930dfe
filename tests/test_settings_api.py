"""
Club Settings API 테스트
"""
import pytest
from fastapi.testclient import TestClient

from app.server import create_app
from club_settings.errors import WriteFailure


class TestSettingsApi:
    """GET / PATCH /api/settings"""

    def test_get_settings(self, seeded_remote):
        with TestClient(create_app(seeded_remote)) as client:
            response = client.get("/api/settings")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Camden FC"
        assert data["logo"] == "/logo-2.jpeg"
        assert data["primaryColor"] == "#000000"
        assert data["financeStartingBalance"] == 0
        assert data["displayLogo"] == "/logo-2.jpeg"

    def test_get_defaults_without_row(self, remote):
        with TestClient(create_app(remote)) as client:
            data = client.get("/api/settings").json()
        assert data["name"] == "The CAM-DEN"
        assert data["primaryColor"] == "#ef4444"

    def test_not_ready_returns_503(self, remote):
        """startup 전에는 503"""
        client = TestClient(create_app(remote))
        response = client.get("/api/settings")
        assert response.status_code == 503

    def test_patch_is_optimistic_and_persisted(self, remote):
        with TestClient(create_app(remote)) as client:
            response = client.patch("/api/settings", json={"name": "Camden United", "primaryColor": "#1d4ed8"})
            assert response.status_code == 202
            body = response.json()
            assert body["pending_write"] is True
            assert body["settings"]["name"] == "Camden United"

            assert client.get("/api/settings").json()["primaryColor"] == "#1d4ed8"

        # shutdown 에서 대기 중 저장 완료
        row = remote.rows[("club_settings", 1)]
        assert row["name"] == "Camden United"
        assert row["primary_color"] == "#1d4ed8"
        assert remote.unsubscribed == [1]

    def test_patch_clears_logo(self, seeded_remote):
        with TestClient(create_app(seeded_remote)) as client:
            body = client.patch("/api/settings", json={"logo": None}).json()
        assert body["settings"]["logo"] is None
        assert body["settings"]["displayLogo"] == "/logo-2.jpeg"

    @pytest.mark.parametrize("payload", [
        {"name": ""},
        {"name": None},
        {"colour": "#fff"},
    ])
    def test_patch_invalid(self, remote, payload):
        with TestClient(create_app(remote)) as client:
            response = client.patch("/api/settings", json=payload)
            assert response.status_code == 422
            assert client.get("/api/settings").json()["name"] == "The CAM-DEN"

    def test_status_reports_write_failure(self, remote):
        remote.fail_upsert = WriteFailure("permission denied")
        with TestClient(create_app(remote)) as client:
            client.patch("/api/settings", json={"name": "X"})
            status = client.get("/api/settings/status").json()

        assert status["ready"] is True
        assert status["last_write_error"]["message"] == "permission denied"
        event_types = [e["event_type"] for e in status["recent_events"]]
        assert "settings.write_failed" in event_types

    def test_api_status(self, remote):
        with TestClient(create_app(remote)) as client:
            assert client.get("/api/status").json() == {"status": "ok", "settings_ready": True}
