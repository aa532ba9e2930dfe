"""
설정 시드 / 백업 테스트
"""
import json

import pytest

from database.settings_seed import export_settings, load_json_data, seed_settings


@pytest.mark.asyncio
class TestSeedSettings:
    """seed_settings()"""

    async def test_seed_upserts_mapped_row(self, remote, initial_data):
        saved = await seed_settings(remote, initial_data)

        assert saved == {"id": 1, "name": "Camden United", "logo": "/logo-2.jpeg", "primary_color": "#1d4ed8"}
        assert remote.upserts == [("club_settings", saved)]

    async def test_missing_seed_entry(self, remote):
        assert await seed_settings(remote, {"players": []}) is None
        assert remote.upserts == []

    async def test_seed_defaults_missing_fields(self, remote):
        """색상은 기본값, 로고는 null 그대로"""
        saved = await seed_settings(remote, {"club-settings": {"name": "Only Name"}})
        assert saved["logo"] is None
        assert saved["primary_color"] == "#ef4444"

    async def test_seed_null_logo_written_as_null(self, remote):
        seed = {"club-settings": {"name": "Camden FC", "logo": None, "primaryColor": "#000000"}}
        saved = await seed_settings(remote, seed)

        assert saved == {"id": 1, "name": "Camden FC", "logo": None, "primary_color": "#000000"}
        assert remote.rows[("club_settings", 1)]["logo"] is None

    async def test_seed_rejects_empty_name(self, remote):
        with pytest.raises(Exception):
            await seed_settings(remote, {"club-settings": {"name": ""}})
        assert remote.upserts == []


@pytest.mark.asyncio
class TestExportSettings:
    """export_settings()"""

    async def test_export_existing_row(self, seeded_remote, camden_row):
        data = await export_settings(seeded_remote)
        assert data["club_settings"] == [camden_row]
        assert data["_source"] == "Supabase Backup"
        assert "_exportTimestamp" in data

    async def test_export_without_row(self, remote):
        data = await export_settings(remote)
        assert data["club_settings"] == []


def test_load_json_data(tmp_path, initial_data):
    path = tmp_path / "initial-data.json"
    path.write_text(json.dumps(initial_data), encoding="utf-8")
    assert load_json_data(path)["club-settings"]["name"] == "Camden United"
