"""
CLI 명령 테스트
"""
import json

import pytest

from club_settings.errors import WriteFailure
from club_settings.models import ClubSettingsUpdate
from main import SettingsCLI, main


@pytest.mark.asyncio
class TestSettingsCLI:
    """SettingsCLI"""

    async def test_show(self, seeded_remote):
        settings = await SettingsCLI(seeded_remote).show()
        assert settings["name"] == "Camden FC"
        assert seeded_remote.unsubscribed == [1]

    async def test_set(self, seeded_remote):
        ok = await SettingsCLI(seeded_remote).set(ClubSettingsUpdate(name="Renamed"))
        assert ok is True
        assert seeded_remote.rows[("club_settings", 1)]["name"] == "Renamed"

    async def test_set_write_failure(self, remote):
        remote.fail_upsert = WriteFailure("offline")
        assert await SettingsCLI(remote).set(ClubSettingsUpdate(name="X")) is False

    async def test_seed_and_export(self, remote, initial_data, tmp_path):
        seed_file = tmp_path / "initial-data.json"
        seed_file.write_text(json.dumps(initial_data), encoding="utf-8")
        output = tmp_path / "backup.json"

        cli = SettingsCLI(remote)
        assert await cli.seed(str(seed_file)) is True
        assert await cli.export(str(output)) is True

        backup = json.loads(output.read_text(encoding="utf-8"))
        assert backup["club_settings"][0]["name"] == "Camden United"

    async def test_seed_missing_file(self, remote, tmp_path):
        assert await SettingsCLI(remote).seed(str(tmp_path / "missing.json")) is False


@pytest.mark.asyncio
class TestArguments:
    """명령행 인자"""

    async def test_balance_flag_not_accepted(self, monkeypatch):
        """재무 시작 잔액은 프로세스 로컬 값이라 CLI 에서 설정 불가"""
        monkeypatch.setattr("sys.argv", ["main.py", "--mode", "set", "--balance", "100"])
        with pytest.raises(SystemExit) as exc_info:
            await main()
        assert exc_info.value.code == 2
