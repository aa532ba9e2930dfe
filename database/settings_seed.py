"""
클럽 설정 시드 / 백업

- 초기 데이터 JSON 의 "club-settings" 항목을 singleton 행으로 upsert
- 현재 행을 JSON 백업 형식으로 내보내기
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from club_settings.config import club_settings_config
from club_settings.mapping import to_row
from club_settings.models import ClubSettings
from club_settings.store import RemoteSettingsStore


SEED_KEY = "club-settings"
EXPORT_SOURCE = "Supabase Backup"


def load_json_data(filepath: Union[str, Path]) -> Dict[str, Any]:
    """JSON 파일 로드"""
    logger.info(f"JSON 파일 로드 중: {filepath}")
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


async def seed_settings(
    remote: RemoteSettingsStore,
    data: Dict[str, Any],
    row_id: Optional[int] = None,
    table: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    초기 데이터의 클럽 설정을 원격 행에 upsert

    Args:
        remote: 원격 저장소
        data: 초기 데이터 (camelCase 키의 "club-settings" 항목 포함)

    Returns:
        저장된 레코드, 시드 항목이 없으면 None
    """
    seed = data.get(SEED_KEY)
    if not seed:
        logger.warning(f"'{SEED_KEY}' 항목 없음 - 설정 시드 건너뜀")
        return None

    settings = ClubSettings.model_validate(seed)
    record = to_row(settings, row_id if row_id is not None else club_settings_config.row_id)
    # 로고는 기본값 없이 원본 그대로 (없음/null -> null)
    record["logo"] = seed.get("logo")
    saved = await remote.upsert(table or club_settings_config.table, record)
    logger.info(f"✅ 클럽 설정 시드 완료: {settings.name}")
    return saved


async def export_settings(
    remote: RemoteSettingsStore,
    row_id: Optional[int] = None,
    table: Optional[str] = None,
) -> Dict[str, Any]:
    """현재 설정 행을 백업 형식으로 반환"""
    table = table or club_settings_config.table
    row = await remote.select(table, row_id if row_id is not None else club_settings_config.row_id)
    return {
        table: [row] if row else [],
        "_exportTimestamp": datetime.now().isoformat(),
        "_source": EXPORT_SOURCE,
    }
