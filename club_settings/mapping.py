"""
로컬 설정 <-> 원격 행 필드 매핑

로컬 필드명(snake_case, API에서는 camelCase)과 club_settings 테이블 컬럼 간
명시적 양방향 매핑. 값은 그대로 전달 (변환 없음).
"""
from typing import Dict, Any, Optional

from loguru import logger
from pydantic import ValidationError

from .models import (
    ClubSettings,
    DEFAULT_SETTINGS,
    DEFAULT_CLUB_NAME,
    DEFAULT_LOGO,
    DEFAULT_PRIMARY_COLOR,
)


# 로컬 필드 -> 원격 컬럼
REMOTE_FIELD_MAP: Dict[str, str] = {
    "name": "name",
    "logo": "logo",
    "primary_color": "primary_color",
}

# 원격 컬럼 -> 로컬 필드
LOCAL_FIELD_MAP: Dict[str, str] = {column: field for field, column in REMOTE_FIELD_MAP.items()}

# 원격 값이 없을 때 사용하는 기본값 (초기 조회용)
_FALLBACKS: Dict[str, Any] = {
    "name": DEFAULT_CLUB_NAME,
    "logo": DEFAULT_LOGO,
    "primary_color": DEFAULT_PRIMARY_COLOR,
}

# None 으로 덮어쓸 수 없는 필드
_REQUIRED_FIELDS = ("name", "primary_color")


def to_row(settings: ClubSettings, row_id: int = 1) -> Dict[str, Any]:
    """설정 -> upsert 레코드 (원격 스키마에 없는 필드 제외)"""
    row: Dict[str, Any] = {"id": row_id}
    for field, column in REMOTE_FIELD_MAP.items():
        row[column] = getattr(settings, field)
    return row


def fields_from_row(row: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """원격 행에 존재하는 매핑 컬럼만 로컬 필드로 변환"""
    if not row:
        return {}
    return {
        field: row[column]
        for column, field in LOCAL_FIELD_MAP.items()
        if column in row
    }


def settings_from_row(
    row: Optional[Dict[str, Any]],
    base: ClubSettings = DEFAULT_SETTINGS
) -> ClubSettings:
    """
    초기 조회 결과 -> 완전한 설정 값

    비어 있거나 없는 컬럼은 기본값 사용. 원격에 없는 필드(finance_starting_balance)는
    base 값 유지.
    """
    fields = fields_from_row(row)
    resolved = {}
    for field, fallback in _FALLBACKS.items():
        value = fields.get(field)
        resolved[field] = value if value else fallback
    return ClubSettings.model_validate({**base.model_dump(), **resolved})


def apply_row(settings: ClubSettings, row: Optional[Dict[str, Any]]) -> ClubSettings:
    """
    변경 알림 페이로드를 캐시에 반영

    매핑된 필드 중 페이로드에 있는 것만 덮어씀. name/primary_color 의 빈 값은 무시.
    병합 결과가 유효하지 않으면 페이로드 전체를 버리고 현재 값 유지.
    """
    changes = {}
    for field, value in fields_from_row(row).items():
        if not value and field in _REQUIRED_FIELDS:
            continue
        changes[field] = value
    if not changes:
        return settings

    try:
        return ClubSettings.model_validate({**settings.model_dump(), **changes})
    except ValidationError as e:
        logger.warning(f"유효하지 않은 변경 알림 무시: {changes} ({e.error_count()}개 오류)")
        return settings


def changed_fields(before: ClubSettings, after: ClubSettings) -> list[str]:
    """두 설정 간 값이 달라진 필드 목록"""
    return [
        field for field in ClubSettings.model_fields
        if getattr(before, field) != getattr(after, field)
    ]
