"""
Club Settings Router

- 현재 설정 조회
- 설정 변경 (낙관적 반영 후 비동기 저장)
- 동기화 상태 (저장 실패 노출)
"""

from fastapi import APIRouter, Depends, Query, status

from club_settings.models import ClubSettingsUpdate
from club_settings.store import SettingsStore
from .dependencies import get_settings_store

router = APIRouter(prefix="/settings", tags=["Club Settings"])


@router.get("")
async def get_settings(store: SettingsStore = Depends(get_settings_store)):
    """현재 클럽 설정 (camelCase)"""
    return store.settings.to_public()


@router.patch("", status_code=status.HTTP_202_ACCEPTED)
async def update_settings(
    update: ClubSettingsUpdate,
    store: SettingsStore = Depends(get_settings_store)
):
    """
    클럽 설정 변경

    캐시에 즉시 반영한 값을 반환하고 원격 저장은 백그라운드에서 진행합니다.
    저장 실패는 /settings/status 에서 확인합니다.
    """
    store.update_settings(update)
    return {
        "settings": store.settings.to_public(),
        "pending_write": True,
    }


@router.get("/status")
async def get_sync_status(
    limit: int = Query(10, ge=1, le=100),
    store: SettingsStore = Depends(get_settings_store)
):
    """동기화 상태 및 최근 이벤트"""
    result = store.status()
    result["recent_events"] = [
        event.to_dict() for event in store.publisher.get_recent_events(limit)
    ]
    return result
