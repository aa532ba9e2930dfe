"""
Club Settings Dependencies
"""

from fastapi import HTTPException, Request, status

from club_settings.store import SettingsStore


def get_settings_store(request: Request) -> SettingsStore:
    """앱 수명주기에서 생성된 설정 저장소"""
    store = getattr(request.app.state, "settings_store", None)
    if store is None or not store.ready:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="클럽 설정이 아직 초기화되지 않았습니다"
        )
    return store
