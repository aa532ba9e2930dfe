"""
Club Settings API 서버

클럽 설정 저장소를 앱 수명주기에 묶어 제공:
- startup: 원격 설정 로드 + 변경 알림 구독
- shutdown: 대기 중 저장 완료 후 구독 해제
"""

from typing import Optional

from fastapi import FastAPI
from loguru import logger

from club_settings.config import setup_logging
from club_settings.store import RemoteSettingsStore, SettingsStore
from app.settings import settings_router


def create_app(remote: Optional[RemoteSettingsStore] = None) -> FastAPI:
    """FastAPI 앱 생성 (remote 미지정 시 Supabase 사용)"""
    app = FastAPI(
        title="Club Settings",
        description="클럽 설정 동기화 API",
        version="1.0.0"
    )
    app.include_router(settings_router, prefix="/api")
    app.state.settings_store = None

    @app.on_event("startup")
    async def startup_event():
        """서버 시작 시 설정 로드"""
        nonlocal remote
        if remote is None:
            from database.supabase_client import SupabaseRemoteStore
            remote = SupabaseRemoteStore()

        store = SettingsStore(remote)
        await store.initialize()
        app.state.settings_store = store
        logger.info("✅ 서버 시작 완료 - 클럽 설정 동기화 중")

    @app.on_event("shutdown")
    async def shutdown_event():
        """서버 종료 시 정리"""
        store: Optional[SettingsStore] = app.state.settings_store
        if store is not None:
            await store.flush()
            await store.teardown()
        logger.info("서버 종료됨")

    @app.get("/api/status")
    async def api_status():
        """서버 상태"""
        store: Optional[SettingsStore] = app.state.settings_store
        return {
            "status": "ok",
            "settings_ready": bool(store and store.ready),
        }

    return app


if __name__ == "__main__":
    import uvicorn

    setup_logging("server")
    uvicorn.run(create_app(), host="0.0.0.0", port=7171)
