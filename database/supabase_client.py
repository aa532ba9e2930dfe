"""
Supabase 데이터베이스 클라이언트 (클럽 설정 원격 저장소)
"""
from typing import Any, Callable, Dict, Optional

from supabase import acreate_client, AsyncClient
from loguru import logger

from club_settings.config import supabase_config, club_settings_config
from club_settings.errors import FetchFailure, WriteFailure, SubscriptionFailure


# 싱글톤 클라이언트
_supabase_client: Optional[AsyncClient] = None


async def get_supabase_client() -> AsyncClient:
    """
    Supabase 비동기 클라이언트 인스턴스 반환 (싱글톤)
    Realtime 구독은 AsyncClient 에서만 지원
    """
    global _supabase_client
    if _supabase_client is None:
        if not supabase_config.supabase_url or not supabase_config.supabase_key:
            raise ValueError("SUPABASE_URL과 SUPABASE_KEY 환경변수를 설정해주세요")
        _supabase_client = await acreate_client(
            supabase_config.supabase_url,
            supabase_config.supabase_key
        )
    return _supabase_client


class SupabaseRemoteStore:
    """club_settings 행 조회/upsert/변경 알림 구독"""

    def __init__(
        self,
        client: Optional[AsyncClient] = None,
        schema: Optional[str] = None,
        channel_name: Optional[str] = None,
    ):
        self.client = client
        self.schema = schema or club_settings_config.schema_name
        self.channel_name = channel_name or club_settings_config.channel_name

    async def _get_client(self) -> AsyncClient:
        if self.client is None:
            self.client = await get_supabase_client()
        return self.client

    # ==================== 조회 / 저장 ====================

    async def select(self, table: str, row_id: int) -> Optional[Dict[str, Any]]:
        """id로 단일 행 조회 (없으면 None)"""
        try:
            client = await self._get_client()
            result = await client.table(table).select("*").eq(
                "id", row_id
            ).maybe_single().execute()
        except Exception as e:
            raise FetchFailure(f"{table} 조회 오류: {e}", table=table, row_id=row_id) from e

        if result is None or not result.data:
            return None
        return result.data

    async def upsert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """id 기준 upsert (멱등)"""
        try:
            client = await self._get_client()
            result = await client.table(table).upsert(
                record,
                on_conflict="id"
            ).execute()
        except Exception as e:
            raise WriteFailure(
                f"{table} 저장 오류: {e}", table=table, row_id=record.get("id")
            ) from e

        if result.data:
            return result.data[0]
        return record

    # ==================== Realtime ====================

    async def subscribe(
        self,
        table: str,
        row_id: int,
        callback: Callable[[Dict[str, Any]], None],
        event: str = "*",
    ):
        """단일 행 변경 알림 구독 -> 채널 반환"""

        def on_status(status, error=None):
            if error:
                logger.warning(f"Realtime 채널 상태 {status}: {error}")
            else:
                logger.debug(f"Realtime 채널 상태: {status}")

        try:
            client = await self._get_client()
            channel = client.channel(self.channel_name)
            channel.on_postgres_changes(
                event,
                callback=callback,
                table=table,
                schema=self.schema,
                filter=f"id=eq.{row_id}",
            )
            await channel.subscribe(on_status)
        except Exception as e:
            raise SubscriptionFailure(
                f"{table} 구독 오류: {e}", table=table, row_id=row_id
            ) from e
        return channel

    async def unsubscribe(self, subscription) -> None:
        """채널 제거"""
        client = await self._get_client()
        await client.remove_channel(subscription)
