"""
클럽 설정 동기화 저장소

단일 club_settings 행(id=1)을 프로세스 내 캐시로 유지:
- 초기화 시 원격 행 1회 조회 (실패/없음 -> 기본값)
- 로컬 변경: 캐시에 즉시 병합 후 upsert (비동기, 롤백 없음)
- 원격 변경: Realtime 알림으로 캐시 갱신
"""

import asyncio
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Set, Union

from loguru import logger

from .config import club_settings_config
from .errors import FetchFailure, WriteFailure, SubscriptionFailure, SettingsNotReadyError
from .events import (
    ChangeKind,
    RemoteChangeEvent,
    SettingsEvent,
    SettingsEventPublisher,
    SettingsEventType,
)
from .mapping import apply_row, changed_fields, settings_from_row, to_row
from .models import ClubSettings, ClubSettingsUpdate, DEFAULT_SETTINGS


class RemoteSettingsStore(Protocol):
    """원격 행 저장소 인터페이스 (Supabase 또는 테스트용 가짜 구현)"""

    async def select(self, table: str, row_id: int) -> Optional[Dict[str, Any]]: ...

    async def upsert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]: ...

    async def subscribe(
        self,
        table: str,
        row_id: int,
        callback: Callable[[Dict[str, Any]], None],
        event: str = "*",
    ) -> Any: ...

    async def unsubscribe(self, subscription: Any) -> None: ...


class SettingsStore:
    """클럽 설정 캐시 + 원격 동기화"""

    def __init__(
        self,
        remote: RemoteSettingsStore,
        *,
        table: Optional[str] = None,
        row_id: Optional[int] = None,
        publisher: Optional[SettingsEventPublisher] = None,
    ):
        self.remote = remote
        self.table = table or club_settings_config.table
        self.row_id = row_id if row_id is not None else club_settings_config.row_id
        self.publisher = publisher or SettingsEventPublisher()

        self._cache: ClubSettings = DEFAULT_SETTINGS
        self.ready = False
        self._subscription: Any = None
        self._closed = False
        self._init_lock = asyncio.Lock()
        self._pending_writes: Set[asyncio.Task] = set()
        self.last_write_error: Optional[WriteFailure] = None

    @property
    def settings(self) -> ClubSettings:
        """현재 설정 (초기화 전 접근 불가)"""
        if not self.ready:
            raise SettingsNotReadyError()
        return self._cache

    # ==================== 초기화 / 정리 ====================

    async def initialize(self) -> ClubSettings:
        """원격 설정 조회 후 변경 알림 구독. 예외를 전파하지 않음."""
        # 동시 호출 시 한 번만 조회/구독
        async with self._init_lock:
            if self.ready:
                return self._cache
            await self._load()
            await self._open_subscription()

        self.publisher.publish(SettingsEvent(
            event_type=SettingsEventType.LOADED,
            settings=self._cache,
        ))
        return self._cache

    async def _load(self) -> None:
        """싱글톤 행 조회 (실패 시 기본값 유지)"""
        try:
            row = await self.remote.select(self.table, self.row_id)
            if not row:
                raise FetchFailure("설정 행 없음", table=self.table, row_id=self.row_id)
            self._cache = settings_from_row(row)
            logger.info(f"✅ 클럽 설정 로드 완료: {self._cache.name}")
        except Exception as e:
            error = e if isinstance(e, FetchFailure) else FetchFailure(
                f"설정 조회 오류: {e}", table=self.table, row_id=self.row_id
            )
            logger.error(f"Error loading settings: {error.message} - 기본값 사용")
            self.publisher.publish(SettingsEvent(
                event_type=SettingsEventType.FETCH_FAILED,
                settings=self._cache,
                error=error.to_dict(),
            ))
        finally:
            self.ready = True

    async def _open_subscription(self) -> None:
        """싱글톤 행 변경 알림 구독"""
        if self._closed:
            return
        try:
            subscription = await self.remote.subscribe(
                self.table, self.row_id, self.handle_change, "*"
            )
        except Exception as e:
            error = e if isinstance(e, SubscriptionFailure) else SubscriptionFailure(
                str(e), table=self.table, row_id=self.row_id
            )
            logger.warning(f"변경 알림 구독 실패 (원격 변경 수신 불가): {error.message}")
            self._subscription = None
            return

        # 구독 대기 중 teardown 된 경우 채널을 바로 해제
        if self._closed:
            try:
                await self.remote.unsubscribe(subscription)
                logger.info(f"❌ {self.table} 구독 완료 전 해제 요청 - 채널 제거")
            except Exception as e:
                logger.warning(f"구독 해제 실패: {e}")
            return

        self._subscription = subscription
        logger.info(f"🎧 {self.table} id={self.row_id} 변경 알림 구독 시작")

    async def teardown(self) -> None:
        """구독 해제. initialize 전/중복 호출 모두 안전."""
        self._closed = True
        subscription, self._subscription = self._subscription, None
        if subscription is None:
            return
        try:
            await self.remote.unsubscribe(subscription)
            logger.info(f"❌ {self.table} 변경 알림 구독 해제")
        except Exception as e:
            logger.warning(f"구독 해제 실패: {e}")

    async def __aenter__(self) -> "SettingsStore":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.flush()
        await self.teardown()

    # ==================== 로컬 변경 ====================

    def update_settings(
        self,
        update: Union[ClubSettingsUpdate, Mapping[str, Any]],
    ) -> asyncio.Task:
        """
        낙관적 업데이트

        캐시에 즉시 병합하고 병합된 전체 레코드를 upsert 하는 태스크를 예약한다.
        실행 중인 이벤트 루프 안에서 호출해야 함.

        Args:
            update: ClubSettingsUpdate 또는 부분 필드 dict (camelCase/snake_case)

        Returns:
            upsert 태스크 (await 하지 않아도 됨)
        """
        # 루프 없이 호출되면 캐시 변경 전에 실패
        loop = asyncio.get_running_loop()
        if not isinstance(update, ClubSettingsUpdate):
            update = ClubSettingsUpdate.model_validate(dict(update))

        before = self._cache
        self._cache = before.merged(update)
        fields = changed_fields(before, self._cache)

        self.publisher.publish(SettingsEvent(
            event_type=SettingsEventType.UPDATED,
            settings=self._cache,
            changed_fields=fields,
        ))

        # 병합 시점 스냅샷을 기록 (이후 알림과 무관)
        record = to_row(self._cache, self.row_id)
        task = loop.create_task(self._write(record))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)
        return task

    async def _write(self, record: Dict[str, Any]) -> bool:
        """upsert 실행. 실패 시 로그만 남기고 캐시는 유지."""
        try:
            await self.remote.upsert(self.table, record)
        except Exception as e:
            error = e if isinstance(e, WriteFailure) else WriteFailure(
                str(e), table=self.table, row_id=self.row_id
            )
            self.last_write_error = error
            logger.error(f"Failed to save settings: {error.message}")
            self.publisher.publish(SettingsEvent(
                event_type=SettingsEventType.WRITE_FAILED,
                settings=self._cache,
                error=error.to_dict(),
            ))
            return False

        self.last_write_error = None
        logger.debug(f"설정 저장 완료: {record}")
        return True

    async def flush(self) -> None:
        """대기 중인 upsert 모두 완료될 때까지 대기"""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))

    # ==================== 원격 변경 ====================

    def handle_change(self, payload: Union[RemoteChangeEvent, Dict[str, Any]]) -> None:
        """
        변경 알림 처리 (구독 콜백)

        자신의 upsert 로 인한 알림(echo)도 같은 값을 다시 반영할 뿐이므로 별도 억제 없음.
        """
        if self._closed:
            logger.debug("구독 해제 후 알림 무시")
            return

        event = payload if isinstance(payload, RemoteChangeEvent) else RemoteChangeEvent.from_payload(payload)
        if event.event_kind == ChangeKind.DELETE or not event.record:
            logger.debug(f"반영할 레코드 없음: {event.event_kind.value}")
            return

        before = self._cache
        self._cache = apply_row(before, event.record)
        fields = changed_fields(before, self._cache)

        if fields:
            logger.info(f"🔄 원격 설정 변경 반영: {', '.join(fields)}")
        self.publisher.publish(SettingsEvent(
            event_type=SettingsEventType.REMOTE_CHANGED,
            settings=self._cache,
            changed_fields=fields,
            source="realtime",
        ))

    def status(self) -> Dict[str, Any]:
        """동기화 상태"""
        return {
            "ready": self.ready,
            "subscribed": self._subscription is not None,
            "pending_writes": len(self._pending_writes),
            "last_write_error": self.last_write_error.to_dict() if self.last_write_error else None,
        }
