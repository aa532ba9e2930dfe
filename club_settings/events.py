"""
설정 변경 이벤트

- RemoteChangeEvent: Supabase Realtime 변경 알림 (원격 -> 로컬)
- SettingsEvent: 캐시 변경을 화면/의존 컴포넌트에 전달 (로컬 구독자)
"""

from typing import Dict, Any, List, Callable, Optional
from datetime import datetime
from enum import Enum
from dataclasses import dataclass, field
from collections import defaultdict
import json

from loguru import logger

from .models import ClubSettings


class SettingsEventType(str, Enum):
    """이벤트 유형"""
    LOADED = "settings.loaded"                  # 초기 로드 완료 (성공/실패 무관)
    UPDATED = "settings.updated"                # 로컬 낙관적 업데이트
    REMOTE_CHANGED = "settings.remote_changed"  # 원격 변경 알림 반영
    WRITE_FAILED = "settings.write_failed"
    FETCH_FAILED = "settings.fetch_failed"


class ChangeKind(str, Enum):
    """Postgres 변경 종류"""
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass
class RemoteChangeEvent:
    """원격 행 변경 알림"""
    event_kind: ChangeKind
    table: Optional[str] = None
    record: Dict[str, Any] = field(default_factory=dict)       # 변경 후 행 전체
    old_record: Optional[Dict[str, Any]] = None
    received_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RemoteChangeEvent":
        """
        Realtime 페이로드 파싱

        realtime-py 형식: {"data": {"type", "table", "record", "old_record"}, "ids": [...]}
        JS 클라이언트 형식: {"eventType", "table", "new", "old"}
        """
        if "data" in payload and isinstance(payload["data"], dict):
            data = payload["data"]
            kind = data.get("type") or data.get("eventType")
            record = data.get("record")
            old_record = data.get("old_record")
        else:
            data = payload
            kind = payload.get("eventType") or payload.get("type")
            record = payload.get("new")
            old_record = payload.get("old")

        return cls(
            event_kind=ChangeKind(str(kind or "UPDATE").upper()),
            table=data.get("table"),
            record=record or {},
            old_record=old_record or None,
        )


@dataclass
class SettingsEvent:
    """설정 변경 이벤트 (로컬)"""
    event_type: SettingsEventType
    settings: Optional[ClubSettings] = None
    changed_fields: List[str] = field(default_factory=list)
    error: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=datetime.now)
    source: str = "settings_store"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type.value,
            "settings": self.settings.to_public() if self.settings else None,
            "changed_fields": self.changed_fields,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


class SettingsEventPublisher:
    """이벤트 발행자"""

    def __init__(self, max_log_size: int = 200):
        self.local_subscribers: Dict[SettingsEventType, List[Callable]] = defaultdict(list)
        self._event_log: List[SettingsEvent] = []
        self._max_log_size = max_log_size

    def publish(self, event: SettingsEvent) -> None:
        """이벤트 발행"""
        logger.debug(f"📢 Event published: {event.event_type.value} {event.changed_fields}")

        self._event_log.append(event)
        if len(self._event_log) > self._max_log_size:
            self._event_log = self._event_log[-self._max_log_size:]

        # 구독자 오류는 발행자에게 전파하지 않음
        for subscriber in list(self.local_subscribers.get(event.event_type, [])):
            try:
                subscriber(event)
            except Exception as e:
                logger.error(f"구독자 호출 실패: {e}")

    def subscribe(self, event_type: SettingsEventType, callback: Callable) -> None:
        """이벤트 구독"""
        self.local_subscribers[event_type].append(callback)
        logger.debug(f"✅ Subscribed to {event_type.value}")

    def unsubscribe(self, event_type: SettingsEventType, callback: Callable) -> None:
        """이벤트 구독 해제"""
        if callback in self.local_subscribers[event_type]:
            self.local_subscribers[event_type].remove(callback)
            logger.debug(f"❌ Unsubscribed from {event_type.value}")

    def get_recent_events(self, limit: int = 20) -> List[SettingsEvent]:
        """최근 이벤트 조회"""
        return self._event_log[-limit:]
