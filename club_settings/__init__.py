"""
클럽 설정 동기화 패키지

단일 club_settings 행을 로컬 캐시와 원격(Supabase) 간에 동기화:
- 초기 로드 (실패 시 기본값)
- 낙관적 업데이트 + upsert
- Realtime 변경 알림 반영
"""

from .models import ClubSettings, ClubSettingsUpdate, DEFAULT_SETTINGS
from .mapping import to_row, fields_from_row, settings_from_row, apply_row
from .events import (
    SettingsEventType,
    SettingsEvent,
    SettingsEventPublisher,
    RemoteChangeEvent,
    ChangeKind,
)
from .errors import (
    SettingsError,
    FetchFailure,
    WriteFailure,
    SubscriptionFailure,
    SettingsNotReadyError,
)
from .store import SettingsStore, RemoteSettingsStore

__all__ = [
    # Models
    "ClubSettings",
    "ClubSettingsUpdate",
    "DEFAULT_SETTINGS",
    # Mapping
    "to_row",
    "fields_from_row",
    "settings_from_row",
    "apply_row",
    # Events
    "SettingsEventType",
    "SettingsEvent",
    "SettingsEventPublisher",
    "RemoteChangeEvent",
    "ChangeKind",
    # Errors
    "SettingsError",
    "FetchFailure",
    "WriteFailure",
    "SubscriptionFailure",
    "SettingsNotReadyError",
    # Store
    "SettingsStore",
    "RemoteSettingsStore",
]
