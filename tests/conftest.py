"""
Pytest configuration and fixtures for Club Settings tests
"""

import asyncio
import itertools
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeRemoteStore:
    """
    메모리 기반 원격 저장소

    - fail_select / fail_upsert / fail_subscribe: 설정 시 해당 예외 발생
    - write_gate / select_gate / subscribe_gate: asyncio.Event 설정 시 set() 될 때까지
      upsert / select / subscribe 대기
    - echo: True 면 upsert 성공 후 구독자에게 변경 알림 전송
    """

    def __init__(self, rows: Optional[Dict[Tuple[str, int], Dict[str, Any]]] = None, echo: bool = False):
        self.rows: Dict[Tuple[str, int], Dict[str, Any]] = dict(rows or {})
        self.echo = echo
        self.upserts: List[Tuple[str, Dict[str, Any]]] = []
        self.fail_select: Optional[Exception] = None
        self.fail_upsert: Optional[Exception] = None
        self.fail_subscribe: Optional[Exception] = None
        self.write_gate: Optional[asyncio.Event] = None
        self.select_gate: Optional[asyncio.Event] = None
        self.subscribe_gate: Optional[asyncio.Event] = None
        self.subscriptions: Dict[int, Callable] = {}
        self.subscribe_calls: List[Tuple[str, int, str]] = []
        self.unsubscribed: List[int] = []
        self._ids = itertools.count(1)

    async def select(self, table: str, row_id: int) -> Optional[Dict[str, Any]]:
        if self.select_gate is not None:
            await self.select_gate.wait()
        if self.fail_select:
            raise self.fail_select
        row = self.rows.get((table, row_id))
        return dict(row) if row else None

    async def upsert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        if self.write_gate is not None:
            await self.write_gate.wait()
        if self.fail_upsert:
            raise self.fail_upsert
        self.upserts.append((table, dict(record)))
        self.rows[(table, record["id"])] = dict(record)
        if self.echo:
            self.emit(record, table=table)
        return dict(record)

    async def subscribe(self, table: str, row_id: int, callback: Callable, event: str = "*") -> int:
        if self.subscribe_gate is not None:
            await self.subscribe_gate.wait()
        if self.fail_subscribe:
            raise self.fail_subscribe
        subscription = next(self._ids)
        self.subscriptions[subscription] = callback
        self.subscribe_calls.append((table, row_id, event))
        return subscription

    async def unsubscribe(self, subscription: int) -> None:
        self.subscriptions.pop(subscription, None)
        self.unsubscribed.append(subscription)

    def emit(self, record: Dict[str, Any], kind: str = "UPDATE", table: str = "club_settings") -> None:
        """realtime-py 형식의 변경 알림 전송"""
        payload = {
            "data": {
                "type": kind,
                "table": table,
                "schema": "public",
                "record": dict(record),
                "old_record": {"id": record.get("id", 1)},
            },
            "ids": [1],
        }
        for callback in list(self.subscriptions.values()):
            callback(payload)


@pytest.fixture
def remote():
    """빈 원격 저장소"""
    return FakeRemoteStore()


@pytest.fixture
def camden_row():
    """원격 club_settings 행 샘플"""
    return {"id": 1, "name": "Camden FC", "logo": None, "primary_color": "#000000"}


@pytest.fixture
def seeded_remote(camden_row):
    """설정 행이 있는 원격 저장소"""
    return FakeRemoteStore(rows={("club_settings", 1): camden_row})


@pytest.fixture
def initial_data():
    """초기 데이터 JSON 샘플"""
    return {
        "players": [],
        "club-settings": {
            "name": "Camden United",
            "logo": "/logo-2.jpeg",
            "primaryColor": "#1d4ed8",
        },
    }


@pytest.fixture
def echo_remote():
    """upsert 후 자신에게 변경 알림을 보내는 원격 저장소"""
    return FakeRemoteStore(echo=True)
