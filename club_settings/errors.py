"""
클럽 설정 동기화 오류
"""
from typing import Optional


class SettingsError(Exception):
    """설정 동기화 오류 기본 클래스"""

    def __init__(self, message: str, table: Optional[str] = None, row_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.table = table
        self.row_id = row_id

    def to_dict(self) -> dict:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "table": self.table,
            "row_id": self.row_id,
        }


class FetchFailure(SettingsError):
    """초기 조회 실패 (연결 불가, 파싱 실패, 행 없음) - 기본값으로 복구"""


class WriteFailure(SettingsError):
    """upsert 실패 - 로그만 남김 (재시도/롤백 없음)"""


class SubscriptionFailure(SettingsError):
    """변경 알림 구독 실패 - 이후 원격 변경 수신 없음"""


class SettingsNotReadyError(SettingsError):
    """초기화 완료 전 설정 접근"""

    def __init__(self, message: str = "클럽 설정이 아직 초기화되지 않았습니다"):
        super().__init__(message)
