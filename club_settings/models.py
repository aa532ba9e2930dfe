"""
클럽 설정 데이터 모델 (Pydantic)
"""
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator


DEFAULT_CLUB_NAME = "The CAM-DEN"
DEFAULT_LOGO = "/logo-2.jpeg"
DEFAULT_PRIMARY_COLOR = "#ef4444"  # red-500
DEFAULT_FINANCE_STARTING_BALANCE = 0


class ClubSettings(BaseModel):
    """
    클럽 설정 (싱글톤 레코드)

    finance_starting_balance는 아직 원격 스키마에 없음 - 로컬 기본값만 사용
    """
    name: str = Field(default=DEFAULT_CLUB_NAME, min_length=1, description="클럽명")
    logo: Optional[str] = Field(default=DEFAULT_LOGO, description="로고 URL 또는 data URL")
    primary_color: str = Field(
        default=DEFAULT_PRIMARY_COLOR,
        alias="primaryColor",
        description="대표 색상 (hex)"
    )
    finance_starting_balance: Optional[float] = Field(
        default=DEFAULT_FINANCE_STARTING_BALANCE,
        alias="financeStartingBalance",
        description="재무 시작 잔액 (로컬 전용)"
    )

    class Config:
        populate_by_name = True

    @property
    def display_logo(self) -> str:
        """표시용 로고 (없으면 기본 로고)"""
        return self.logo or DEFAULT_LOGO

    def merged(self, update: "ClubSettingsUpdate") -> "ClubSettings":
        """명시적으로 지정된 필드만 덮어쓴 새 설정 반환"""
        return self.model_copy(update=update.changes())

    def to_public(self) -> Dict[str, Any]:
        """API 응답용 (camelCase)"""
        data = self.model_dump(by_alias=True)
        data["displayLogo"] = self.display_logo
        return data


class ClubSettingsUpdate(BaseModel):
    """
    부분 업데이트 - 모든 필드 독립적으로 선택

    지정하지 않은 필드는 병합에 참여하지 않음.
    logo=None 은 로고 삭제, name/primary_color 는 None 불가.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    logo: Optional[str] = None
    primary_color: Optional[str] = Field(default=None, alias="primaryColor")
    finance_starting_balance: Optional[float] = Field(default=None, alias="financeStartingBalance")

    class Config:
        populate_by_name = True
        extra = "forbid"

    @field_validator("name", "primary_color")
    @classmethod
    def not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("이 필드는 비울 수 없습니다")
        return value

    def changes(self) -> Dict[str, Any]:
        """명시적으로 지정된 필드만 (필드명 기준)"""
        return self.model_dump(exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set


DEFAULT_SETTINGS = ClubSettings()
