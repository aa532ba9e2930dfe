"""
클럽 설정 동기화 설정
"""
import sys
from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv
from loguru import logger

load_dotenv()


class SupabaseConfig(BaseSettings):
    """Supabase 설정"""

    supabase_url: str = Field(default="", description="Supabase Project URL")
    supabase_key: str = Field(default="", description="Supabase anon key")

    class Config:
        env_prefix = ""
        case_sensitive = False


class ClubSettingsConfig(BaseSettings):
    """클럽 설정 싱글톤 행 설정"""

    table: str = Field(default="club_settings", description="설정 테이블명")
    row_id: int = Field(default=1, description="싱글톤 행 ID")
    schema_name: str = Field(default="public", description="Postgres 스키마")
    channel_name: str = Field(default="club_settings_changes", description="Realtime 채널명")

    # 로컬 이미지 캐시
    image_cache_path: str = Field(default="data/images.db", description="이미지 캐시 SQLite 경로")

    # 로그
    log_dir: str = Field(default="logs", description="로그 디렉토리")
    log_level: str = Field(default="INFO", description="콘솔 로그 레벨")

    class Config:
        env_prefix = "CLUB_SETTINGS_"
        case_sensitive = False


# 전역 설정 인스턴스
supabase_config = SupabaseConfig()
club_settings_config = ClubSettingsConfig()


def setup_logging(name: str = "settings") -> None:
    """로깅 설정 (콘솔 + 일별 파일)"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=club_settings_config.log_level
    )
    logger.add(
        f"{club_settings_config.log_dir}/{name}_{{time:YYYY-MM-DD}}.log",
        rotation="1 day",
        retention="30 days",
        level="DEBUG"
    )
