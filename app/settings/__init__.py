"""
Club Settings Module - 클럽 설정 API
"""
from .router import router as settings_router
from .dependencies import get_settings_store

__all__ = [
    "settings_router",
    "get_settings_store",
]
