"""
로컬 이미지 캐시 (선수 사진 등)

키(선수 ID) -> data URL 문자열. SQLite 파일 하나에 저장.
"""
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator, List, Optional, Union

from loguru import logger

from club_settings.config import club_settings_config


STORE_NAME = "images"


class ImageCache:
    """이미지 blob 캐시 (get/put/delete)"""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or club_settings_config.image_cache_path)

    def _init_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {STORE_NAME} (
                id TEXT PRIMARY KEY,
                data TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        """커밋/롤백 후 연결 종료"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        try:
            self._init_schema(conn)
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def save_image(self, image_id: str, data_url: str) -> None:
        """이미지 저장 (있으면 덮어씀)"""
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO {STORE_NAME} (id, data, updated_at) VALUES (?, ?, ?)",
                (image_id, data_url, datetime.now().isoformat()),
            )
        logger.debug(f"이미지 저장: {image_id} ({len(data_url)} bytes)")

    def get_image(self, image_id: str) -> Optional[str]:
        """이미지 조회 (없으면 None)"""
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT data FROM {STORE_NAME} WHERE id = ?", (image_id,)
            ).fetchone()
        return row[0] if row else None

    def delete_image(self, image_id: str) -> None:
        """이미지 삭제 (없어도 오류 없음)"""
        with self._connect() as conn:
            conn.execute(f"DELETE FROM {STORE_NAME} WHERE id = ?", (image_id,))
        logger.debug(f"이미지 삭제: {image_id}")

    def list_ids(self) -> List[str]:
        with self._connect() as conn:
            rows = conn.execute(f"SELECT id FROM {STORE_NAME} ORDER BY id").fetchall()
        return [r[0] for r in rows]
