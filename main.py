"""
클럽 설정 동기화 CLI
"""
import asyncio
import json
import sys
from typing import Optional

from loguru import logger

from club_settings.config import setup_logging
from club_settings.events import SettingsEvent, SettingsEventType
from club_settings.models import ClubSettingsUpdate
from club_settings.store import RemoteSettingsStore, SettingsStore
from database.settings_seed import export_settings, load_json_data, seed_settings


class SettingsCLI:
    """클럽 설정 관리 명령"""

    def __init__(self, remote: Optional[RemoteSettingsStore] = None):
        if remote is None:
            from database.supabase_client import SupabaseRemoteStore
            remote = SupabaseRemoteStore()
        self.remote = remote

    async def show(self) -> dict:
        """현재 설정 조회"""
        async with SettingsStore(self.remote) as store:
            return store.settings.to_public()

    async def set(self, update: ClubSettingsUpdate) -> bool:
        """설정 변경 후 저장 완료까지 대기"""
        async with SettingsStore(self.remote) as store:
            store.update_settings(update)
            await store.flush()
            if store.last_write_error:
                return False
            logger.info(f"설정 저장 완료: {store.settings.to_public()}")
            return True

    async def watch(self) -> None:
        """원격 변경 실시간 출력 (Ctrl+C 종료)"""

        def on_change(event: SettingsEvent):
            print(f"[{event.timestamp:%H:%M:%S}] {', '.join(event.changed_fields) or '변경 없음'}")
            print(json.dumps(event.settings.to_public(), ensure_ascii=False, indent=2))

        async with SettingsStore(self.remote) as store:
            store.publisher.subscribe(SettingsEventType.REMOTE_CHANGED, on_change)
            logger.info("변경 알림 대기 중... (Ctrl+C로 종료)")
            while True:
                await asyncio.sleep(60)
                logger.debug(f"동기화 상태: {store.status()}")

    async def seed(self, filepath: str) -> bool:
        """초기 데이터 JSON 으로 설정 행 시드"""
        try:
            data = load_json_data(filepath)
            await seed_settings(self.remote, data)
            return True
        except Exception as e:
            logger.error(f"설정 시드 오류: {e}")
            return False

    async def export(self, output: Optional[str] = None) -> bool:
        """설정 행 JSON 백업"""
        try:
            data = await export_settings(self.remote)
        except Exception as e:
            logger.error(f"설정 내보내기 오류: {e}")
            return False

        text = json.dumps(data, ensure_ascii=False, indent=2)
        if output:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(text)
            logger.info(f"백업 저장: {output}")
        else:
            print(text)
        return True


async def main():
    """메인 함수"""
    import argparse

    parser = argparse.ArgumentParser(description="클럽 설정 동기화")
    parser.add_argument(
        "--mode",
        choices=["show", "set", "watch", "seed", "export"],
        default="show",
        help="실행 모드"
    )
    parser.add_argument("--name", help="클럽명 (set)")
    parser.add_argument("--logo", help="로고 URL (set), 빈 문자열이면 삭제")
    parser.add_argument("--color", help="대표 색상 hex (set)")
    parser.add_argument("--file", help="초기 데이터 JSON 경로 (seed)")
    parser.add_argument("--output", help="백업 파일 경로 (export)")

    args = parser.parse_args()

    setup_logging("settings")
    cli = SettingsCLI()

    if args.mode == "show":
        settings = await cli.show()
        print("\n=== 클럽 설정 ===")
        for key, value in settings.items():
            print(f"  {key}: {value}")

    elif args.mode == "set":
        changes = {}
        if args.name is not None:
            changes["name"] = args.name
        if args.logo is not None:
            changes["logo"] = args.logo or None
        if args.color is not None:
            changes["primary_color"] = args.color
        if not changes:
            parser.error("--name, --logo, --color 중 하나 이상 필요")

        if not await cli.set(ClubSettingsUpdate(**changes)):
            sys.exit(1)

    elif args.mode == "watch":
        try:
            await cli.watch()
        except (KeyboardInterrupt, asyncio.CancelledError):
            logger.info("감시 종료됨")

    elif args.mode == "seed":
        if not args.file:
            parser.error("--file 필요")
        if not await cli.seed(args.file):
            sys.exit(1)

    elif args.mode == "export":
        if not await cli.export(args.output):
            sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
