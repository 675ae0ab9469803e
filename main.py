#!/usr/bin/env python3
# main.py
"""
Точка входа SCMS backend.
Подключается к PostgreSQL, применяет схему и проверяет доступность БД.
"""

from __future__ import annotations

import asyncio
import sys

from scms.common.constants import TypeMsg
from scms.common.logger import log_error, log_info, setup_logging
from scms.config import settings
from scms.infra.database import close_db, init_db


async def main() -> int:
    setup_logging()
    await log_info(
        f"Запуск {settings.system.PROJECT_NAME} v{settings.system.VERSION} "
        f"({settings.system.ENVIRONMENT})",
        type_msg=TypeMsg.INFO,
    )

    try:
        db = await init_db()
        if not await db.health_check():
            await log_error("PostgreSQL недоступен")
            return 1
        await log_info("PostgreSQL готов к работе", type_msg=TypeMsg.INFO)
        return 0
    finally:
        await close_db()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
