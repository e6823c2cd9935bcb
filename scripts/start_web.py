#!/usr/bin/env python3
"""
Скрипт запуска REST API задач amarTasks
Использование: python scripts/start_web.py [--port PORT] [--host HOST] [--dev] [--reload]
"""

import argparse
import logging
import sys
from pathlib import Path

# Добавляем корневую папку в Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from server.config import get_settings
from utils.logger import setup_logger

logger = logging.getLogger(__name__)

def main():
    """Главная функция запуска веб-сервера"""
    settings = get_settings()

    # Парсинг аргументов
    parser = argparse.ArgumentParser(description='Запуск REST API задач amarTasks')
    parser.add_argument('--port', type=int, default=settings.PORT, help='Порт сервера')
    parser.add_argument('--host', default=settings.HOST, help='Хост сервера')
    parser.add_argument('--dev', action='store_true', help='Режим разработки (DEBUG логи)')
    parser.add_argument('--reload', action='store_true', help='Автоперезагрузка при изменениях')

    args = parser.parse_args()

    # Настройка логирования
    setup_logger(
        log_file=str(settings.LOGS_DIR / "api.log"),
        level="DEBUG" if args.dev else settings.LOG_LEVEL,
        fmt=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATE_FORMAT
    )
    if not settings.DEBUG:
        logging.getLogger('uvicorn.access').setLevel(logging.WARNING)

    logger.info(f"🚀 Запуск веб-сервера на http://{args.host}:{args.port}")
    if settings.DEBUG and settings.DOCS_URL:
        logger.info(f"📚 API документация: http://{args.host}:{args.port}{settings.DOCS_URL}")

    # Запуск сервера
    try:
        uvicorn.run(
            "server.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level="debug" if args.dev else "info",
            access_log=True,
            server_header=False
        )
    except KeyboardInterrupt:
        logger.info("👋 Сервер остановлен пользователем")
    except Exception as e:
        logger.error(f"💥 Критическая ошибка: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
