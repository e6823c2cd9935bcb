#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
amarTasks - Server Configuration
Конфигурация REST API задач с настройками для разных сред
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.models import DEFAULT_TASK_COLOR

class ServerSettings(BaseSettings):
    """Настройки сервера задач amarTasks"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(
        default="amarTasks API",
        description="Название приложения"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="Версия API"
    )

    ENVIRONMENT: str = Field(
        default="development",
        description="Среда выполнения (development/production/testing)"
    )

    DEBUG: bool = Field(
        default=True,
        description="Режим отладки"
    )

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    HOST: str = Field(
        default="0.0.0.0",
        description="Хост для запуска сервера"
    )

    PORT: int = Field(
        default=8000,
        description="Порт для запуска сервера"
    )

    ALLOWED_ORIGINS: List[str] = Field(
        default=["*"],
        description="Разрешенные источники для CORS"
    )

    # ===== ПУТИ =====

    DATA_DIR: Path = Field(
        default=Path("data"),
        description="Директория с данными"
    )

    LOGS_DIR: Path = Field(
        default=Path("logs"),
        description="Директория логов"
    )

    # ===== БАЗА ДАННЫХ =====

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///data/tasks.db",
        description="Async URL базы данных SQLAlchemy"
    )

    DB_ECHO: bool = Field(
        default=False,
        description="Логировать SQL запросы"
    )

    # ===== ЛОГИРОВАНИЕ =====

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Уровень логирования (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Формат логов"
    )

    LOG_DATE_FORMAT: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Формат даты в логах"
    )

    # ===== БЕЗОПАСНОСТЬ =====

    API_TOKENS: Dict[str, str] = Field(
        default={},
        description="Bearer токены и соответствующие им ID пользователей (JSON)"
    )

    # ===== ЗАДАЧИ =====

    DEFAULT_TASK_COLOR: str = Field(
        default=DEFAULT_TASK_COLOR,
        description="Цвет задачи по умолчанию"
    )

    RECOMPUTE_PRIORITY_ON_UPDATE: bool = Field(
        default=False,
        description="Пересчитывать приоритет при изменении важности/срочности"
    )

    # ===== API НАСТРОЙКИ =====

    DOCS_URL: Optional[str] = Field(
        default="/docs",
        description="URL документации API (None для отключения)"
    )

    OPENAPI_URL: Optional[str] = Field(
        default="/openapi.json",
        description="URL OpenAPI схемы (None для отключения)"
    )

    # ===== ВАЛИДАТОРЫ =====

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        """Валидация среды выполнения"""
        allowed_envs = ['development', 'production', 'testing', 'staging']
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v.lower()

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Валидация уровня логирования"""
        allowed_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator('PORT')
    @classmethod
    def validate_port(cls, v):
        """Валидация порта"""
        if not 1 <= v <= 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @model_validator(mode='after')
    def validate_production_settings(self):
        """Валидация настроек для продакшена"""
        if self.ENVIRONMENT == 'production':
            # В продакшене отключаем DEBUG и документацию API
            self.DEBUG = False
            self.DOCS_URL = None
            self.OPENAPI_URL = None
        return self

    # ===== МЕТОДЫ КОНФИГУРАЦИИ =====

    @property
    def is_production(self) -> bool:
        """Проверка продакшен среды"""
        return self.ENVIRONMENT == "production"

    def sqlite_path(self) -> Optional[Path]:
        """Путь к файлу SQLite, если используется файловая база"""
        prefix = "sqlite+aiosqlite:///"
        if self.DATABASE_URL.startswith(prefix):
            raw = self.DATABASE_URL[len(prefix):]
            if raw and raw != ":memory:":
                return Path(raw)
        return None

@lru_cache()
def get_settings() -> ServerSettings:
    return ServerSettings()
