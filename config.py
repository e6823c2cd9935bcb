#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
amarTasks - Client Configuration
Конфигурация клиента задач с валидацией
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

ENV_PREFIX = "AMARTASKS_"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class ApiConfig:
    """Подключение к REST API задач"""
    base_url: str = "http://localhost:8000"
    request_timeout: float = 30.0

@dataclass
class StorageConfig:
    """Локальное хранилище (токен, пользователь, тема)"""
    path: Path = Path("data/local_storage.json")

@dataclass
class UIConfig:
    """Поведение интерфейса"""
    signin_delay: float = 2.0
    default_dark: bool = True

class ClientConfig:
    """Главный класс конфигурации клиента"""

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        self._env = os.environ if env is None else env
        self._load_config()
        self._validate_config()

    def _get(self, key: str, default: str) -> str:
        value = self._env.get(ENV_PREFIX + key)
        return default if value is None or value.strip() == "" else value.strip()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""
        self.api = ApiConfig(
            base_url=self._get('API_URL', 'http://localhost:8000').rstrip('/'),
            request_timeout=float(self._get('REQUEST_TIMEOUT', '30'))
        )

        self.storage = StorageConfig(
            path=Path(self._get('STORAGE_PATH', 'data/local_storage.json')).expanduser()
        )

        self.ui = UIConfig(
            signin_delay=float(self._get('SIGNIN_DELAY', '2.0')),
            default_dark=self._get('DEFAULT_DARK', 'true').lower() in ('1', 'true', 'yes', 'on')
        )

        # Логирование
        self.log_level = LogLevel(self._get('LOG_LEVEL', 'INFO').upper())
        self.log_dir = Path(self._get('LOG_DIR', 'logs'))

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if not self.api.base_url.startswith(('http://', 'https://')):
            errors.append(f"API_URL должен начинаться с http:// или https:// ({self.api.base_url})")

        if self.api.request_timeout <= 0:
            errors.append("REQUEST_TIMEOUT должен быть положительным")

        if self.ui.signin_delay < 0:
            errors.append("SIGNIN_DELAY не может быть отрицательным")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        for directory in (self.storage.path.parent, self.log_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'api': {
                'base_url': self.api.base_url,
                'request_timeout': self.api.request_timeout
            },
            'storage_path': str(self.storage.path),
            'signin_delay': self.ui.signin_delay,
            'log_level': self.log_level.value
        }

_config: Optional[ClientConfig] = None

def get_config() -> ClientConfig:
    """Глобальный экземпляр конфигурации"""
    global _config
    if _config is None:
        _config = ClientConfig()
    return _config

__all__ = [
    'ClientConfig',
    'get_config',
    'LogLevel',
    'ApiConfig',
    'StorageConfig',
    'UIConfig'
]
