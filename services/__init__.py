# services/__init__.py

"""
Модуль сервисов клиента amarTasks

Содержит HTTP клиент API, синхронизацию задач, сессию и регистрацию.
"""

import logging
from typing import Optional

from config import ClientConfig
from core.store import ClientStore
from .api_client import ApiService
from .local_storage import LocalStorage
from .session_service import SessionService
from .signup_service import SignupService
from .task_service import TaskService

logger = logging.getLogger(__name__)

class ServiceManager:
    """
    Контекст клиента: стор и все сервисы, связанные между собой.

    Обеспечивает:
    - Начальное состояние стора из локального хранилища
    - Инициализацию сервисов в нужном порядке
    - Корректное закрытие HTTP сессии
    """

    def __init__(self, config: ClientConfig, api: Optional[ApiService] = None):
        self.config = config

        logger.info("🔧 Инициализация сервисов amarTasks...")
        self.storage = LocalStorage(config.storage.path)

        self.store = ClientStore(
            signed_in=SessionService.initial_signed_in(self.storage),
            dark=SessionService.initial_theme(self.storage, default=config.ui.default_dark)
        )

        self.api = api or ApiService(
            config.api.base_url,
            storage=self.storage,
            timeout=config.api.request_timeout
        )

        self.session = SessionService(self.store, self.storage, signin_delay=config.ui.signin_delay)
        self.tasks = TaskService(self.store, self.api)
        self.signup = SignupService(self.api, self.session)
        logger.info("✅ Сервисы инициализированы")

    async def close(self):
        """Закрытие всех сервисов"""
        logger.info("🛑 Закрытие сервисов...")
        self.session.cancel_pending()
        await self.api.close()

    async def __aenter__(self) -> "ServiceManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

__all__ = [
    'ApiService',
    'LocalStorage',
    'ServiceManager',
    'SessionService',
    'SignupService',
    'TaskService'
]
