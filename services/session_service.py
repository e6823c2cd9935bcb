# services/session_service.py

import asyncio
import json
import logging
from typing import Any, Callable, Dict, Optional

from core.store import ClientStore
from models.enums import SignInPhase
from services.local_storage import SIGNED_IN_KEY, THEME_KEY, TOKEN_KEY, USER_KEY, LocalStorage

logger = logging.getLogger(__name__)

class SessionService:
    """
    Сессия клиента: флаг входа, тема и переход после подтверждения OTP.

    Вход проходит фазы VERIFIED -> TRANSITIONING -> SIGNED_IN. Переход
    запускается одним отложенным колбэком через signin_delay секунд.
    """

    def __init__(
        self,
        store: ClientStore,
        storage: LocalStorage,
        signin_delay: float = 2.0,
        on_transition: Optional[Callable[[], Any]] = None
    ):
        self.store = store
        self.storage = storage
        self.signin_delay = signin_delay
        self.on_transition = on_transition
        self.phase = SignInPhase.SIGNED_IN if store.signed_in else SignInPhase.IDLE
        self._pending: Optional[asyncio.TimerHandle] = None

    # ===== НАЧАЛЬНОЕ СОСТОЯНИЕ =====

    @staticmethod
    def initial_signed_in(storage: LocalStorage) -> bool:
        """Вошел, если сохранены и токен, и пользователь"""
        return bool(storage.get_item(TOKEN_KEY) and storage.get_item(USER_KEY))

    @staticmethod
    def initial_theme(storage: LocalStorage, default: bool = True) -> bool:
        saved = storage.get_item(THEME_KEY)
        if saved is None:
            return default
        try:
            return bool(json.loads(saved))
        except json.JSONDecodeError:
            logger.warning(f"⚠️ Некорректное значение темы: {saved!r}")
            return default

    # ===== ТЕМА =====

    def set_theme(self, is_dark: bool):
        self.store.set_dark(is_dark)
        self.storage.set_item(THEME_KEY, json.dumps(is_dark))

    def toggle_theme(self) -> bool:
        new_theme = not self.store.dark
        self.set_theme(new_theme)
        return new_theme

    # ===== ВХОД И ВЫХОД =====

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        raw = self.storage.get_item(USER_KEY)
        return json.loads(raw) if raw else None

    def set_signed_in(self, signed_in: bool):
        self.store.set_signed_in(signed_in)
        if not signed_in:
            self.storage.remove_item(TOKEN_KEY)
            self.storage.remove_item(USER_KEY)
            self.storage.remove_item(SIGNED_IN_KEY)
            self.store.clear_tasks()

    def complete_sign_in(self, token: str, user: Dict[str, Any]) -> asyncio.TimerHandle:
        """Сохранить токен и запланировать переход в вошедшее состояние"""
        self.storage.set_item(TOKEN_KEY, token)
        self.storage.set_item(USER_KEY, json.dumps(user, ensure_ascii=False))
        self.phase = SignInPhase.VERIFIED
        self.cancel_pending()

        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(self.signin_delay, self._finish_sign_in)
        logger.info(f"✅ OTP подтвержден, вход через {self.signin_delay:.1f}с")
        return self._pending

    def _finish_sign_in(self):
        self._pending = None
        self.phase = SignInPhase.TRANSITIONING
        try:
            if self.on_transition is not None:
                self.on_transition()
        finally:
            self.set_signed_in(True)
            self.phase = SignInPhase.SIGNED_IN
            logger.info("🔓 Пользователь вошел")

    def cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def sign_out(self):
        self.cancel_pending()
        self.set_signed_in(False)
        self.phase = SignInPhase.IDLE
        logger.info("🔒 Пользователь вышел")
