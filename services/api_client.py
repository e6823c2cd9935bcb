# services/api_client.py

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from services.local_storage import TOKEN_KEY, LocalStorage
from shared.exceptions import TransportError

logger = logging.getLogger(__name__)

class ApiService:
    """
    HTTP клиент REST API задач и внешнего сервиса авторизации.

    Любая сетевая ошибка, таймаут, статус >= 400 или ответ с success=false
    превращаются в TransportError с сообщением сервера.
    """

    def __init__(
        self,
        base_url: str,
        storage: Optional[LocalStorage] = None,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.storage = storage
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "ApiService":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self):
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _headers(self, auth: bool) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth and self.storage is not None:
            token = self.storage.get_item(TOKEN_KEY)
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        auth: bool = True
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        session = self._get_session()

        try:
            async with session.request(method, url, json=payload, headers=self._headers(auth)) as response:
                status = response.status
                text = await response.text()
        except asyncio.TimeoutError:
            logger.warning(f"⏱️ Таймаут запроса {method} {path}")
            raise TransportError("Request timed out")
        except aiohttp.ClientError as e:
            logger.warning(f"⚠️ Сетевая ошибка {method} {path}: {e}")
            raise TransportError(f"Network error: {e}")

        try:
            data = json.loads(text) if text else {}
        except json.JSONDecodeError:
            data = {}

        if not isinstance(data, dict):
            data = {"data": data}

        if status >= 400 or data.get("success") is False:
            message = data.get("message") or f"Request failed with status {status}"
            raise TransportError(message, status_code=status)

        return data

    # === ЗАДАЧИ ===

    async def get_tasks(self) -> Dict[str, Any]:
        return await self._request("GET", "/tasks")

    async def create_task(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/tasks", payload)

    async def update_task(self, task_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/tasks/{task_id}", payload)

    async def delete_task(self, task_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/tasks/{task_id}")

    # === РЕГИСТРАЦИЯ И OTP (внешний сервис авторизации) ===

    async def register(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/auth/register", payload, auth=False)

    async def verify_otp(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/auth/verify-otp", payload, auth=False)

    async def resend_otp(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/auth/resend-otp", payload, auth=False)
