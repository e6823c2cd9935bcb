# services/task_service.py

import logging
from contextlib import contextmanager
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from core.store import ClientStore
from models.task import TaskEntry
from shared.exceptions import TransportError
from shared.models import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

class TaskApi(Protocol):
    """Часть ApiService, нужная сервису задач"""

    async def get_tasks(self) -> Dict[str, Any]: ...

    async def create_task(self, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    async def update_task(self, task_id: str, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    async def delete_task(self, task_id: str) -> Dict[str, Any]: ...

def _ensure_success(response: Mapping[str, Any]) -> Mapping[str, Any]:
    if not response or response.get("success") is False:
        message = (response or {}).get("message") or "Request failed"
        raise TransportError(message)
    return response

class TaskService:
    """
    Синхронизация клиентского стора с REST API задач.

    Каждая операция выставляет loading, сбрасывает error, делает ровно один
    запрос и при успехе применяет изменение к стору. Ошибка записывается в
    store.error; create/update/delete пробрасывают ее дальше, загрузка списка нет.
    loading всегда сбрасывается при выходе.
    """

    def __init__(self, store: ClientStore, api: TaskApi):
        self.store = store
        self.api = api

    @contextmanager
    def _loading(self):
        self.store.set_loading(True)
        self.store.set_error(None)
        try:
            yield
        finally:
            self.store.set_loading(False)

    def _record_error(self, action: str, error: Exception):
        message = getattr(error, "message", None) or str(error)
        self.store.set_error(message)
        logger.error(f"❌ Failed to {action}: {message}")

    async def load_tasks(self) -> None:
        """Заменить список задачами с сервера"""
        with self._loading():
            try:
                response = _ensure_success(await self.api.get_tasks())
                tasks = [TaskEntry.from_api(task) for task in response.get("tasks", [])]
                self.store.replace_tasks(tasks)
                logger.info(f"📋 Загружено задач: {len(tasks)}")
            except Exception as e:
                self._record_error("load tasks", e)

    async def save_task(self, draft: TaskCreate) -> TaskEntry:
        """Создать задачу и добавить ее в начало списка"""
        with self._loading():
            try:
                response = _ensure_success(await self.api.create_task(draft.to_payload()))
                task = TaskEntry.from_api(response["task"])
                self.store.prepend_task(task)
                logger.info(f"📝 Создана задача {task.id}")
                return task
            except Exception as e:
                self._record_error("save task", e)
                raise

    async def update_task(self, task_id: str, updates: Union[TaskUpdate, Mapping[str, Any]]) -> Optional[TaskEntry]:
        """Частично обновить задачу и слить изменения в стор"""
        if not isinstance(updates, TaskUpdate):
            updates = TaskUpdate.model_validate(dict(updates))

        with self._loading():
            try:
                response = _ensure_success(await self.api.update_task(task_id, updates.to_payload()))
                confirmed_id = response["task"]["_id"]
                self.store.merge_task(task_id, updates.changes(), confirmed_id)
                return self.store.find_task(confirmed_id)
            except Exception as e:
                self._record_error("update task", e)
                raise

    async def delete_task(self, task_id: str) -> None:
        """Удалить задачу и убрать ее из списка"""
        with self._loading():
            try:
                _ensure_success(await self.api.delete_task(task_id))
                self.store.remove_task(task_id)
                logger.info(f"🗑️ Удалена задача {task_id}")
            except Exception as e:
                self._record_error("delete task", e)
                raise
