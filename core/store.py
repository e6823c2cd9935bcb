#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
amarTasks - Client Store
Состояние клиента: список задач, флаги загрузки/ошибки, вход и тема.

Изменяется только через методы-мутаторы (их вызывают сервисы),
интерфейс читает неизменяемые снимки и подписывается на изменения.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Set, Tuple

from models.task import TaskEntry

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class StoreSnapshot:
    """Снимок состояния для отрисовки"""
    signed_in: bool
    tasks: Tuple[TaskEntry, ...]
    dark: bool
    loading: bool
    error: Optional[str]

Listener = Callable[[StoreSnapshot], Any]

class ClientStore:
    """Контейнер состояния с одним писателем и уведомлением подписчиков"""

    def __init__(self, signed_in: bool = False, dark: bool = True):
        self._signed_in = signed_in
        self._tasks: Tuple[TaskEntry, ...] = ()
        self._dark = dark
        self._loading = False
        self._error: Optional[str] = None
        # ID удаленных задач, чтобы запоздавшее создание их не вернуло
        self._removed_ids: Set[str] = set()
        self._listeners: List[Listener] = []

    # ===== ЧТЕНИЕ =====

    @property
    def signed_in(self) -> bool:
        return self._signed_in

    @property
    def tasks(self) -> Tuple[TaskEntry, ...]:
        return self._tasks

    @property
    def dark(self) -> bool:
        return self._dark

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            signed_in=self._signed_in,
            tasks=self._tasks,
            dark=self._dark,
            loading=self._loading,
            error=self._error,
        )

    def find_task(self, task_id: str) -> Optional[TaskEntry]:
        return next((task for task in self._tasks if task.id == task_id), None)

    # ===== ПОДПИСКИ =====

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписка на изменения, возвращает функцию отписки"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("❌ Ошибка в подписчике стора")

    # ===== МУТАТОРЫ =====

    def set_loading(self, loading: bool):
        self._loading = loading
        self._notify()

    def set_error(self, error: Optional[str]):
        self._error = error
        self._notify()

    def set_signed_in(self, signed_in: bool):
        self._signed_in = signed_in
        self._notify()

    def set_dark(self, dark: bool):
        self._dark = dark
        self._notify()

    def replace_tasks(self, tasks: Iterable[TaskEntry]):
        """Полная замена списка (ответ сервера на загрузку)"""
        self._tasks = tuple(tasks)
        self._removed_ids.clear()
        self._notify()

    def prepend_task(self, task: TaskEntry) -> bool:
        """Добавить задачу в начало; False если она уже была удалена"""
        if task.id in self._removed_ids:
            logger.debug(f"Пропуск уже удаленной задачи {task.id}")
            return False
        self._tasks = (task,) + tuple(t for t in self._tasks if t.id != task.id)
        self._notify()
        return True

    def merge_task(self, task_id: str, changes: Mapping[str, Any], new_id: Optional[str] = None) -> bool:
        """Слить частичные изменения в задачу; без совпадения ничего не меняется"""
        if self.find_task(task_id) is None:
            return False
        confirmed_id = new_id or task_id
        self._tasks = tuple(
            task.merged(changes, confirmed_id) if task.id == task_id else task
            for task in self._tasks
        )
        self._notify()
        return True

    def remove_task(self, task_id: str) -> bool:
        self._removed_ids.add(task_id)
        remaining = tuple(task for task in self._tasks if task.id != task_id)
        if len(remaining) == len(self._tasks):
            return False
        self._tasks = remaining
        self._notify()
        return True

    def clear_tasks(self):
        self._tasks = ()
        self._removed_ids.clear()
        self._notify()
