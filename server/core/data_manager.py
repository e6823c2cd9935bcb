import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from models.enums import TaskStatus
from server.core.database import TaskRecord
from utils.priority import get_priority

logger = logging.getLogger(__name__)

def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

class DataManager:
    """Менеджер для работы с задачами в базе данных (всегда в рамках владельца)"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], recompute_priority: bool = False):
        self.session_factory = session_factory
        self.recompute_priority = recompute_priority

    # === РАБОТА С ЗАДАЧАМИ ===

    async def get_tasks_count(self) -> int:
        """Количество задач всех пользователей"""
        async with self.session_factory() as session:
            result = await session.execute(select(func.count()).select_from(TaskRecord))
            return int(result.scalar_one())

    async def list_tasks(self, owner_id: str) -> List[TaskRecord]:
        """Задачи пользователя, новые первыми"""
        async with self.session_factory() as session:
            result = await session.execute(
                select(TaskRecord)
                .where(TaskRecord.user_id == owner_id)
                .order_by(TaskRecord.created_at.desc(), TaskRecord.pk.desc())
            )
            return list(result.scalars().all())

    async def create_task(
        self,
        owner_id: str,
        *,
        title: str,
        rem_time: datetime,
        importance: int,
        urgency: int,
        priority: int,
        color: str,
    ) -> TaskRecord:
        now = _utcnow()
        task = TaskRecord(
            id=uuid.uuid4().hex,
            title=title,
            rem_time=rem_time,
            importance=importance,
            urgency=urgency,
            priority=priority,
            status=TaskStatus.OPEN.value,
            color=color,
            user_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        async with self.session_factory() as session:
            session.add(task)
            await session.commit()
            await session.refresh(task)

        logger.info(f"📝 Создана задача {task.id} пользователя {owner_id}")
        return task

    async def update_task(self, owner_id: str, task_id: str, updates: Dict[str, Any]) -> Optional[TaskRecord]:
        """Применить частичное обновление; None если задачи нет у владельца"""
        async with self.session_factory() as session:
            task = await self._find(session, owner_id, task_id)
            if task is None:
                return None

            for field_name, value in updates.items():
                setattr(task, field_name, value)

            # Приоритет по умолчанию фиксируется при создании
            if (
                self.recompute_priority
                and "priority" not in updates
                and ("importance" in updates or "urgency" in updates)
            ):
                task.priority = get_priority(task.importance, task.urgency)

            task.updated_at = _utcnow()
            await session.commit()
            await session.refresh(task)

        logger.info(f"✏️ Обновлена задача {task_id}: {', '.join(updates) or 'без изменений'}")
        return task

    async def delete_task(self, owner_id: str, task_id: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(TaskRecord).where(TaskRecord.id == task_id, TaskRecord.user_id == owner_id)
            )
            await session.commit()
            deleted = result.rowcount > 0

        if deleted:
            logger.info(f"🗑️ Удалена задача {task_id} пользователя {owner_id}")
        return deleted

    @staticmethod
    async def _find(session: AsyncSession, owner_id: str, task_id: str) -> Optional[TaskRecord]:
        result = await session.execute(
            select(TaskRecord).where(TaskRecord.id == task_id, TaskRecord.user_id == owner_id)
        )
        return result.scalar_one_or_none()
