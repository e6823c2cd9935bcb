"""
amarTasks - Database
Асинхронный движок SQLAlchemy и таблица задач
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from models.enums import TaskStatus
from shared.models import DEFAULT_TASK_COLOR

logger = logging.getLogger(__name__)

class Base(DeclarativeBase):
    pass

class TaskRecord(Base):
    """Задача пользователя"""
    __tablename__ = "tasks"

    # Суррогатный ключ для стабильной сортировки, наружу отдается id
    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    title: Mapped[str] = mapped_column(Text)
    rem_time: Mapped[datetime] = mapped_column(DateTime)
    importance: Mapped[int] = mapped_column(Integer)
    urgency: Mapped[int] = mapped_column(Integer)
    priority: Mapped[int] = mapped_column(Integer)
    status: Mapped[str] = mapped_column(String(20), default=TaskStatus.OPEN.value)
    color: Mapped[str] = mapped_column(String(32), default=DEFAULT_TASK_COLOR)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime)
    updated_at: Mapped[datetime] = mapped_column(DateTime)

    def __repr__(self) -> str:
        return f"<TaskRecord id={self.id} user={self.user_id} title={self.title!r}>"

class Database:
    """Обертка над async engine и фабрикой сессий"""

    def __init__(self, url: str, echo: bool = False, sqlite_path: Optional[Path] = None):
        self.url = url
        self.echo = echo
        self.sqlite_path = sqlite_path
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def connect(self) -> None:
        if self.engine is not None:
            return

        if self.sqlite_path is not None:
            self.sqlite_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info("🔄 Подключение к базе данных...")
        self.engine = create_async_engine(self.url, echo=self.echo)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("✅ База данных инициализирована")

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("🧹 Соединения с базой данных закрыты")
