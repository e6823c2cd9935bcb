from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models.enums import TaskStatus
from utils.datetime_utils import get_local_datetime, parse_rem_time
from utils.priority import get_priority

DEFAULT_TASK_COLOR = "#2a2727"

# Поля, без которых задачу создать нельзя (пустые значения тоже не принимаются)
REQUIRED_CREATE_FIELDS = ("title", "rem_time", "importance", "urgency", "priority")

class WireModel(BaseModel):
    """Базовая модель: camelCase на проводе, snake_case в Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# Модели запросов
class TaskCreate(WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    title: Optional[str] = None
    rem_time: Optional[str] = None
    importance: Optional[int] = None
    urgency: Optional[int] = None
    priority: Optional[int] = None
    color: Optional[str] = None

    @field_validator('importance', 'urgency', 'priority')
    @classmethod
    def validate_ordinal(cls, v):
        if v and not 1 <= v <= 4:
            raise ValueError('must be between 1 and 4')
        return v

    @classmethod
    def with_priority(
        cls,
        title: str,
        rem_time: Union[str, datetime],
        importance: int,
        urgency: int,
        color: Optional[str] = None,
    ) -> "TaskCreate":
        """Черновик задачи с приоритетом, вычисленным из важности и срочности"""
        if isinstance(rem_time, datetime):
            rem_time = get_local_datetime(rem_time)
        return cls(
            title=title,
            rem_time=rem_time,
            importance=importance,
            urgency=urgency,
            priority=get_priority(importance, urgency),
            color=color,
        )

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_CREATE_FIELDS if not getattr(self, name)]

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

class TaskUpdate(WireModel):
    """Частичное обновление: только перечисленные поля, null не допускается"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    title: Optional[str] = None
    rem_time: Optional[str] = None
    importance: Optional[int] = None
    urgency: Optional[int] = None
    priority: Optional[int] = None
    status: Optional[TaskStatus] = None
    color: Optional[str] = None

    @field_validator('title', 'color')
    @classmethod
    def validate_not_blank(cls, v):
        if v is not None and not v:
            raise ValueError('must not be empty')
        return v

    @field_validator('importance', 'urgency', 'priority')
    @classmethod
    def validate_ordinal(cls, v):
        if v is not None and not 1 <= v <= 4:
            raise ValueError('must be between 1 and 4')
        return v

    @field_validator('rem_time')
    @classmethod
    def validate_rem_time(cls, v):
        if v is not None:
            parse_rem_time(v)
        return v

    @model_validator(mode='after')
    def validate_no_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f'{name} must not be null')
        return self

    def changes(self) -> Dict[str, Any]:
        """Изменения в именах полей Python (для слияния в клиентском сторе)"""
        return self.model_dump(mode="json", exclude_unset=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

# Модели ответов
class TaskOut(WireModel):
    id: str = Field(alias="_id")
    title: str
    rem_time: datetime
    importance: int
    urgency: int
    priority: int
    status: TaskStatus = TaskStatus.OPEN
    color: str = DEFAULT_TASK_COLOR
    user_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: Any) -> "TaskOut":
        return cls(
            id=record.id,
            title=record.title,
            rem_time=record.rem_time,
            importance=record.importance,
            urgency=record.urgency,
            priority=record.priority,
            status=record.status,
            color=record.color,
            user_id=record.user_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

class TaskListResponse(BaseModel):
    success: bool = True
    tasks: List[TaskOut] = []

class TaskResponse(BaseModel):
    success: bool = True
    task: TaskOut

class MessageResponse(BaseModel):
    success: bool
    message: str

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
