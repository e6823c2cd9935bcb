# models/task.py

from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Mapping

from models.enums import TaskStatus

# Имена полей на проводе -> имена полей записи в сторе
WIRE_TO_ENTRY = {
    "_id": "id",
    "title": "title",
    "status": "status",
    "remTime": "rem_time",
    "importance": "importance",
    "urgency": "urgency",
    "priority": "priority",
    "color": "color",
}

@dataclass(frozen=True)
class TaskEntry:
    """Задача в клиентском сторе (без владельца)"""
    id: str
    title: str
    rem_time: str
    importance: int
    urgency: int
    priority: int
    color: str
    status: str = TaskStatus.OPEN.value

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "TaskEntry":
        values = {entry_key: data[wire_key] for wire_key, entry_key in WIRE_TO_ENTRY.items() if wire_key in data}
        if values.get("status") is None:
            values["status"] = TaskStatus.OPEN.value
        return cls(**values)

    def merged(self, changes: Mapping[str, Any], task_id: str) -> "TaskEntry":
        known = {f.name for f in fields(self)}
        updates = {key: value for key, value in changes.items() if key in known and key != "id"}
        return replace(self, **updates, id=task_id)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
