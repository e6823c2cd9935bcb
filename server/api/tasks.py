import logging

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from server.config import ServerSettings
from server.core.data_manager import DataManager
from server.dependencies import get_current_user, get_data_manager, get_settings
from shared.exceptions import NotFoundError, TaskAppError, ValidationError
from shared.models import MessageResponse, TaskCreate, TaskListResponse, TaskOut, TaskResponse, TaskUpdate
from utils.datetime_utils import parse_rem_time

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.get("", response_model=TaskListResponse)
async def get_tasks(
    user_id: str = Depends(get_current_user),
    data_manager: DataManager = Depends(get_data_manager)
):
    """
    Все задачи текущего пользователя, новые первыми
    """
    try:
        tasks = await data_manager.list_tasks(user_id)
        return TaskListResponse(tasks=[TaskOut.from_record(task) for task in tasks])

    except Exception as e:
        logger.error(f"❌ Ошибка получения задач: {e}")
        raise HTTPException(status_code=500, detail="Error fetching tasks")

@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    user_id: str = Depends(get_current_user),
    data_manager: DataManager = Depends(get_data_manager),
    settings: ServerSettings = Depends(get_settings)
):
    """
    Создать задачу. Обязательны title, remTime, importance, urgency, priority
    """
    if payload.missing_fields():
        raise ValidationError("Missing required fields")

    try:
        rem_time = parse_rem_time(payload.rem_time)
    except ValueError:
        raise ValidationError("Invalid remTime")

    try:
        task = await data_manager.create_task(
            user_id,
            title=payload.title,
            rem_time=rem_time,
            importance=payload.importance,
            urgency=payload.urgency,
            priority=payload.priority,
            color=payload.color or settings.DEFAULT_TASK_COLOR,
        )
        return TaskResponse(task=TaskOut.from_record(task))

    except Exception as e:
        logger.error(f"❌ Ошибка создания задачи: {e}")
        raise HTTPException(status_code=500, detail="Error creating task")

@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: dict = Body(...),
    user_id: str = Depends(get_current_user),
    data_manager: DataManager = Depends(get_data_manager)
):
    """
    Частичное обновление задачи владельца
    """
    try:
        updates = TaskUpdate.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(_first_error(e))

    changes = updates.model_dump(exclude_unset=True)
    if "rem_time" in changes:
        changes["rem_time"] = parse_rem_time(changes["rem_time"])
    if "status" in changes:
        changes["status"] = changes["status"].value

    try:
        task = await data_manager.update_task(user_id, task_id, changes)
        if task is None:
            raise NotFoundError("Task not found")

        return TaskResponse(task=TaskOut.from_record(task))

    except TaskAppError:
        raise
    except Exception as e:
        logger.error(f"❌ Ошибка обновления задачи {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Error updating task")

@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user),
    data_manager: DataManager = Depends(get_data_manager)
):
    """
    Удалить задачу владельца
    """
    try:
        deleted = await data_manager.delete_task(user_id, task_id)
        if not deleted:
            raise NotFoundError("Task not found")

        return MessageResponse(success=True, message="Task deleted successfully")

    except TaskAppError:
        raise
    except Exception as e:
        logger.error(f"❌ Ошибка удаления задачи {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Error deleting task")

def _first_error(error: PydanticValidationError) -> str:
    """Короткое сообщение по первой ошибке валидации"""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if first.get("type") == "extra_forbidden":
        return f"Field '{location}' cannot be updated"
    if location:
        return f"Invalid value for '{location}'"
    return first.get("msg", "Invalid task fields")
