# tests/test_task_service.py

import asyncio

import pytest
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import TransportError
from shared.models import TaskCreate, TaskUpdate

from .fakes import FakeApi, wire_task

def draft(title: str = "Write report") -> TaskCreate:
    return TaskCreate.with_priority(title, "2030-01-01T10:00", importance=3, urgency=1)

@pytest.mark.asyncio
async def test_load_tasks_replaces_list(store, task_service, fake_api: FakeApi):
    fake_api.tasks = [wire_task("b"), wire_task("a")]

    await task_service.load_tasks()

    assert [task.id for task in store.tasks] == ["b", "a"]
    assert store.loading is False
    assert store.error is None

@pytest.mark.asyncio
async def test_load_failure_is_recorded_not_raised(store, task_service, fake_api: FakeApi):
    fake_api.failures["get_tasks"] = "Error fetching tasks"

    await task_service.load_tasks()

    assert store.error == "Error fetching tasks"
    assert store.loading is False

@pytest.mark.asyncio
async def test_loading_flag_is_set_during_request(store, task_service, fake_api: FakeApi):
    states = []
    store.subscribe(lambda snapshot: states.append(snapshot.loading))

    await task_service.load_tasks()

    assert states[0] is True
    assert states[-1] is False

@pytest.mark.asyncio
async def test_save_task_prepends_server_task(store, task_service, fake_api: FakeApi):
    fake_api.tasks = [wire_task("old")]
    await task_service.load_tasks()

    task = await task_service.save_task(draft())

    assert store.tasks[0] == task
    assert task.title == "Write report"
    assert task.priority == 3
    payload = fake_api.called("create_task")[0]
    assert payload["remTime"] == "2030-01-01T10:00"
    assert "color" not in payload

@pytest.mark.asyncio
async def test_save_failure_records_error_and_raises(store, task_service, fake_api: FakeApi):
    fake_api.failures["create_task"] = "Error creating task"

    with pytest.raises(TransportError):
        await task_service.save_task(draft())

    assert store.error == "Error creating task"
    assert store.loading is False
    assert store.tasks == ()

@pytest.mark.asyncio
async def test_error_is_cleared_by_next_operation(store, task_service, fake_api: FakeApi):
    fake_api.failures["get_tasks"] = "down"
    await task_service.load_tasks()
    del fake_api.failures["get_tasks"]

    await task_service.load_tasks()

    assert store.error is None

@pytest.mark.asyncio
async def test_update_merges_changes(store, task_service, fake_api: FakeApi):
    fake_api.tasks = [wire_task("a"), wire_task("b")]
    await task_service.load_tasks()

    updated = await task_service.update_task("a", {"status": "done", "title": "Renamed"})

    assert updated is not None
    assert updated.status == "done"
    assert updated.title == "Renamed"
    assert store.find_task("b").title == "Task b"
    assert fake_api.called("update_task") == [("a", {"status": "done", "title": "Renamed"})]

@pytest.mark.asyncio
async def test_update_without_local_match_keeps_list(store, task_service, fake_api: FakeApi):
    fake_api.tasks = [wire_task("a")]
    await task_service.load_tasks()
    before = store.tasks

    result = await task_service.update_task("elsewhere", TaskUpdate(title="x"))

    assert result is None
    assert store.tasks == before

@pytest.mark.asyncio
async def test_update_rejects_unknown_fields_before_request(task_service, fake_api: FakeApi):
    with pytest.raises(PydanticValidationError):
        await task_service.update_task("a", {"owner": "bob"})

    assert fake_api.called("update_task") == []

@pytest.mark.asyncio
async def test_update_failure_records_error_and_raises(store, task_service, fake_api: FakeApi):
    fake_api.failures["update_task"] = "Task not found"

    with pytest.raises(TransportError, match="Task not found"):
        await task_service.update_task("a", {"title": "x"})

    assert store.error == "Task not found"

@pytest.mark.asyncio
async def test_delete_twice_does_not_raise(store, task_service, fake_api: FakeApi):
    fake_api.tasks = [wire_task("a"), wire_task("b")]
    await task_service.load_tasks()

    await task_service.delete_task("a")
    await task_service.delete_task("a")

    assert [task.id for task in store.tasks] == ["b"]
    assert store.error is None

@pytest.mark.asyncio
async def test_concurrent_creates_are_both_kept(store, task_service, fake_api: FakeApi):
    gate = fake_api.gates["create_task"] = asyncio.Event()

    first = asyncio.create_task(task_service.save_task(draft("one")))
    second = asyncio.create_task(task_service.save_task(draft("two")))
    await asyncio.sleep(0)
    gate.set()
    await asyncio.gather(first, second)

    assert sorted(task.title for task in store.tasks) == ["one", "two"]

@pytest.mark.asyncio
async def test_late_create_does_not_resurrect_deleted_task(store, task_service, fake_api: FakeApi):
    gate = fake_api.gates["create_task"] = asyncio.Event()

    pending = asyncio.create_task(task_service.save_task(draft()))
    await asyncio.sleep(0)
    await task_service.delete_task("srv-1")
    gate.set()
    created = await pending

    assert created.id == "srv-1"
    assert store.find_task("srv-1") is None

@pytest.mark.asyncio
async def test_malformed_task_list_is_recorded_not_raised(store, task_service, fake_api: FakeApi):
    fake_api.tasks = [wire_task("a")]
    await task_service.load_tasks()
    fake_api.tasks = [{"_id": "b", "title": "no other fields"}]

    await task_service.load_tasks()

    assert store.error
    assert [task.id for task in store.tasks] == ["a"]
    assert store.loading is False

@pytest.mark.asyncio
async def test_rejected_list_is_recorded_not_raised(store, task_service, fake_api: FakeApi):
    fake_api.tasks = [wire_task("a")]
    await task_service.load_tasks()
    fake_api.rejections["get_tasks"] = "Error fetching tasks"

    await task_service.load_tasks()

    assert store.error == "Error fetching tasks"
    assert [task.id for task in store.tasks] == ["a"]

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, message, call",
    [
        ("create_task", "Error creating task", lambda service: service.save_task(draft())),
        ("update_task", "Error updating task", lambda service: service.update_task("a", {"title": "x"})),
        ("delete_task", "Error deleting task", lambda service: service.delete_task("a")),
    ],
)
async def test_rejected_mutation_is_recorded_and_raised(store, task_service, fake_api: FakeApi, method, message, call):
    fake_api.tasks = [wire_task("a")]
    await task_service.load_tasks()
    fake_api.rejections[method] = message

    with pytest.raises(TransportError, match=message):
        await call(task_service)

    assert store.error == message
    assert store.loading is False
    assert [task.id for task in store.tasks] == ["a"]
    assert store.find_task("a").title == "Task a"
