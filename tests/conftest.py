# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from core.store import ClientStore
from server.app import create_app
from server.config import ServerSettings
from services.local_storage import LocalStorage
from services.session_service import SessionService
from services.task_service import TaskService

from .fakes import FakeApi

TOKENS = {"token-alice": "alice", "token-bob": "bob"}

@pytest.fixture()
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "local_storage.json")

@pytest.fixture()
def store() -> ClientStore:
    return ClientStore(signed_in=True)

@pytest.fixture()
def fake_api() -> FakeApi:
    return FakeApi()

@pytest.fixture()
def task_service(store: ClientStore, fake_api: FakeApi) -> TaskService:
    return TaskService(store, fake_api)

@pytest.fixture()
def session(store: ClientStore, storage: LocalStorage) -> SessionService:
    return SessionService(store, storage, signin_delay=0)

@pytest.fixture()
def server_settings(tmp_path: Path) -> ServerSettings:
    """Настройки сервера с SQLite во временной папке"""
    return ServerSettings(
        ENVIRONMENT="testing",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}",
        API_TOKENS=TOKENS,
        LOGS_DIR=tmp_path / "logs",
    )

@pytest.fixture()
def client(server_settings: ServerSettings):
    """TestClient с запущенным lifespan (база создается на старте)"""
    app = create_app(server_settings)
    with TestClient(app) as test_client:
        yield test_client

def auth(token: str = "token-alice"):
    return {"Authorization": f"Bearer {token}"}
