# tests/test_config.py

from pathlib import Path

import pytest

from config import ClientConfig, LogLevel
from server.config import ServerSettings

def test_client_config_defaults():
    config = ClientConfig(env={})

    assert config.api.base_url == "http://localhost:8000"
    assert config.ui.signin_delay == 2.0
    assert config.ui.default_dark is True
    assert config.log_level == LogLevel.INFO

def test_client_config_from_env():
    config = ClientConfig(env={
        "AMARTASKS_API_URL": "https://tasks.example.com/",
        "AMARTASKS_SIGNIN_DELAY": "0",
        "AMARTASKS_DEFAULT_DARK": "no",
        "AMARTASKS_STORAGE_PATH": "/tmp/amartasks/storage.json",
    })

    assert config.api.base_url == "https://tasks.example.com"
    assert config.ui.signin_delay == 0
    assert config.ui.default_dark is False
    assert config.storage.path == Path("/tmp/amartasks/storage.json")
    assert config.to_dict()["api"]["base_url"] == "https://tasks.example.com"

def test_client_config_validation_collects_errors():
    with pytest.raises(ValueError) as exc_info:
        ClientConfig(env={"AMARTASKS_API_URL": "ftp://x", "AMARTASKS_SIGNIN_DELAY": "-1"})

    message = str(exc_info.value)
    assert "API_URL" in message
    assert "SIGNIN_DELAY" in message

def test_server_settings_production_disables_docs():
    settings = ServerSettings(ENVIRONMENT="Production")

    assert settings.is_production
    assert settings.DEBUG is False
    assert settings.DOCS_URL is None

def test_server_settings_sqlite_path(tmp_path):
    settings = ServerSettings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'db.sqlite'}")
    assert settings.sqlite_path() == tmp_path / "db.sqlite"

    memory = ServerSettings(DATABASE_URL="sqlite+aiosqlite:///:memory:")
    assert memory.sqlite_path() is None

def test_server_settings_rejects_bad_log_level():
    with pytest.raises(ValueError):
        ServerSettings(LOG_LEVEL="LOUD")
