# services/local_storage.py

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Ключи локального хранилища
TOKEN_KEY = "amarTasks-token"
USER_KEY = "amarTasks-user"
THEME_KEY = "amarTasks-theme"
SIGNED_IN_KEY = "amarTasks-signedIn"

class LocalStorage:
    """
    Строковое key-value хранилище клиента в JSON файле.

    Значения всегда строки, сложные данные сериализуются вызывающим кодом.
    Каждое изменение сразу пишется на диск через временный файл.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._items: Dict[str, str] = {}
        self._load()

    def _load(self):
        if not self.path.exists():
            logger.info(f"📂 Локальное хранилище не найдено, начинаем с пустого: {self.path}")
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Ошибка парсинга локального хранилища {self.path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning("⚠️ Неверный формат локального хранилища")
            return

        self._items = {str(key): str(value) for key, value in data.items()}
        logger.debug(f"📂 Загружено ключей: {len(self._items)}")

    def _save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.path.with_suffix('.tmp')
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(self._items, f, ensure_ascii=False, indent=2)
        temp_file.replace(self.path)

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str):
        with self._lock:
            self._items[key] = value
            self._save()

    def remove_item(self, key: str):
        with self._lock:
            if self._items.pop(key, None) is not None:
                self._save()

    def clear(self):
        with self._lock:
            self._items.clear()
            self._save()
