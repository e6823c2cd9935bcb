# shared/exceptions.py

from typing import Optional

class TaskAppError(Exception):
    """Базовая ошибка приложения с HTTP статусом"""
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

class ValidationError(TaskAppError):
    """Нет обязательных полей или они некорректны"""
    status_code = 400

class NotFoundError(TaskAppError):
    """Задача не найдена или принадлежит другому пользователю"""
    status_code = 404

class TransportError(TaskAppError):
    """Сетевая ошибка или ответ сервера с success=false"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        # Для сетевых ошибок статуса нет
        self.status_code = status_code
