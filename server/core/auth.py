"""
amarTasks - Auth
Проверка bearer токенов. Выдача токенов и OTP живут во внешнем сервисе,
здесь только сопоставление токена с ID пользователя.
"""

from typing import Dict, Optional, Protocol

class TokenVerifier(Protocol):
    async def resolve(self, token: str) -> Optional[str]:
        """ID пользователя для токена или None"""
        ...

class StaticTokenVerifier:
    """Токены из настроек: {token: user_id}"""

    def __init__(self, tokens: Dict[str, str]):
        self._tokens = dict(tokens)

    async def resolve(self, token: str) -> Optional[str]:
        return self._tokens.get(token)
