#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
amarTasks - Server Dependencies
Провайдеры зависимостей для FastAPI приложения
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from server.config import ServerSettings
from server.core.auth import TokenVerifier
from server.core.data_manager import DataManager

logger = logging.getLogger(__name__)

# ===== ПРОВАЙДЕРЫ ЗАВИСИМОСТЕЙ =====

def get_settings(request: Request) -> ServerSettings:
    """Настройки текущего приложения"""
    return request.app.state.settings

def get_data_manager(request: Request) -> DataManager:
    """Получить экземпляр DataManager"""
    data_manager: Optional[DataManager] = getattr(request.app.state, "data_manager", None)
    if data_manager is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage is not initialized"
        )
    return data_manager

def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier

# ===== АВТОРИЗАЦИЯ =====

security = HTTPBearer(auto_error=False)

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier)
) -> str:
    """ID текущего пользователя по bearer токену"""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required"
        )

    user_id = await verifier.resolve(credentials.credentials)
    if not user_id:
        logger.warning("⚠️ Запрос с недействительным токеном")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token"
        )
    return user_id
