#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
amarTasks - FastAPI Application
REST API задач: список, создание, обновление и удаление задач пользователя
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from server.api import tasks
from server.config import ServerSettings, get_settings
from server.core.auth import StaticTokenVerifier, TokenVerifier
from server.core.data_manager import DataManager
from server.core.database import Database
from shared.exceptions import TaskAppError
from shared.models import HealthCheck

logger = logging.getLogger(__name__)

def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers
    )

def create_app(
    settings: Optional[ServerSettings] = None,
    token_verifier: Optional[TokenVerifier] = None
) -> FastAPI:
    """Создание FastAPI приложения"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        # Startup
        logger.info("🚀 Запуск amarTasks API...")
        database = Database(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            sqlite_path=settings.sqlite_path()
        )
        try:
            await database.connect()
        except Exception as e:
            logger.error(f"❌ Ошибка инициализации базы данных: {e}")
            raise

        app.state.data_manager = DataManager(
            database.session_factory,
            recompute_priority=settings.RECOMPUTE_PRIORITY_ON_UPDATE
        )

        tasks_count = await app.state.data_manager.get_tasks_count()
        logger.info(f"📝 Задач в базе: {tasks_count}")
        logger.info(f"🌐 API доступен на: http://{settings.HOST}:{settings.PORT}")
        logger.info("✅ API готов к работе")

        yield

        # Shutdown
        logger.info("🛑 Остановка API...")
        app.state.data_manager = None
        await database.close()
        logger.info("✅ Ресурсы очищены")

    app = FastAPI(
        title=settings.APP_NAME,
        description="REST API задач amarTasks",
        version=settings.VERSION,
        docs_url=settings.DOCS_URL if settings.DEBUG else None,
        redoc_url=None,
        openapi_url=settings.OPENAPI_URL if settings.DEBUG else None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.token_verifier = token_verifier or StaticTokenVerifier(settings.API_TOKENS)
    app.state.data_manager = None

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Middleware для логирования запросов"""
        start_time = time.time()
        client_ip = request.headers.get("X-Forwarded-For", request.client.host if request.client else "-")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(f"❌ Ошибка обработки запроса: {e} ({process_time:.3f}s)")
            return _error_response(500, "Internal server error")

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s "
            f"- {client_ip}"
        )
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response

    # ===== ОБРАБОТЧИКИ ОШИБОК =====

    @app.exception_handler(TaskAppError)
    async def task_error_handler(request: Request, exc: TaskAppError):
        if exc.status_code and exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
        return _error_response(exc.status_code or 500, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"⚠️ Некорректный запрос {request.method} {request.url.path}: {exc.errors()}")
        return _error_response(400, "Invalid request body")

    # ===== МАРШРУТЫ =====

    app.include_router(tasks.router)

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        """Health check для мониторинга"""
        return HealthCheck(
            status="healthy" if app.state.data_manager is not None else "starting",
            service="tasks-api",
            version=settings.VERSION,
            timestamp=time.time()
        )

    return app

app = create_app()
