# budget_manager/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from budget_manager.core.config import Settings, settings as default_settings
from budget_manager.core.logging import setup_logging
from budget_manager.api.api import api_router
from budget_manager.db.database import Database
from budget_manager.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    # Все ошибки API отдаются в едином виде {"error": message}
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Человекочитаемое описание первой ошибки валидации."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    # loc вида ("body", "amount") или ("query", "type") - источник не нужен в сообщении
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    if first.get("type") == "missing":
        return f"Missing required field '{field}'" if field else "Missing request body"
    if not field:
        return first.get("msg", "Invalid request")
    return f"Invalid field '{field}': {first.get('msg')}"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Таблицы создаются при старте (без Alembic), соединения закрываются при остановке
        database = Database(settings)
        await database.startup()
        app.state.database = database
        try:
            yield
        finally:
            await database.shutdown()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan
    )

    # CORS полностью открыт: приложение однопользовательское, без аутентификации
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Неподдерживаемый метод на существующем пути - такой же неизвестный маршрут
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return _error(status.HTTP_404_NOT_FOUND, "Not Found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Ошибки валидации - 400, а не стандартный для FastAPI 422
        return _error(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal server error")

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    return app


app = create_app()
