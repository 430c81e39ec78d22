# fitness_api/main.py
# Точка входа FastAPI. create_app() собирает приложение из явно переданных Settings;
# создание таблиц и запуск keep-alive выполняются в lifespan.

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitness_api.api import users as users_router
from fitness_api.api import workouts as workouts_router
from fitness_api.core.config import Settings, load_settings
from fitness_api.core.errors import AppError
from fitness_api.core.security import TokenService
from fitness_api.db.base import Base
from fitness_api.db.session import build_engine, build_session_factory
from fitness_api.utils.keep_alive import start_keep_alive

# Импорт моделей, чтобы SQLAlchemy видел их определения
import fitness_api.models.user  # noqa: F401
import fitness_api.models.workout  # noqa: F401

logger = logging.getLogger(__name__)


def try_create_tables(engine: Engine, retries: int = 5, delay: int = 2) -> bool:
    """
    Пытаемся создать таблицы с повторными попытками.
    Если БД недоступна, логируем ошибку и пробуем снова.

    Args:
        engine: SQLAlchemy engine приложения
        retries: Количество попыток подключения
        delay: Задержка между попытками в секундах

    Returns:
        True если таблицы созданы/существуют, False если все попытки исчерпаны
    """
    for attempt in range(1, retries + 1):
        try:
            logger.info(f"Creating tables ({attempt}/{retries})...")
            Base.metadata.create_all(bind=engine)
            logger.info("✅ Database tables created (or already exist).")
            return True
        except Exception as e:
            logger.warning(f"❌ Attempt {attempt}/{retries} failed to create tables: {e}")
            if attempt < retries:
                logger.info(f"⏳ Waiting {delay}s before retry...")
                time.sleep(delay)
    logger.error(f"❌ Could not create tables after {retries} retries.")
    return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Управление жизненным циклом приложения.
    Запускается при старте и завершении приложения.
    """
    settings: Settings = app.state.settings
    engine: Engine = app.state.engine

    # Startup
    logger.info("🚀 Fitness API starting up...")
    if not try_create_tables(engine):
        logger.error("⚠️ Failed to create database tables. Application may not work correctly.")
        if settings.is_production:
            raise RuntimeError("Cannot start application: database tables creation failed")

    if settings.KEEP_ALIVE_URL:
        app.state.scheduler = start_keep_alive(
            settings.KEEP_ALIVE_URL,
            interval_minutes=settings.KEEP_ALIVE_INTERVAL_MINUTES,
        )

    yield

    # Shutdown
    logger.info("🛑 Fitness API shutting down...")
    scheduler = app.state.scheduler
    if scheduler is not None and scheduler.running:
        scheduler.shutdown(wait=False)
    engine.dispose()
    logger.info("✅ Database connection closed")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    # В разработке разрешаем всё, в остальных окружениях только CORS_ORIGINS
    if settings.ENVIRONMENT == "development":
        origins = ["*"]
        credentials = False
    else:
        origins = settings.CORS_ORIGINS
        credentials = True
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=credentials,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=exc.headers)

    # 404/405 от роутинга Starlette тоже в формате {"error": ...}
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Ошибки разбора тела запроса тоже дают 400, как и наши проверки
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        else:
            message = "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    # Глобальный обработчик ошибок
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if settings.ENVIRONMENT == "development" else "An error occurred",
            },
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Собирает приложение. Без settings читает окружение (load_settings)."""
    if settings is None:
        settings = load_settings()
    settings.validate()

    # Настройка логирования
    logging.basicConfig(level=settings.LOG_LEVEL)

    engine = build_engine(settings.DATABASE_URL)

    app = FastAPI(
        title="Fitness Tracker API",
        description="API для учёта тренировок пользователей",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.scheduler = None

    _configure_cors(app, settings)
    _register_exception_handlers(app, settings)

    app.include_router(users_router.router, prefix="/users", tags=["users"])
    app.include_router(workouts_router.router, prefix="/workouts", tags=["workouts"])

    # Базовые health check endpoints
    @app.get("/", tags=["health"])
    async def root():
        return {
            "status": "ok",
            "message": "Server is up and running",
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy", "version": app.version}

    return app


def run() -> None:
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "fitness_api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
