# budget_manager/db/database.py
import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import event, select, func
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from budget_manager.core.config import Settings
from budget_manager.db.base_class import Base
from budget_manager.db import models # Регистрируем модели в Base.metadata

logger = logging.getLogger(__name__)

# Стандартный набор категорий для пустой базы
DEFAULT_CATEGORIES = [
    "Housing",
    "Utilities",
    "Groceries",
    "Transportation",
    "Insurance",
    "Debt Payments",
    "Savings",
    "Entertainment",
    "Miscellaneous",
]


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite по умолчанию не проверяет внешние ключи, включаем для каждого соединения
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Создает асинхронный движок SQLAlchemy.
    Для SQLite включает внешние ключи; in-memory база живет на одном соединении.
    """
    kwargs = {"echo": echo}
    url = make_url(database_url)
    is_sqlite = url.get_backend_name() == "sqlite"
    if is_sqlite and url.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_async_engine(database_url, **kwargs)
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    # expire_on_commit=False: объекты остаются читаемыми после коммита (нужно для ответа)
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def init_db(engine: AsyncEngine, seed_categories: bool = True) -> None:
    """
    Создает таблицы (без Alembic) и, если категорий еще нет, заполняет стандартный набор.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not seed_categories:
        return

    session_factory = build_session_factory(engine)
    async with session_factory() as session:
        existing = (await session.execute(select(func.count(models.Category.id)))).scalar_one()
        if existing == 0:
            session.add_all([models.Category(name=name) for name in DEFAULT_CATEGORIES])
            await session.commit()
            logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))


class Database:
    """Движок и фабрика сессий на время жизни приложения."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        self.session_factory = build_session_factory(self.engine)

    async def startup(self) -> None:
        await init_db(self.engine, seed_categories=self.settings.SEED_DEFAULT_CATEGORIES)
        logger.info("Database ready: %s", self.engine.url.render_as_string(hide_password=True))

    async def shutdown(self) -> None:
        await self.engine.dispose()


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Зависимость FastAPI: сессия БД на один запрос.
    Каждая операция коммитит сама (в CRUD), здесь только откат при ошибке и закрытие.
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialised for this application")

    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
