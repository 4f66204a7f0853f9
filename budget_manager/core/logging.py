# budget_manager/core/logging.py
import logging
from typing import Optional

from budget_manager.core.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Настраивает корневой логгер приложения.
    Повторный вызов не добавляет дублирующих обработчиков.
    """
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(getattr(h, "_budget_manager", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        handler._budget_manager = True # Метка нашего обработчика
        root.addHandler(handler)

    # SQLAlchemy логирует SQL сам, если включен DATABASE_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DATABASE_ECHO else logging.WARNING
    )
