# budget_manager/api/deps.py
from fastapi import HTTPException, status, Query
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional

from budget_manager.core.months import is_month_key
from budget_manager.db.database import get_async_db # Зависимость для получения сессии БД

__all__ = ["get_async_db", "store_error", "required_month", "optional_month"]


def store_error(exc: SQLAlchemyError) -> HTTPException:
    """
    Ошибка хранилища -> 500 с исходным сообщением драйвера БД.
    """
    message = str(getattr(exc, "orig", None) or exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _check_month(month: str) -> str:
    if not is_month_key(month):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid month '{month}', expected YYYY-MM"
        )
    return month


async def required_month(
    month: Optional[str] = Query(None, description="Месяц в формате YYYY-MM")
) -> str:
    """Обязательный параметр month (для бюджетов и отчета)."""
    if not month:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Month parameter is required")
    return _check_month(month)


async def optional_month(
    month: Optional[str] = Query(None, description="Фильтр по месяцу YYYY-MM")
) -> Optional[str]:
    return _check_month(month) if month else None
