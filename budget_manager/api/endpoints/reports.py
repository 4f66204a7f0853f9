# budget_manager/api/endpoints/reports.py
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from budget_manager import schemas
from budget_manager import crud
from budget_manager.api import deps

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/summary", response_model=schemas.MonthlySummary)
async def read_monthly_summary(
    month: str = Depends(deps.required_month),
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Сводка за месяц: доходы, расходы, нетто и факт против бюджета по категориям.
    """
    try:
        return await crud.crud_report.get_monthly_summary(db=db, month=month)
    except SQLAlchemyError as e:
        logger.exception("Error building summary for %s", month)
        raise deps.store_error(e)
