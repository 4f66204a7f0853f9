# budget_manager/api/endpoints/budgets.py
import logging
from fastapi import APIRouter, Depends
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from budget_manager import schemas
from budget_manager import crud
from budget_manager.api import deps

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[schemas.MonthlyBudget])
async def read_budgets(
    month: str = Depends(deps.required_month),
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Бюджеты за месяц (параметр month обязателен).
    """
    try:
        return await crud.crud_budget.get_budgets_by_month(db=db, month=month)
    except SQLAlchemyError as e:
        logger.exception("Error reading budgets for %s", month)
        raise deps.store_error(e)


@router.post("", response_model=schemas.BudgetSaveResult)
async def save_budgets(
    *,
    budgets_in: schemas.BudgetSaveRequest,
    db: AsyncSession = Depends(deps.get_async_db)
):
    """
    Сохранить бюджеты за месяц: upsert по каждой паре (category_id, budget_amount).
    Повторное сохранение для того же месяца и категории перезаписывает сумму.
    """
    entries: List[schemas.BudgetEntry] = []
    for raw in budgets_in.budgets:
        if not isinstance(raw, dict):
            continue
        try:
            entries.append(schemas.BudgetEntry.model_validate(raw))
        except ValidationError:
            # Пары без category_id или budget_amount пропускаем
            logger.debug("Skipping budget entry %r", raw)

    try:
        saved = await crud.crud_budget.save_budgets(db=db, month=budgets_in.month, entries=entries)
    except SQLAlchemyError as e:
        logger.exception("Error saving budgets for %s", budgets_in.month)
        raise deps.store_error(e)

    logger.info("Saved %d budgets for %s", saved, budgets_in.month)
    return schemas.BudgetSaveResult(message="Budgets saved successfully", saved=saved)
