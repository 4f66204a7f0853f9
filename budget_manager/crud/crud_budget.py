# budget_manager/crud/crud_budget.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload
from sqlalchemy import func
from sqlalchemy.dialects import sqlite, postgresql
from typing import Optional, List, Iterable

from budget_manager.db.models.budget import MonthlyBudget as MonthlyBudgetModel
from budget_manager.db.models.category import Category as CategoryModel
from budget_manager.schemas.budget import BudgetEntry

# Диалекты с поддержкой INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

# --- Read Operations ---

async def get_budget(db: AsyncSession, *, month: str, category_id: int) -> Optional[MonthlyBudgetModel]:
    result = await db.execute(
        select(MonthlyBudgetModel).filter(
            MonthlyBudgetModel.month == month,
            MonthlyBudgetModel.category_id == category_id
        )
    )
    return result.scalar_one_or_none()

async def get_budgets_by_month(db: AsyncSession, *, month: str) -> List[MonthlyBudgetModel]:
    """
    Бюджеты за месяц с именами категорий, отсортированные по имени категории.
    """
    stmt = (
        select(MonthlyBudgetModel)
        .join(CategoryModel, MonthlyBudgetModel.category_id == CategoryModel.id)
        .options(joinedload(MonthlyBudgetModel.category))
        .filter(MonthlyBudgetModel.month == month)
        .order_by(CategoryModel.name)
    )
    result = await db.execute(stmt)
    budgets = list(result.scalars().all())
    for budget in budgets:
        budget.category_name = budget.category.name if budget.category else None
    return budgets

# --- Upsert Operation ---

async def upsert_budget(db: AsyncSession, *, month: str, entry: BudgetEntry) -> None:
    """
    Вставить или обновить бюджет для пары (месяц, категория).
    При конфликте перезаписывается сумма и обновляется updated_at.
    """
    dialect_name = db.bind.dialect.name
    insert = _UPSERT_INSERTS.get(dialect_name)
    if insert is None:
        raise NotImplementedError(f"Budget upsert is not supported for dialect '{dialect_name}'")

    stmt = insert(MonthlyBudgetModel).values(
        month=month,
        category_id=entry.category_id,
        budget_amount=entry.budget_amount
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[MonthlyBudgetModel.month, MonthlyBudgetModel.category_id],
        set_={
            "budget_amount": stmt.excluded.budget_amount,
            "updated_at": func.now(),
        }
    )
    await db.execute(stmt)
    await db.commit()

async def save_budgets(db: AsyncSession, *, month: str, entries: Iterable[BudgetEntry]) -> int:
    """
    Сохранить набор бюджетов за месяц: upsert на каждую пару, коммит каждой отдельно.
    Возвращает количество сохраненных пар.
    """
    saved = 0
    for entry in entries:
        await upsert_budget(db, month=month, entry=entry)
        saved += 1
    return saved
