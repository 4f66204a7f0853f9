# budget_manager/crud/crud_report.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func, case, and_, or_

from budget_manager.core.months import month_bounds
from budget_manager.db.models.budget import MonthlyBudget as MonthlyBudgetModel
from budget_manager.db.models.category import Category as CategoryModel
from budget_manager.db.models.transaction import Transaction as TransactionModel, TransactionType
from budget_manager.schemas.report import MonthlySummary, CategoryBreakdown

# --- Aggregation Operations ---

async def get_monthly_summary(db: AsyncSession, *, month: str) -> MonthlySummary:
    """
    Сводка за месяц: доходы, расходы, нетто и разбивка по категориям (факт против бюджета).

    Только чтение, без побочных эффектов. Единственное место,
    где транзакции и бюджеты соединяются по месяцу.

    Args:
        db: Асинхронная сессия БД
        month: Ключ месяца YYYY-MM

    Returns:
        MonthlySummary; разбивка отсортирована по фактическим расходам по убыванию
    """
    start, end = month_bounds(month)
    in_month = and_(TransactionModel.date >= start, TransactionModel.date < end)

    # 1. Итоги по типам
    totals_stmt = (
        select(
            func.coalesce(func.sum(
                case((TransactionModel.type == TransactionType.income, TransactionModel.amount), else_=0)
            ), 0).label("total_income"),
            func.coalesce(func.sum(
                case((TransactionModel.type == TransactionType.expense, TransactionModel.amount), else_=0)
            ), 0).label("total_expenses")
        )
        .filter(in_month)
    )
    totals = (await db.execute(totals_stmt)).one()
    total_income = float(totals.total_income)
    total_expenses = float(totals.total_expenses)

    # 2. Разбивка по категориям
    # Подзапрос: расходы за месяц по категориям
    spent_subquery = (
        select(
            TransactionModel.category_id,
            func.sum(TransactionModel.amount).label("spent")
        )
        .filter(in_month, TransactionModel.type == TransactionType.expense)
        .group_by(TransactionModel.category_id)
        .subquery()
    )
    # Подзапрос: бюджеты за месяц (не более одной строки на категорию)
    budget_subquery = (
        select(MonthlyBudgetModel.category_id, MonthlyBudgetModel.budget_amount)
        .filter(MonthlyBudgetModel.month == month)
        .subquery()
    )

    actual = func.coalesce(spent_subquery.c.spent, 0).label("actual")
    budgeted = func.coalesce(budget_subquery.c.budget_amount, 0).label("budgeted")

    breakdown_stmt = (
        select(CategoryModel.id, CategoryModel.name, actual, budgeted)
        .outerjoin(spent_subquery, CategoryModel.id == spent_subquery.c.category_id)
        .outerjoin(budget_subquery, CategoryModel.id == budget_subquery.c.category_id)
        # Активные категории всегда; деактивированные - только если в этом месяце
        # у них есть расходы или бюджет, чтобы прошлые месяцы считались правильно
        .filter(or_(
            CategoryModel.is_active.is_(True),
            spent_subquery.c.spent.isnot(None),
            budget_subquery.c.category_id.isnot(None)
        ))
        .order_by(actual.desc(), CategoryModel.name)
    )
    rows = (await db.execute(breakdown_stmt)).all()

    return MonthlySummary(
        month=month,
        total_income=total_income,
        total_expenses=total_expenses,
        # Считаем из уже приведенных к float значений, чтобы income - expenses == net
        net=total_income - total_expenses,
        category_breakdown=[
            CategoryBreakdown(id=row.id, name=row.name, actual=float(row.actual), budgeted=float(row.budgeted))
            for row in rows
        ]
    )
