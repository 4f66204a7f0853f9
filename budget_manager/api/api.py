# budget_manager/api/api.py
from fastapi import APIRouter

from budget_manager.api.endpoints import categories
from budget_manager.api.endpoints import transactions
from budget_manager.api.endpoints import budgets
from budget_manager.api.endpoints import reports

api_router = APIRouter()

api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["Transactions"])
api_router.include_router(budgets.router, prefix="/budgets", tags=["Budgets"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])
