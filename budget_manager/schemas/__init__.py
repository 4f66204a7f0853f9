# budget_manager/schemas/__init__.py
from .common import Message, ErrorResponse
from .category import Category, CategoryCreate, CategoryUpdate
from .transaction import (
    Transaction,
    TransactionCreate,
    TransactionUpdate,
    TransactionImportRow,
    TransactionImportRequest,
    TransactionImportResult,
)
from .budget import MonthlyBudget, BudgetEntry, BudgetSaveRequest, BudgetSaveResult
from .report import MonthlySummary, CategoryBreakdown
