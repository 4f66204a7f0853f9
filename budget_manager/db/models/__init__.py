# budget_manager/db/models/__init__.py
from .category import Category
from .transaction import Transaction, TransactionType, TransactionSource
from .budget import MonthlyBudget
