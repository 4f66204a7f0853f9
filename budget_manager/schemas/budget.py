# budget_manager/schemas/budget.py
from pydantic import BaseModel, Field
from typing import Optional, List, Any
from datetime import datetime

from budget_manager.core.months import MONTH_KEY_PATTERN

class BudgetEntry(BaseModel):
    category_id: int
    budget_amount: float = Field(..., ge=0)

class BudgetSaveRequest(BaseModel):
    month: str = Field(..., pattern=MONTH_KEY_PATTERN) # YYYY-MM
    # Пары без category_id или budget_amount пропускаются при сохранении
    budgets: List[Any]

class BudgetSaveResult(BaseModel):
    message: str
    saved: int

class MonthlyBudget(BaseModel):
    id: int
    month: str
    category_id: int
    category_name: Optional[str] = None
    budget_amount: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
