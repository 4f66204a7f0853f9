# budget_manager/schemas/report.py
from pydantic import BaseModel, Field
from typing import List

class CategoryBreakdown(BaseModel):
    id: int
    name: str
    actual: float = Field(default=0.0)   # Сумма расходов категории за месяц
    budgeted: float = Field(default=0.0) # Бюджет категории на месяц (0, если не задан)

class MonthlySummary(BaseModel):
    month: str
    total_income: float = Field(default=0.0)
    total_expenses: float = Field(default=0.0)
    net: float = Field(default=0.0) # total_income - total_expenses
    category_breakdown: List[CategoryBreakdown] = []
