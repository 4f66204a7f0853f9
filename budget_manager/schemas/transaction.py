# budget_manager/schemas/transaction.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any
import datetime as dt
from budget_manager.db.models.transaction import TransactionType, TransactionSource

class TransactionBase(BaseModel):
    date: dt.date # Ожидаем ISO формат YYYY-MM-DD
    description: str = Field(..., min_length=1, max_length=500)
    amount: float = Field(..., ge=0) # Сумма всегда неотрицательная, знак задает type
    type: TransactionType
    category_id: int

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Description is required")
        return value

class TransactionCreate(TransactionBase):
    source: TransactionSource = TransactionSource.manual

class TransactionUpdate(TransactionBase):
    # PUT заменяет все редактируемые поля; source не меняется
    pass

class TransactionImportRow(TransactionBase):
    # Строка пакетного импорта: по умолчанию источник - csv
    source: TransactionSource = TransactionSource.csv

class TransactionImportRequest(BaseModel):
    # Элементы намеренно не типизированы: каждый проверяется отдельно,
    # некорректные пропускаются, а не валят весь запрос
    transactions: List[Any]

class TransactionImportResult(BaseModel):
    message: str
    imported: int

class Transaction(TransactionBase):
    id: int
    source: TransactionSource
    created_at: Optional[dt.datetime] = None
    category_name: Optional[str] = None

    class Config:
        from_attributes = True
