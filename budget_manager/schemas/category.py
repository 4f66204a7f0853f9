# budget_manager/schemas/category.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required")
        return value

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(CategoryBase):
    # Единственное изменяемое поле - имя (переименование)
    pass

class Category(CategoryBase):
    id: int
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
