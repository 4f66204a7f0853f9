# budget_manager/db/models/category.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func, true
from sqlalchemy.orm import relationship
from budget_manager.db.base_class import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)
    # Категории не удаляются физически, а деактивируются,
    # чтобы исторические транзакции продолжали ссылаться на существующую строку
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Связи (без каскадного удаления: категория никогда не удаляется через API)
    transactions = relationship("Transaction", back_populates="category")
    budgets = relationship("MonthlyBudget", back_populates="category")
