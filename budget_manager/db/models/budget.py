# budget_manager/db/models/budget.py
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, func, UniqueConstraint
from sqlalchemy.orm import relationship
from budget_manager.db.base_class import Base

class MonthlyBudget(Base):
    __tablename__ = "monthly_budgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    month = Column(String(7), nullable=False, index=True) # Ключ месяца YYYY-MM
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    budget_amount = Column(Numeric(12, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="budgets")

    __table_args__ = (
        # Не более одного бюджета на пару (месяц, категория) - на этом держится upsert
        UniqueConstraint("month", "category_id", name="uq_monthly_budget_month_category"),
    )
