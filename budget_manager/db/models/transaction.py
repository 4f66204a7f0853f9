# budget_manager/db/models/transaction.py
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, func, CheckConstraint, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship
from budget_manager.db.base_class import Base
import enum

class TransactionType(str, enum.Enum): # Наследуем от str для лучшей интеграции с Pydantic/FastAPI
    income = "income"
    expense = "expense"

class TransactionSource(str, enum.Enum):
    manual = "manual"
    csv = "csv"

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Фактическая дата операции (без времени)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False)
    # Сумма всегда положительная, знак определяется полем type
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(
        SQLAlchemyEnum(TransactionType, name="transaction_type_enum", native_enum=False, create_constraint=True),
        nullable=False
    )
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    source = Column(
        SQLAlchemyEnum(TransactionSource, name="transaction_source_enum", native_enum=False, create_constraint=True),
        nullable=False,
        default=TransactionSource.manual,
        server_default=TransactionSource.manual.value
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category = relationship("Category", back_populates="transactions")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_transaction_amount_non_negative"),
    )
