# app/models/expense.py
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Boolean, Date, Time, DateTime, Numeric, JSON
from app.core.database import Base

class RecurringFrequency(str, enum.Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"

class ExpenseSource(str, enum.Enum):
    MANUAL = "MANUAL"
    SMS = "SMS"
    EMAIL = "EMAIL"
    BANK_API = "BANK_API"

class Expense(Base):
    __tablename__ = "expenses"

    expense_id = Column(String(length=100), primary_key=True)
    user_id = Column(String(length=80), index=True, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    # Name copied from the resolved category at write time; not updated on rename
    category = Column(String(length=50), index=True, nullable=False)
    category_id = Column(String(length=120), index=True, nullable=True)
    date = Column(Date, index=True, nullable=False)
    time = Column(Time, nullable=False)
    payee = Column(String(length=100), nullable=True)
    description = Column(String(length=500), nullable=True)
    payment_method = Column(String(length=50), nullable=True)  # Credit Card, Debit Card, Cash, UPI, Net Banking
    tags = Column(JSON, nullable=True)
    location = Column(String(length=255), nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurring_frequency = Column(String(length=20), nullable=True)
    notes = Column(String(length=1000), nullable=True)
    source = Column(String(length=20), nullable=False, default=ExpenseSource.MANUAL.value)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @staticmethod
    def generate_expense_id(user_id: str) -> str:
        return f"{user_id}_{uuid.uuid4().hex[:8]}"

    def __repr__(self):
        return f"<Expense amount={self.amount} category={self.category} user_id={self.user_id}>"
