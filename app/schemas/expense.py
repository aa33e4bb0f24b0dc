# app/schemas/expense.py
from typing import List, Optional, Set
from decimal import Decimal
from datetime import date, datetime, time
from pydantic import Field

from app.models.expense import RecurringFrequency
from app.schemas.common import CamelModel, Money

class ExpenseCreate(CamelModel):
    amount: Decimal = Field(
        ...,
        ge=Decimal("0.01"),
        le=Decimal("1000000.00"),
        decimal_places=2,
        description="Amount with at most two decimal places",
    )
    # Either a category id or a category name; the id wins when both are sent
    category: Optional[str] = Field(None, max_length=50)
    category_id: Optional[str] = None
    date: date
    time: time
    payee: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    payment_method: Optional[str] = Field(None, max_length=50)
    tags: Optional[Set[str]] = None
    location: Optional[str] = Field(None, max_length=255)
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None
    notes: Optional[str] = Field(None, max_length=1000)

# Updates replace every field, like creation does
class ExpenseUpdate(ExpenseCreate):
    pass

class ExpenseRead(CamelModel):
    expense_id: str
    user_id: str
    amount: Money
    category: str
    category_id: Optional[str] = None
    date: date
    time: time
    payee: Optional[str] = None
    description: Optional[str] = None
    payment_method: Optional[str] = None
    tags: Optional[List[str]] = None
    location: Optional[str] = None
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    notes: Optional[str] = None
    source: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ExpensePage(CamelModel):
    items: List[ExpenseRead]
    total: int
    page: int
    size: int
    total_pages: int

class CategorySummary(CamelModel):
    category_id: str
    category_name: str
    amount: Money
    count: int
    percentage: float
    color: str
    icon: str

class MonthlySummary(CamelModel):
    month_year: str
    amount: Money
    count: int
    average_daily: Money

class ExpenseSummary(CamelModel):
    user_id: str
    period: str
    start_date: date
    end_date: date
    total_amount: Money
    total_expenses: int
    average_expense: Money
    category_breakdown: List[CategorySummary]
    monthly_trends: List[MonthlySummary]
    top_category: Optional[str] = None
    top_category_amount: Optional[Money] = None
    top_payees: List[str] = []

class PayeeAggregate(CamelModel):
    payee: Optional[str] = None
    count: int
    total: Money

class CategoryAggregate(CamelModel):
    category: str
    count: int
    total: Money

class MonthlyAggregate(CamelModel):
    year: int
    month: int
    count: int
    total: Money
