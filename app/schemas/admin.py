# app/schemas/admin.py
from typing import Dict
from app.schemas.common import CamelModel, Money

class IntegrityReport(CamelModel):
    orphaned_categories: int
    orphaned_expenses_by_user: int
    orphaned_expenses_by_category: int

class UserCounts(CamelModel):
    total_users: int
    active_users: int
    verified_users: int

class CategoryCounts(CamelModel):
    total_categories: int
    default_categories: int
    custom_categories: int

class ExpenseCounts(CamelModel):
    total_expenses: int
    total_amount: Money
    average_amount: Money
    payment_methods: Dict[str, int]

class CollectionStats(CamelModel):
    users: UserCounts
    categories: CategoryCounts
    expenses: ExpenseCounts
