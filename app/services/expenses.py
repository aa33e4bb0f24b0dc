# app/services/expenses.py
import logging
import math
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidRequestError, NotFoundError
from app.crud.expense import (
    delete_expense,
    get_expense_for_user,
    get_expenses_by_date_range,
    get_expenses_page,
    get_recent_expenses,
    save_expense,
)
from app.models.expense import Expense, ExpenseSource
from app.schemas.expense import ExpenseCreate, ExpensePage, ExpenseRead, ExpenseUpdate
from app.services.category_resolver import resolve_category

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def _apply_fields(expense: Expense, data: ExpenseCreate) -> None:
    expense.amount = data.amount
    expense.date = data.date
    expense.time = data.time
    expense.payee = data.payee
    expense.description = data.description
    expense.payment_method = data.payment_method
    expense.tags = sorted(data.tags) if data.tags else None
    expense.location = data.location
    expense.is_recurring = data.is_recurring
    expense.recurring_frequency = data.recurring_frequency.value if data.recurring_frequency else None
    expense.notes = data.notes


async def get_owned_expense(user_id: str, expense_id: str, db: AsyncSession) -> Expense:
    expense = await get_expense_for_user(expense_id, user_id, db)
    if expense is None:
        raise NotFoundError(f"Expense not found: {expense_id}")
    return expense


async def create_expense(user_id: str, data: ExpenseCreate, db: AsyncSession) -> Expense:
    # Resolve first: a bad category must not leave a half-written expense behind
    category = await resolve_category(user_id, data.category_id, data.category, db)

    expense = Expense(
        expense_id=Expense.generate_expense_id(user_id),
        user_id=user_id,
        category=category.name,
        category_id=category.category_id,
        source=ExpenseSource.MANUAL.value,
    )
    _apply_fields(expense, data)
    expense = await save_expense(expense, db)
    logger.info(f"Expense created: {expense.expense_id} ({expense.amount} in {expense.category})")
    return expense


async def update_expense(user_id: str, expense_id: str, data: ExpenseUpdate, db: AsyncSession) -> Expense:
    expense = await get_owned_expense(user_id, expense_id, db)
    category = await resolve_category(user_id, data.category_id, data.category, db)

    expense.category = category.name
    expense.category_id = category.category_id
    _apply_fields(expense, data)
    expense = await save_expense(expense, db)
    logger.info(f"Expense updated: {expense.expense_id}")
    return expense


async def remove_expense(user_id: str, expense_id: str, db: AsyncSession) -> None:
    expense = await get_owned_expense(user_id, expense_id, db)
    await delete_expense(expense, db)
    logger.info(f"Expense deleted: {expense_id}")


async def list_expenses_page(
    user_id: str,
    page: int,
    size: int,
    sort_by: str,
    sort_dir: str,
    db: AsyncSession,
) -> ExpensePage:
    if page < 0:
        raise InvalidRequestError("Page index must not be negative")
    if size < 1 or size > MAX_PAGE_SIZE:
        raise InvalidRequestError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    items, total = await get_expenses_page(user_id, page, size, sort_by, sort_dir, db)
    return ExpensePage(
        items=[ExpenseRead.model_validate(e) for e in items],
        total=total,
        page=page,
        size=size,
        total_pages=math.ceil(total / size) if total else 0,
    )


async def list_expenses_in_range(
    user_id: str,
    start_date: date,
    end_date: date,
    db: AsyncSession,
) -> List[Expense]:
    if start_date > end_date:
        raise InvalidRequestError("Start date must not be after end date")
    return await get_expenses_by_date_range(user_id, start_date, end_date, db)


async def list_recent_expenses(user_id: str, days: int, db: AsyncSession, today: Optional[date] = None) -> List[Expense]:
    if days < 1:
        raise InvalidRequestError("Days must be at least 1")
    today = today or date.today()
    return await get_recent_expenses(user_id, today - timedelta(days=days), db)
