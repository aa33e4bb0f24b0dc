# app/api/v1/routes/expenses.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.expense import (
    CategoryAggregate,
    ExpenseCreate,
    ExpensePage,
    ExpenseRead,
    ExpenseSummary,
    ExpenseUpdate,
    MonthlyAggregate,
    PayeeAggregate,
)
from app.crud.expense import (
    aggregate_by_category,
    aggregate_by_month,
    aggregate_by_payee,
    get_expenses_by_category,
    get_expenses_by_tags,
    get_expenses_for_user,
    search_expenses_by_payee,
)
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user
from app.services import expenses as expense_service
from app.services.summary import get_expense_summary

router = APIRouter(prefix="/expenses", tags=["expenses"])

@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    exp_in: ExpenseCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Record an expense; an unknown category name is created on the fly."""
    return await expense_service.create_expense(user.user_id, exp_in, db)

@router.get("", response_model=List[ExpenseRead])
async def read_expenses(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_expenses_for_user(user.user_id, db)

@router.get("/paginated", response_model=ExpensePage)
async def read_expenses_paginated(
    page: int = Query(0),
    size: int = Query(10),
    sort_by: str = Query("date", alias="sortBy"),
    sort_dir: str = Query("desc", alias="sortDir"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await expense_service.list_expenses_page(user.user_id, page, size, sort_by, sort_dir, db)

@router.get("/summary", response_model=ExpenseSummary)
async def read_expense_summary(
    period: str = Query("MONTHLY"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_expense_summary(user.user_id, period, start_date, end_date, db)

@router.get("/date-range", response_model=List[ExpenseRead])
async def read_expenses_by_date_range(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await expense_service.list_expenses_in_range(user.user_id, start_date, end_date, db)

@router.get("/category/{category}", response_model=List[ExpenseRead])
async def read_expenses_by_category(
    category: str,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_expenses_by_category(user.user_id, category, db)

@router.get("/search", response_model=List[ExpenseRead])
async def search_expenses(
    query: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Case-insensitive substring match on payee."""
    return await search_expenses_by_payee(user.user_id, query, db)

@router.get("/recent", response_model=List[ExpenseRead])
async def read_recent_expenses(
    days: int = Query(7),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await expense_service.list_recent_expenses(user.user_id, days, db)

@router.get("/tags", response_model=List[ExpenseRead])
async def read_expenses_by_tags(
    tags: List[str] = Query(...),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_expenses_by_tags(user.user_id, tags, db)

# ------------------------------------------------------------
# AGGREGATES
# ------------------------------------------------------------
@router.get("/aggregates/payees", response_model=List[PayeeAggregate])
async def read_payee_aggregates(
    limit: int = Query(5, ge=1, le=100),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    rows = await aggregate_by_payee(user.user_id, limit, db)
    return [PayeeAggregate(payee=payee, count=count, total=total) for payee, count, total in rows]

@router.get("/aggregates/categories", response_model=List[CategoryAggregate])
async def read_category_aggregates(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    rows = await aggregate_by_category(user.user_id, db)
    return [CategoryAggregate(category=category, count=count, total=total) for category, count, total in rows]

@router.get("/aggregates/monthly", response_model=List[MonthlyAggregate])
async def read_monthly_aggregates(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    rows = await aggregate_by_month(user.user_id, db)
    return [MonthlyAggregate(year=year, month=month, count=count, total=total) for year, month, count, total in rows]

# ------------------------------------------------------------
# SINGLE EXPENSE
# ------------------------------------------------------------
@router.get("/{expense_id}", response_model=ExpenseRead)
async def read_expense(
    expense_id: str,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await expense_service.get_owned_expense(user.user_id, expense_id, db)

@router.put("/{expense_id}", response_model=ExpenseRead)
async def update_expense_endpoint(
    expense_id: str,
    exp_in: ExpenseUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await expense_service.update_expense(user.user_id, expense_id, exp_in, db)

@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense_endpoint(
    expense_id: str,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    await expense_service.remove_expense(user.user_id, expense_id, db)
    return None
