# app/crud/expense.py
from datetime import date
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import asc, desc, extract, func
from app.models.category import Category
from app.models.expense import Expense
from app.models.user import User
from typing import Iterable, List, Optional, Tuple

SORTABLE_FIELDS = {
    "date": Expense.date,
    "amount": Expense.amount,
    "payee": Expense.payee,
    "category": Expense.category,
    "createdAt": Expense.created_at,
}

def _to_money(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(Decimal("0.01"))

async def get_expenses_for_user(user_id: str, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        select(Expense)
        .where(Expense.user_id == user_id)
        .order_by(desc(Expense.date), desc(Expense.time))
    )
    return result.scalars().all()

async def get_expenses_page(
    user_id: str,
    page: int,
    size: int,
    sort_by: str,
    sort_dir: str,
    db: AsyncSession,
) -> Tuple[List[Expense], int]:
    column = SORTABLE_FIELDS.get(sort_by, Expense.date)
    order = asc(column) if sort_dir.lower() == "asc" else desc(column)
    result = await db.execute(
        select(Expense)
        .where(Expense.user_id == user_id)
        .order_by(order, desc(Expense.time))
        .offset(page * size)
        .limit(size)
    )
    total = await count_expenses_for_user(user_id, db)
    return result.scalars().all(), total

async def get_expense_for_user(expense_id: str, user_id: str, db: AsyncSession) -> Optional[Expense]:
    result = await db.execute(
        select(Expense).where(Expense.expense_id == expense_id, Expense.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_expenses_by_date_range(user_id: str, start_date: date, end_date: date, db: AsyncSession) -> List[Expense]:
    """Inclusive on both ends, oldest first so aggregation sees a stable order."""
    result = await db.execute(
        select(Expense)
        .where(
            Expense.user_id == user_id,
            Expense.date >= start_date,
            Expense.date <= end_date,
        )
        .order_by(asc(Expense.date), asc(Expense.time), asc(Expense.expense_id))
    )
    return result.scalars().all()

async def get_expenses_by_category(user_id: str, category: str, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        select(Expense)
        .where(Expense.user_id == user_id, Expense.category == category)
        .order_by(desc(Expense.date), desc(Expense.time))
    )
    return result.scalars().all()

async def search_expenses_by_payee(user_id: str, term: str, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        select(Expense)
        .where(Expense.user_id == user_id, func.lower(Expense.payee).contains(term.lower()))
        .order_by(desc(Expense.date), desc(Expense.time))
    )
    return result.scalars().all()

async def get_recent_expenses(user_id: str, since: date, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        select(Expense)
        .where(Expense.user_id == user_id, Expense.date >= since)
        .order_by(desc(Expense.date), desc(Expense.time))
    )
    return result.scalars().all()

async def get_expenses_by_tags(user_id: str, tags: Iterable[str], db: AsyncSession) -> List[Expense]:
    # Tags live in a JSON column; membership is checked here to stay portable across backends
    wanted = set(tags)
    expenses = await get_expenses_for_user(user_id, db)
    return [e for e in expenses if wanted.intersection(e.tags or [])]

async def count_expenses_for_user(user_id: str, db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Expense).where(Expense.user_id == user_id))
    return result.scalar_one()

async def sum_expenses_for_user(user_id: str, db: AsyncSession) -> Decimal:
    result = await db.execute(select(func.sum(Expense.amount)).where(Expense.user_id == user_id))
    return _to_money(result.scalar_one())

async def save_expense(expense: Expense, db: AsyncSession) -> Expense:
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    return expense

async def delete_expense(expense: Expense, db: AsyncSession) -> None:
    await db.delete(expense)
    await db.commit()

# ---------------------------------------------------------------------------
# Aggregations: (key, count, total) tuples
# ---------------------------------------------------------------------------
async def aggregate_by_payee(user_id: str, limit: int, db: AsyncSession) -> List[Tuple[Optional[str], int, Decimal]]:
    total = func.sum(Expense.amount).label("total")
    result = await db.execute(
        select(Expense.payee, func.count().label("count"), total)
        .where(Expense.user_id == user_id)
        .group_by(Expense.payee)
        .order_by(desc(total))
        .limit(limit)
    )
    return [(payee, count, _to_money(amount)) for payee, count, amount in result.all()]

async def aggregate_by_category(user_id: str, db: AsyncSession) -> List[Tuple[str, int, Decimal]]:
    total = func.sum(Expense.amount).label("total")
    result = await db.execute(
        select(Expense.category, func.count().label("count"), total)
        .where(Expense.user_id == user_id)
        .group_by(Expense.category)
        .order_by(desc(total))
    )
    return [(category, count, _to_money(amount)) for category, count, amount in result.all()]

async def aggregate_by_month(user_id: str, db: AsyncSession) -> List[Tuple[int, int, int, Decimal]]:
    year = extract("year", Expense.date).label("expense_year")
    month = extract("month", Expense.date).label("expense_month")
    result = await db.execute(
        select(year, month, func.count().label("count"), func.sum(Expense.amount).label("total"))
        .where(Expense.user_id == user_id)
        .group_by(year, month)
        .order_by(desc(year), desc(month))
    )
    return [(int(y), int(m), count, _to_money(amount)) for y, m, count, amount in result.all()]

# ---------------------------------------------------------------------------
# Collection-wide queries for admin reports
# ---------------------------------------------------------------------------
async def count_expenses(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Expense))
    return result.scalar_one()

async def sum_expenses(db: AsyncSession) -> Decimal:
    result = await db.execute(select(func.sum(Expense.amount)))
    return _to_money(result.scalar_one())

async def count_orphaned_expenses_by_user(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Expense)
        .where(Expense.user_id.not_in(select(User.user_id)))
    )
    return result.scalar_one()

async def count_orphaned_expenses_by_category(db: AsyncSession) -> int:
    """Expenses pointing at a category id that no longer exists."""
    result = await db.execute(
        select(func.count())
        .select_from(Expense)
        .where(
            Expense.category_id.is_not(None),
            Expense.category_id.not_in(select(Category.category_id)),
        )
    )
    return result.scalar_one()

async def count_by_payment_method(db: AsyncSession) -> List[Tuple[Optional[str], int]]:
    result = await db.execute(
        select(Expense.payment_method, func.count().label("count"))
        .group_by(Expense.payment_method)
        .order_by(desc("count"))
    )
    return [(method, count) for method, count in result.all()]
