# app/services/summary.py
import calendar
import logging
from collections import Counter
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.category import get_categories_for_user
from app.crud.expense import get_expenses_by_date_range
from app.models.category import Category, DEFAULT_COLOR, DEFAULT_ICON
from app.models.expense import Expense
from app.schemas.expense import CategorySummary, ExpenseSummary, MonthlySummary

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
TREND_MONTHS = 12
TOP_PAYEES_LIMIT = 5


class SummaryPeriod(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"
    CUSTOM = "CUSTOM"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SummaryPeriod":
        try:
            return cls((value or cls.MONTHLY.value).upper())
        except ValueError:
            return cls.CUSTOM


# ────────────────────────────────────────────────────────────────────────────────
# MAIN ENTRY
# ────────────────────────────────────────────────────────────────────────────────
async def get_expense_summary(
    user_id: str,
    period: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
    db: AsyncSession,
    today: Optional[date] = None,
) -> ExpenseSummary:
    """
    Fetch everything the summary needs for one user and hand it to
    build_summary. The monthly trend always covers the trailing twelve
    months, independent of the requested window.
    """
    today = today or date.today()
    resolved = SummaryPeriod.parse(period)
    # Unrecognised periods are echoed back as sent
    period_label = period if resolved == SummaryPeriod.CUSTOM and period else resolved.value
    start_date, end_date = resolve_period_window(resolved, start_date, end_date, today)
    logger.info(f"Generating expense summary for user '{user_id}' for period {resolved.value} ({start_date} → {end_date})")

    expenses = await get_expenses_by_date_range(user_id, start_date, end_date, db)
    categories = await get_categories_for_user(user_id, db)
    trend_start, trend_end = trailing_months_window(today)
    trend_expenses = await get_expenses_by_date_range(user_id, trend_start, trend_end, db)

    return build_summary(
        user_id=user_id,
        period=period_label,
        start_date=start_date,
        end_date=end_date,
        expenses=expenses,
        categories=categories,
        trend_expenses=trend_expenses,
        today=today,
    )


# ────────────────────────────────────────────────────────────────────────────────
# HELPERS – DATE WINDOWS
# ────────────────────────────────────────────────────────────────────────────────
def resolve_period_window(
    period: SummaryPeriod,
    start_date: Optional[date],
    end_date: Optional[date],
    today: date,
) -> Tuple[date, date]:
    """Fill in the window only when a bound is missing; named periods replace both bounds."""
    if start_date is not None and end_date is not None:
        return start_date, end_date

    if period == SummaryPeriod.MONTHLY:
        return _month_bounds(today.year, today.month)
    if period == SummaryPeriod.YEARLY:
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if period == SummaryPeriod.WEEKLY:
        return today - timedelta(days=6), today

    # DAILY or custom → whatever is missing becomes today
    return start_date or today, end_date or today


def trailing_months_window(today: date) -> Tuple[date, date]:
    months = _trailing_months(today)
    first_year, first_month = months[0]
    last_year, last_month = months[-1]
    return _month_bounds(first_year, first_month)[0], _month_bounds(last_year, last_month)[1]


def _trailing_months(today: date) -> List[Tuple[int, int]]:
    current = today.year * 12 + (today.month - 1)
    months = []
    for offset in range(TREND_MONTHS - 1, -1, -1):
        year, month_index = divmod(current - offset, 12)
        months.append((year, month_index + 1))
    return months


def _month_bounds(year: int, month: int) -> Tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _round_half_up(value: Decimal, places: Decimal) -> Decimal:
    return value.quantize(places, rounding=ROUND_HALF_UP)


# ────────────────────────────────────────────────────────────────────────────────
# AGGREGATION
# ────────────────────────────────────────────────────────────────────────────────
def build_summary(
    user_id: str,
    period: str,
    start_date: date,
    end_date: date,
    expenses: Sequence[Expense],
    categories: Sequence[Category],
    trend_expenses: Sequence[Expense],
    today: date,
) -> ExpenseSummary:
    monthly_trends = build_monthly_trends(trend_expenses, today)

    if not expenses:
        return ExpenseSummary(
            user_id=user_id,
            period=period,
            start_date=start_date,
            end_date=end_date,
            total_amount=ZERO,
            total_expenses=0,
            average_expense=ZERO,
            category_breakdown=[],
            monthly_trends=monthly_trends,
            top_category=None,
            top_category_amount=None,
            top_payees=[],
        )

    total_amount = sum((e.amount for e in expenses), ZERO)
    total_expenses = len(expenses)
    average_expense = _round_half_up(total_amount / total_expenses, TWO_PLACES)

    category_breakdown, top_category, top_category_amount = build_category_breakdown(
        expenses, categories, total_amount
    )

    return ExpenseSummary(
        user_id=user_id,
        period=period,
        start_date=start_date,
        end_date=end_date,
        total_amount=total_amount,
        total_expenses=total_expenses,
        average_expense=average_expense,
        category_breakdown=category_breakdown,
        monthly_trends=monthly_trends,
        top_category=top_category,
        top_category_amount=top_category_amount,
        top_payees=top_payees(expenses),
    )


def build_category_breakdown(
    expenses: Sequence[Expense],
    categories: Sequence[Category],
    total_amount: Decimal,
) -> Tuple[List[CategorySummary], Optional[str], Optional[Decimal]]:
    """Group by the name stored on each expense, not by category id."""
    groups: Dict[str, List[Expense]] = {}
    for expense in expenses:
        groups.setdefault(expense.category, []).append(expense)

    # First occurrence wins if a user somehow has two categories with one name
    by_name: Dict[str, Category] = {}
    for category in categories:
        by_name.setdefault(category.name, category)

    breakdown: List[CategorySummary] = []
    top_category: Optional[str] = None
    top_category_amount = ZERO

    for name, group in groups.items():
        amount = sum((e.amount for e in group), ZERO)
        percentage = float(_round_half_up(amount / total_amount, FOUR_PLACES) * 100)
        category = by_name.get(name)

        breakdown.append(
            CategorySummary(
                category_id=category.category_id if category else "",
                category_name=name,
                amount=amount,
                count=len(group),
                percentage=percentage,
                color=category.color if category else DEFAULT_COLOR,
                icon=category.icon if category else DEFAULT_ICON,
            )
        )

        if amount > top_category_amount:
            top_category = name
            top_category_amount = amount

    breakdown.sort(key=lambda item: item.amount, reverse=True)
    return breakdown, top_category, top_category_amount


def build_monthly_trends(expenses: Sequence[Expense], today: date) -> List[MonthlySummary]:
    buckets: Dict[Tuple[int, int], List[Expense]] = {}
    for expense in expenses:
        buckets.setdefault((expense.date.year, expense.date.month), []).append(expense)

    trends: List[MonthlySummary] = []
    for year, month in _trailing_months(today):
        month_expenses = buckets.get((year, month), [])
        amount = sum((e.amount for e in month_expenses), ZERO)
        average_daily = ZERO
        if month_expenses:
            days_in_month = calendar.monthrange(year, month)[1]
            average_daily = _round_half_up(amount / days_in_month, TWO_PLACES)
        trends.append(
            MonthlySummary(
                month_year=f"{year}-{month:02d}",
                amount=amount,
                count=len(month_expenses),
                average_daily=average_daily,
            )
        )
    return trends


def top_payees(expenses: Sequence[Expense], limit: int = TOP_PAYEES_LIMIT) -> List[str]:
    """Most frequent payees; equal counts keep first-seen order."""
    counts = Counter(e.payee for e in expenses if e.payee is not None)
    return [payee for payee, _ in counts.most_common(limit)]
