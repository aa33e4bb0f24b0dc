# app/services/admin.py
import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.category import count_categories, count_orphaned_categories
from app.crud.expense import (
    count_by_payment_method,
    count_expenses,
    count_orphaned_expenses_by_category,
    count_orphaned_expenses_by_user,
    sum_expenses,
)
from app.crud.user import count_users
from app.schemas.admin import CategoryCounts, CollectionStats, ExpenseCounts, IntegrityReport, UserCounts

logger = logging.getLogger(__name__)

UNSPECIFIED_PAYMENT_METHOD = "Unspecified"


async def build_integrity_report(db: AsyncSession) -> IntegrityReport:
    """Count dangling references. Nothing is repaired."""
    report = IntegrityReport(
        orphaned_categories=await count_orphaned_categories(db),
        orphaned_expenses_by_user=await count_orphaned_expenses_by_user(db),
        orphaned_expenses_by_category=await count_orphaned_expenses_by_category(db),
    )
    logger.info(
        f"Integrity check: {report.orphaned_categories} orphaned categories, "
        f"{report.orphaned_expenses_by_user} expenses without user, "
        f"{report.orphaned_expenses_by_category} expenses without category"
    )
    return report


async def build_collection_stats(db: AsyncSession) -> CollectionStats:
    total_users = await count_users(db)
    total_categories = await count_categories(db)
    default_categories = await count_categories(db, is_default=True)
    total_expenses = await count_expenses(db)
    total_amount = await sum_expenses(db)

    average_amount = Decimal("0.00")
    if total_expenses:
        average_amount = (total_amount / total_expenses).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    payment_methods = {}
    for method, count in await count_by_payment_method(db):
        key = method or UNSPECIFIED_PAYMENT_METHOD
        payment_methods[key] = payment_methods.get(key, 0) + count

    return CollectionStats(
        users=UserCounts(
            total_users=total_users,
            active_users=await count_users(db, active_only=True),
            verified_users=await count_users(db, verified_only=True),
        ),
        categories=CategoryCounts(
            total_categories=total_categories,
            default_categories=default_categories,
            custom_categories=total_categories - default_categories,
        ),
        expenses=ExpenseCounts(
            total_expenses=total_expenses,
            total_amount=total_amount,
            average_amount=average_amount,
            payment_methods=payment_methods,
        ),
    )
