# app/services/category_resolver.py
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidRequestError, NotFoundError
from app.crud.category import get_category_by_id, get_or_insert_category
from app.models.category import Category

logger = logging.getLogger(__name__)

AUTO_CREATED_DESCRIPTION = "Auto-created category"

async def resolve_category(
    user_id: str,
    category_id: Optional[str],
    category_name: Optional[str],
    db: AsyncSession,
) -> Category:
    """
    Decide which category an expense write belongs to.

    A category id takes precedence over a name. Unknown ids and ids owned by
    another user fail identically so other users' ids are never confirmed.
    A name with no matching category creates one on the fly; a blank name
    counts as no name at all.
    """
    if category_id:
        category = await get_category_by_id(category_id, db)
        if category is None or category.user_id != user_id:
            raise NotFoundError(f"Invalid category ID: {category_id}")
        return category

    category_name = (category_name or "").strip()
    if category_name:
        category = await get_or_insert_category(user_id, category_name, AUTO_CREATED_DESCRIPTION, db)
        logger.debug(f"Resolved category '{category_name}' to {category.category_id} for user {user_id}")
        return category

    raise InvalidRequestError("Category is required")
