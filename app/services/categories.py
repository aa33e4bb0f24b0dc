# app/services/categories.py
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidRequestError, NotFoundError
from app.crud.category import (
    create_category_for_user,
    delete_category,
    get_category_by_name_for_user,
    get_category_for_user,
    get_default_categories_for_user,
    seed_default_categories_for_user,
    update_category,
)
from app.models.category import Category
from app.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


async def get_owned_category(user_id: str, category_id: str, db: AsyncSession) -> Category:
    category = await get_category_for_user(category_id, user_id, db)
    if category is None:
        raise NotFoundError(f"Category not found: {category_id}")
    return category


async def create_category(user_id: str, cat_in: CategoryCreate, db: AsyncSession) -> Category:
    if await get_category_by_name_for_user(cat_in.name, user_id, db) is not None:
        raise ConflictError(f"Category with name '{cat_in.name}' already exists")

    category = await create_category_for_user(user_id, cat_in, db)
    logger.info(f"Category created: {category.category_id}")
    return category


async def rename_category(user_id: str, category_id: str, cat_in: CategoryUpdate, db: AsyncSession) -> Category:
    category = await get_owned_category(user_id, category_id, db)

    if cat_in.name != category.name:
        clash = await get_category_by_name_for_user(cat_in.name, user_id, db)
        if clash is not None:
            raise ConflictError(f"Category with name '{cat_in.name}' already exists")

    category = await update_category(category, cat_in, db)
    logger.info(f"Category updated: {category.category_id}")
    return category


async def remove_category(user_id: str, category_id: str, db: AsyncSession) -> None:
    """Expenses that reference the category keep their copied name and dangling id."""
    category = await get_owned_category(user_id, category_id, db)
    if category.is_default:
        raise InvalidRequestError("Default categories cannot be deleted")

    await delete_category(category, db)
    logger.info(f"Category deleted: {category_id}")


async def initialize_default_categories(user_id: str, db: AsyncSession) -> List[Category]:
    created = await seed_default_categories_for_user(user_id, db)
    logger.info(f"Initialized {len(created)} default categories for user {user_id}")
    return await get_default_categories_for_user(user_id, db)
