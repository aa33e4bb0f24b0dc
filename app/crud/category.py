# app/crud/category.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy import delete, func
from app.core.exceptions import ConflictError
from app.models.category import Category, DEFAULT_CATEGORIES, DEFAULT_COLOR, DEFAULT_ICON
from app.models.user import User
from typing import List, Optional
from app.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

async def get_categories_for_user(user_id: str, db: AsyncSession) -> List[Category]:
    result = await db.execute(
        select(Category).where(Category.user_id == user_id).order_by(Category.name)
    )
    return result.scalars().all()

async def get_category_by_id(category_id: str, db: AsyncSession) -> Optional[Category]:
    """Unscoped lookup; callers decide what a foreign owner means."""
    result = await db.execute(select(Category).where(Category.category_id == category_id))
    return result.scalar_one_or_none()

async def get_category_for_user(category_id: str, user_id: str, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.category_id == category_id, Category.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_category_by_name_for_user(name: str, user_id: str, db: AsyncSession) -> Optional[Category]:
    """Exact-name lookup of a category for a given user."""
    result = await db.execute(
        select(Category).where(Category.user_id == user_id, Category.name == name)
    )
    return result.scalar_one_or_none()

async def get_default_categories_for_user(user_id: str, db: AsyncSession) -> List[Category]:
    result = await db.execute(
        select(Category)
        .where(Category.user_id == user_id, Category.is_default.is_(True))
        .order_by(Category.name)
    )
    return result.scalars().all()

async def search_categories_by_name(user_id: str, term: str, db: AsyncSession) -> List[Category]:
    result = await db.execute(
        select(Category)
        .where(Category.user_id == user_id, func.lower(Category.name).contains(term.lower()))
        .order_by(Category.name)
    )
    return result.scalars().all()

async def count_categories_for_user(user_id: str, db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Category).where(Category.user_id == user_id))
    return result.scalar_one()

async def next_available_category_id(user_id: str, name: str, db: AsyncSession) -> str:
    """Derived id for (user, name); suffixed when a renamed category still holds it."""
    base_id = Category.generate_category_id(user_id, name)
    category_id = base_id
    counter = 2
    while await get_category_by_id(category_id, db) is not None:
        category_id = f"{base_id}_{counter}"
        counter += 1
    return category_id

async def create_category_for_user(user_id: str, cat_in: CategoryCreate, db: AsyncSession) -> Category:
    new_cat = Category(
        category_id=await next_available_category_id(user_id, cat_in.name, db),
        user_id=user_id,
        name=cat_in.name,
        description=cat_in.description,
        color=cat_in.color or DEFAULT_COLOR,
        icon=cat_in.icon or DEFAULT_ICON,
        is_default=False,
    )
    db.add(new_cat)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Category with name '{cat_in.name}' already exists")
    await db.refresh(new_cat)
    return new_cat

async def get_or_insert_category(user_id: str, name: str, description: str, db: AsyncSession) -> Category:
    """
    Insert-if-absent keyed on (user_id, name).

    The insert runs in a SAVEPOINT so that losing a race against a concurrent
    writer only rolls back the insert; the winner's row is then returned.
    """
    existing = await get_category_by_name_for_user(name, user_id, db)
    if existing is not None:
        return existing

    new_cat = Category(
        category_id=await next_available_category_id(user_id, name, db),
        user_id=user_id,
        name=name,
        description=description,
        color=DEFAULT_COLOR,
        icon=DEFAULT_ICON,
        is_default=False,
    )
    try:
        async with db.begin_nested():
            db.add(new_cat)
    except IntegrityError:
        logger.info(f"Category '{name}' for user {user_id} was created concurrently, reusing it")
        existing = await get_category_by_name_for_user(name, user_id, db)
        if existing is None:
            raise
        return existing

    await db.commit()
    await db.refresh(new_cat)
    return new_cat

async def update_category(category: Category, cat_in: CategoryUpdate, db: AsyncSession) -> Category:
    category.name = cat_in.name
    category.description = cat_in.description
    if cat_in.color is not None:
        category.color = cat_in.color
    if cat_in.icon is not None:
        category.icon = cat_in.icon
    db.add(category)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Category with name '{cat_in.name}' already exists")
    await db.refresh(category)
    return category

async def delete_category(category: Category, db: AsyncSession) -> None:
    await db.delete(category)
    await db.commit()

async def delete_categories_for_user(user_id: str, db: AsyncSession) -> int:
    result = await db.execute(delete(Category).where(Category.user_id == user_id))
    await db.commit()
    return result.rowcount

async def seed_default_categories_for_user(user_id: str, db: AsyncSession) -> List[Category]:
    """Ensure the user has the default categories; create missing ones.

    Returns the list of categories that were created (empty if none were needed).
    """
    result = await db.execute(select(Category.name).where(Category.user_id == user_id))
    existing_names = {row[0] for row in result.all()}

    categories_to_create: List[Category] = []
    for cat in DEFAULT_CATEGORIES:
        if cat["name"] not in existing_names:
            categories_to_create.append(
                Category(
                    category_id=await next_available_category_id(user_id, cat["name"], db),
                    user_id=user_id,
                    name=cat["name"],
                    description=cat["description"],
                    color=cat["color"],
                    icon=cat["icon"],
                    is_default=True,
                )
            )

    if categories_to_create:
        db.add_all(categories_to_create)
        await db.commit()
        for c in categories_to_create:
            await db.refresh(c)

    return categories_to_create

async def count_categories(db: AsyncSession, is_default: Optional[bool] = None) -> int:
    query = select(func.count()).select_from(Category)
    if is_default is not None:
        query = query.where(Category.is_default.is_(is_default))
    result = await db.execute(query)
    return result.scalar_one()

async def count_orphaned_categories(db: AsyncSession) -> int:
    """Categories whose owner no longer exists."""
    result = await db.execute(
        select(func.count())
        .select_from(Category)
        .where(Category.user_id.not_in(select(User.user_id)))
    )
    return result.scalar_one()
