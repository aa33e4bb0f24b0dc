# app/api/v1/routes/categories.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.crud.category import (
    count_categories_for_user,
    get_categories_for_user,
    get_default_categories_for_user,
    search_categories_by_name,
)
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user
from app.services import categories as category_service

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=List[CategoryRead])
async def read_categories(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_categories_for_user(user.user_id, db)

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    cat_in: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await category_service.create_category(user.user_id, cat_in, db)

@router.get("/defaults", response_model=List[CategoryRead])
async def read_default_categories(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_default_categories_for_user(user.user_id, db)

@router.post("/initialize-defaults", response_model=List[CategoryRead], status_code=status.HTTP_201_CREATED)
async def initialize_default_categories(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Create whichever default categories the user is missing; safe to call repeatedly."""
    return await category_service.initialize_default_categories(user.user_id, db)

@router.get("/search", response_model=List[CategoryRead])
async def search_categories(
    query: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await search_categories_by_name(user.user_id, query, db)

@router.get("/count", response_model=int)
async def count_categories(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await count_categories_for_user(user.user_id, db)

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(
    category_id: str,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await category_service.get_owned_category(user.user_id, category_id, db)

@router.put("/{category_id}", response_model=CategoryRead)
async def update_category_endpoint(
    category_id: str,
    cat_in: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await category_service.rename_category(user.user_id, category_id, cat_in, db)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_endpoint(
    category_id: str,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    await category_service.remove_category(user.user_id, category_id, db)
    return None
