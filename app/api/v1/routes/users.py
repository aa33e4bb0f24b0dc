# app/api/v1/routes/users.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.core.database import get_async_session
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import UserInfo, UserStats, UserUpdate
from app.services import accounts

router = APIRouter(prefix="/users", tags=["User Management"])

# 1) GET /users/me
@router.get("/me", response_model=UserInfo)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return user

# 2) PUT /users/me
@router.put("/me", response_model=UserInfo)
async def update_own_profile(
    user_update: UserUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Update current user's name and email"""
    return await accounts.update_user(user, user_update, db)

# 3) DELETE /users/me
@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_own_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Delete current user's account permanently"""
    await accounts.delete_user(user.user_id, db)
    return None

# 4) POST /users/me/deactivate
@router.post("/me/deactivate", response_model=MessageResponse)
async def deactivate_account(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Deactivate current user account (soft delete)"""
    await accounts.set_user_active(user.user_id, False, db)
    return MessageResponse(message="Account deactivated successfully")

# 5) GET /users/me/stats
@router.get("/me/stats", response_model=UserStats)
async def read_own_stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await accounts.get_user_stats(user, db)
