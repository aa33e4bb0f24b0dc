# app/api/v1/routes/admin.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.core.database import get_async_session
from app.schemas.admin import CollectionStats, IntegrityReport
from app.schemas.user import UserInfo
from app.services import accounts
from app.services.admin import build_collection_stats, build_integrity_report

# Every route here requires the ADMIN role
router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])

@router.get("/integrity", response_model=IntegrityReport)
async def check_integrity(db: AsyncSession = Depends(get_async_session)):
    """Report categories and expenses whose owner or category has gone away."""
    return await build_integrity_report(db)

@router.get("/stats", response_model=CollectionStats)
async def collection_stats(db: AsyncSession = Depends(get_async_session)):
    return await build_collection_stats(db)

@router.get("/users/active", response_model=List[UserInfo])
async def list_active_users(db: AsyncSession = Depends(get_async_session)):
    return await accounts.list_active_users(db)

@router.put("/users/{user_id}/deactivate", response_model=UserInfo)
async def deactivate_user(user_id: str, db: AsyncSession = Depends(get_async_session)):
    return await accounts.set_user_active(user_id, False, db)

@router.put("/users/{user_id}/reactivate", response_model=UserInfo)
async def reactivate_user(user_id: str, db: AsyncSession = Depends(get_async_session)):
    return await accounts.set_user_active(user_id, True, db)

@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, db: AsyncSession = Depends(get_async_session)):
    await accounts.delete_user(user_id, db)
    return None
