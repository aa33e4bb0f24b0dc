# app/crud/user.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, func
from app.models.user import User
from typing import Optional, List

async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()

async def get_user_by_id(user_id: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.user_id == user_id))
    return result.scalar_one_or_none()

async def user_id_exists(user_id: str, db: AsyncSession) -> bool:
    result = await db.execute(select(User.user_id).where(User.user_id == user_id))
    return result.first() is not None

async def email_exists(email: str, db: AsyncSession) -> bool:
    result = await db.execute(select(User.user_id).where(User.email == email))
    return result.first() is not None

async def get_active_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).where(User.is_active.is_(True)).order_by(User.created_at))
    return result.scalars().all()

async def save_user(user: User, db: AsyncSession) -> User:
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user

async def delete_user_by_id(user_id: str, db: AsyncSession) -> None:
    await db.execute(delete(User).where(User.user_id == user_id))
    await db.commit()

async def count_users(db: AsyncSession, active_only: bool = False, verified_only: bool = False) -> int:
    query = select(func.count()).select_from(User)
    if active_only:
        query = query.where(User.is_active.is_(True))
    if verified_only:
        query = query.where(User.email_verified.is_(True))
    result = await db.execute(query)
    return result.scalar_one()
