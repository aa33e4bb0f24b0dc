# app/services/accounts.py
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidRequestError, NotFoundError, UnauthorizedError
from app.core.security import CredentialService, get_password_hash, verify_password
from app.crud.category import count_categories_for_user, delete_categories_for_user, seed_default_categories_for_user
from app.crud.expense import count_expenses_for_user, sum_expenses_for_user
from app.crud.user import (
    delete_user_by_id,
    email_exists,
    get_active_users,
    get_user_by_email,
    get_user_by_id,
    save_user,
    user_id_exists,
)
from app.models.user import User
from app.schemas.user import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    TokenValidationResponse,
    UserInfo,
    UserStats,
    UserUpdate,
)

logger = logging.getLogger(__name__)

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


# ────────────────────────────────────────────────────────────────────────────────
# AUTHENTICATION
# ────────────────────────────────────────────────────────────────────────────────
async def generate_unique_user_id(email: str, db: AsyncSession) -> str:
    base_user_id = User.generate_user_id_from_email(email)
    user_id = base_user_id
    counter = 1
    while await user_id_exists(user_id, db):
        user_id = f"{base_user_id}{counter}"
        counter += 1
    return user_id


async def create_user(
    name: str,
    email: str,
    password: str,
    db: AsyncSession,
    role: str = ROLE_USER,
) -> User:
    if await email_exists(email, db):
        raise ConflictError("User with this email already exists")

    user = User(
        user_id=await generate_unique_user_id(email, db),
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        role=role,
        is_active=True,
        email_verified=False,
    )
    user = await save_user(user, db)
    logger.info(f"User created: {user.user_id} ({role})")
    return user


async def register_user(req: RegisterRequest, credentials: CredentialService, db: AsyncSession) -> AuthResponse:
    """
    Create the account, seed its default categories and sign the user in.

    A seeding failure never fails registration; the user can call
    /categories/initialize-defaults later.
    """
    if req.password != req.confirm_password:
        raise InvalidRequestError("Passwords do not match")

    user = await create_user(req.name, req.email, req.password, db)
    user_info = UserInfo.model_validate(user)
    issued = credentials.issue(user.user_id, user.email, user.role)

    try:
        created = await seed_default_categories_for_user(user_info.user_id, db)
        logger.info(f"Seeded {len(created)} default categories for user {user_info.user_id}")
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning(f"Failed to seed default categories for user {user_info.user_id}: {str(e)}")

    return AuthResponse(
        token=issued.token,
        expires_in=issued.expires_in,
        user=user_info,
        message="User registered successfully",
    )


async def authenticate_user(req: LoginRequest, credentials: CredentialService, db: AsyncSession) -> AuthResponse:
    user = await get_user_by_email(req.email, db)
    if user is None or not verify_password(req.password, user.hashed_password):
        logger.info(f"Failed login attempt for {req.email}")
        raise UnauthorizedError("Invalid email or password")
    if not user.is_account_valid:
        raise UnauthorizedError("Account is inactive")

    user.last_login = datetime.now()
    user = await save_user(user, db)
    issued = credentials.issue(user.user_id, user.email, user.role)
    logger.info(f"User logged in: {user.user_id}")

    return AuthResponse(
        token=issued.token,
        expires_in=issued.expires_in,
        user=UserInfo.model_validate(user),
        message="Login successful",
    )


async def validate_token(token: Optional[str], credentials: CredentialService, db: AsyncSession) -> TokenValidationResponse:
    claims = credentials.validate(token) if token else None
    if claims is None:
        return TokenValidationResponse(valid=False, message="Invalid or expired token")

    user = await get_user_by_id(claims.user_id, db)
    if user is None or not user.is_account_valid:
        return TokenValidationResponse(valid=False, message="User not found or inactive")

    return TokenValidationResponse(valid=True, message="Token is valid", user=UserInfo.model_validate(user))


async def change_password(user: User, req: ChangePasswordRequest, db: AsyncSession) -> None:
    if not verify_password(req.current_password, user.hashed_password):
        raise InvalidRequestError("Current password is incorrect")
    if req.new_password != req.confirm_password:
        raise InvalidRequestError("New passwords do not match")

    user.hashed_password = get_password_hash(req.new_password)
    await save_user(user, db)
    logger.info(f"Password changed for user {user.user_id}")


# ────────────────────────────────────────────────────────────────────────────────
# PROFILE & LIFECYCLE
# ────────────────────────────────────────────────────────────────────────────────
async def update_user(user: User, req: UserUpdate, db: AsyncSession) -> User:
    if req.email != user.email and await email_exists(req.email, db):
        raise ConflictError("Email is already in use")

    user.name = req.name
    user.email = req.email
    user = await save_user(user, db)
    logger.info(f"Profile updated for user {user.user_id}")
    return user


async def delete_user(user_id: str, db: AsyncSession) -> None:
    """
    Hard-delete a user. Their categories go too (best effort); their
    expenses are left behind and show up in the admin integrity report.
    """
    if await get_user_by_id(user_id, db) is None:
        raise NotFoundError(f"User not found: {user_id}")

    try:
        removed = await delete_categories_for_user(user_id, db)
        logger.info(f"Deleted {removed} categories of user {user_id}")
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to delete categories of user {user_id}: {str(e)}")

    await delete_user_by_id(user_id, db)
    logger.info(f"User deleted: {user_id}")


async def set_user_active(user_id: str, active: bool, db: AsyncSession) -> User:
    user = await get_user_by_id(user_id, db)
    if user is None:
        raise NotFoundError(f"User not found: {user_id}")
    if bool(user.is_active) == active:
        state = "active" if active else "deactivated"
        raise InvalidRequestError(f"Account is already {state}")

    user.is_active = active
    user = await save_user(user, db)
    logger.info(f"User {user_id} {'reactivated' if active else 'deactivated'}")
    return user


async def list_active_users(db: AsyncSession) -> List[User]:
    return await get_active_users(db)


async def get_user_stats(user: User, db: AsyncSession) -> UserStats:
    return UserStats(
        user_id=user.user_id,
        name=user.name,
        email=user.email,
        is_active=user.is_active,
        created_at=user.created_at,
        category_count=await count_categories_for_user(user.user_id, db),
        expense_count=await count_expenses_for_user(user.user_id, db),
        total_expenses=await sum_expenses_for_user(user.user_id, db),
    )
