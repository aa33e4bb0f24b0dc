# app/api/deps.py
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_async_session
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.security import CredentialService, get_credential_service
from app.crud.user import get_user_by_id
from app.models.user import User
from app.services.accounts import ROLE_ADMIN

# Security scheme (auto_error off so missing tokens go through our own 401)
optional_security = HTTPBearer(auto_error=False)


def extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """
    Find the bearer token in:
    - Authorization header
    - access_token cookie
    """
    if credentials and credentials.credentials:
        return credentials.credentials

    token = request.cookies.get("access_token")
    # Remove "Bearer " prefix if present in cookie
    if token and token.startswith("Bearer "):
        token = token[7:]
    return token or None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    credential_service: CredentialService = Depends(get_credential_service),
) -> User:
    token = extract_token(request, credentials)
    if not token:
        raise UnauthorizedError("Not authenticated")

    claims = credential_service.validate(token)
    if claims is None:
        raise UnauthorizedError("Invalid or expired token")

    user = await get_user_by_id(claims.user_id, db)
    if user is None:
        raise UnauthorizedError("User not found")
    if not user.is_account_valid:
        raise UnauthorizedError("Inactive user")

    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != ROLE_ADMIN:
        raise ForbiddenError("Administrator role required")
    return user
