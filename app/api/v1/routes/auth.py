# app/api/v1/routes/auth.py
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import extract_token, get_current_user, optional_security
from app.core.database import get_async_session
from app.core.security import CredentialService, get_credential_service
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    TokenValidationRequest,
    TokenValidationResponse,
    UserInfo,
)
from app.services import accounts

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    db: AsyncSession = Depends(get_async_session),
    credential_service: CredentialService = Depends(get_credential_service),
):
    """Create an account, seed default categories and return a bearer token."""
    return await accounts.register_user(req, credential_service, db)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
    credential_service: CredentialService = Depends(get_credential_service),
):
    return await accounts.authenticate_user(req, credential_service, db)


@router.post("/validate", response_model=TokenValidationResponse)
async def validate(
    request: Request,
    req: Optional[TokenValidationRequest] = None,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: AsyncSession = Depends(get_async_session),
    credential_service: CredentialService = Depends(get_credential_service),
):
    """
    Check a token sent in the body or the Authorization header.
    Invalid tokens answer 401 with the same body shape.
    """
    token = (req.token if req else None) or extract_token(request, credentials)
    result = await accounts.validate_token(token, credential_service, db)
    if not result.valid:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=result.model_dump(mode="json", by_alias=True),
        )
    return result


@router.get("/me", response_model=UserInfo)
async def me(user: User = Depends(get_current_user)):
    return user


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    req: ChangePasswordRequest,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    await accounts.change_password(user, req, db)
    return MessageResponse(message="Password changed successfully")


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """
    Logout endpoint that doesn't require authentication.
    Tokens are stateless; this only clears the access token cookie if present.
    """
    response.delete_cookie(key="access_token")
    return MessageResponse(message="Successfully logged out")
