# app/core/security.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from .config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_in: int  # seconds


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: Optional[str]
    role: Optional[str]


class CredentialService:
    """
    Issues and validates signed bearer tokens carrying userId, email and role.
    Callers treat the token as opaque; only this class knows it is a JWT.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        lifetime_seconds: int = 86400,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime_seconds = lifetime_seconds

    def issue(self, user_id: str, email: str, role: str, expires_delta: Optional[timedelta] = None) -> IssuedToken:
        now = datetime.now(timezone.utc)
        lifetime = expires_delta if expires_delta is not None else timedelta(seconds=self.lifetime_seconds)
        payload = {
            "sub": user_id,
            "userId": user_id,
            "email": email,
            "role": role,
            "iat": now,
            "exp": now + lifetime,
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_in=int(lifetime.total_seconds()))

    def validate(self, token: str) -> Optional[TokenClaims]:
        """Return the token's claims, or None when it is malformed, tampered or expired."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected invalid token: {str(e)}")
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None
        return TokenClaims(user_id=user_id, email=payload.get("email"), role=payload.get("role"))


def get_credential_service() -> CredentialService:
    return CredentialService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
