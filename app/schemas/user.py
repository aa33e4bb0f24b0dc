# app/schemas/user.py
import re
from typing import Optional
from datetime import datetime
from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel, Money

PASSWORD_RULE = re.compile(r"^(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z])(?=.*[@#$%^&+=]).*$")
PASSWORD_RULE_MESSAGE = (
    "Password must contain at least one digit, one lowercase letter, "
    "one uppercase letter, and one special character"
)

def _check_password_strength(value: str) -> str:
    if not PASSWORD_RULE.match(value):
        raise ValueError(PASSWORD_RULE_MESSAGE)
    return value

class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    confirm_password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return _check_password_strength(value)

class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=100)
    confirm_password: str = Field(..., min_length=1)

    @field_validator("new_password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return _check_password_strength(value)

class TokenValidationRequest(CamelModel):
    token: Optional[str] = None

# Public fields returned for the current user
class UserInfo(CamelModel):
    user_id: str
    name: str
    email: EmailStr
    role: str
    email_verified: bool
    is_active: bool
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

class AuthResponse(CamelModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserInfo
    message: str

class TokenValidationResponse(CamelModel):
    valid: bool
    message: str
    user: Optional[UserInfo] = None

# Fields accepted on PUT /users/me
class UserUpdate(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr

class UserStats(CamelModel):
    user_id: str
    name: str
    email: EmailStr
    is_active: bool
    created_at: Optional[datetime] = None
    category_count: int
    expense_count: int
    total_expenses: Money
