# app/models/user.py
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime
from app.core.database import Base

class User(Base):
    __tablename__ = "users"

    # Derived from the email local-part, see generate_user_id_from_email
    user_id = Column(String(length=80), primary_key=True)
    name = Column(String(length=100), nullable=False)
    email = Column(String(length=255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String(length=20), nullable=False, default="USER")
    is_active = Column(Boolean, default=True, nullable=False)
    email_verified = Column(Boolean, default=False, nullable=False)
    last_login = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    # Categories and expenses reference user_id without a foreign key: deleting
    # a user removes categories explicitly and leaves expenses in place.

    @property
    def is_account_valid(self) -> bool:
        return bool(self.is_active)

    @staticmethod
    def generate_user_id_from_email(email: str) -> str:
        return email.split("@")[0].lower()

    def __repr__(self):
        return f"<User user_id={self.user_id} email={self.email}>"
