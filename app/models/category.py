# app/models/category.py
import re
from datetime import datetime
from typing import List
from sqlalchemy import Column, String, Boolean, DateTime, UniqueConstraint
from app.core.database import Base

DEFAULT_COLOR = "#6366F1"
DEFAULT_ICON = "💰"

class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_id_name"),
    )

    category_id = Column(String(length=120), primary_key=True)
    user_id = Column(String(length=80), index=True, nullable=False)
    name = Column(String(length=50), nullable=False)
    description = Column(String(length=200), nullable=True)
    color = Column(String(length=20), nullable=False, default=DEFAULT_COLOR)
    icon = Column(String(length=20), nullable=False, default=DEFAULT_ICON)
    is_default = Column(Boolean(), nullable=False, default=False)  # True for the six seeded categories

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @staticmethod
    def generate_category_id(user_id: str, name: str) -> str:
        slug = re.sub(r"\s+", "_", name.lower())
        return f"{user_id}_{slug}"

    def __repr__(self):
        return f"<Category name={self.name} user_id={self.user_id}>"


# Default categories to be created for every new user
DEFAULT_CATEGORIES: List[dict] = [
    {"name": "Food", "description": "Food and dining expenses", "color": "#EF4444", "icon": "🍽️"},
    {"name": "Shopping", "description": "Shopping and retail purchases", "color": "#F59E0B", "icon": "🛒"},
    {"name": "Travel", "description": "Travel and transportation expenses", "color": "#10B981", "icon": "✈️"},
    {"name": "Bills", "description": "Utility bills and subscriptions", "color": "#8B5CF6", "icon": "📄"},
    {"name": "Entertainment", "description": "Entertainment and leisure activities", "color": "#EC4899", "icon": "🎬"},
    {"name": "Others", "description": "Miscellaneous expenses", "color": "#6B7280", "icon": "📦"},
]
