# app/schemas/category.py
from typing import Optional
from datetime import datetime
from pydantic import Field

from app.schemas.common import CamelModel

class CategoryBase(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=20)

class CategoryCreate(CategoryBase):
    pass

# PUT semantics: name is required, missing color/icon keep their current values
class CategoryUpdate(CategoryBase):
    pass

class CategoryRead(CamelModel):
    category_id: str
    user_id: str
    name: str
    description: Optional[str] = None
    color: str
    icon: str
    is_default: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
