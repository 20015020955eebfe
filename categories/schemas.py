from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Optional


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=3)
    image: str = Field(..., min_length=1)


class CategoryResponse(BaseModel):
    id: UUID
    name: str
    image: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
