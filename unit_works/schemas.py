from pydantic import BaseModel, Field
from typing import Optional, List
from uuid import UUID
from datetime import datetime


class UnitWorkCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    image: Optional[List[str]] = []
    detail: str = Field(..., min_length=1, max_length=255)


class UnitWorkResponse(BaseModel):
    id: UUID
    name: str
    image: List[str] = []
    detail: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
