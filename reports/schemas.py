from pydantic import BaseModel, Field
from typing import Optional, List


class ReportCreateSchema(BaseModel):
    title: str = Field(..., min_length=5, max_length=50)
    description: str = Field(..., min_length=5)
    address: str = Field(..., min_length=3)
    latitude: str = Field(..., min_length=1, max_length=255)
    longitude: str = Field(..., min_length=1, max_length=255)
    imageReport: Optional[List[str]] = None
    category: str = Field(..., min_length=1, max_length=255)


class AssignUnitWorkSchema(BaseModel):
    report_id: str = Field(..., min_length=1, max_length=255)
    unit_work_id: str = Field(..., min_length=1, max_length=255)


class OfficerDoneSchema(BaseModel):
    id_report: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    imageReport: List[str] = Field(..., min_length=1)


