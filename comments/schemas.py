from pydantic import BaseModel, Field


class CommentCreateSchema(BaseModel):
    id_report: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
