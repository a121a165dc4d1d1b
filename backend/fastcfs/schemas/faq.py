from datetime import datetime

from pydantic import BaseModel, Field


class FaqCreate(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    is_active: bool = True


class FaqUpdate(BaseModel):
    question: str | None = Field(None, min_length=1)
    answer: str | None = Field(None, min_length=1)
    is_active: bool | None = None


class FaqOut(BaseModel):
    id: int
    question: str
    answer: str
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
