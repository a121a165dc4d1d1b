from datetime import datetime

from pydantic import BaseModel, Field


class TestimonialCreate(BaseModel):
    """Submitted from the public site; always stored unapproved."""
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_location: str | None = Field(None, max_length=255)
    content: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)


class TestimonialOut(BaseModel):
    id: int
    customer_name: str
    customer_location: str | None
    content: str
    rating: int
    is_approved: bool
    created_at: datetime

    model_config = {"from_attributes": True}
