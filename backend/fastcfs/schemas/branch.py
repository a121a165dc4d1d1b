"""Pydantic schemas for Branch CRUD operations."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class BranchCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    incharge: str = "Unknown"
    location: str | None = None
    is_main_office: bool = False
    is_active: bool = True


class BranchUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = None
    city: str | None = None
    country: str | None = None
    phone: str | None = None
    email: EmailStr | None = None
    incharge: str | None = None
    location: str | None = None
    is_main_office: bool | None = None
    is_active: bool | None = None


class BranchOut(BaseModel):
    id: int
    name: str
    address: str
    city: str
    country: str
    phone: str
    email: str
    incharge: str
    location: str | None
    is_main_office: bool
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class BranchListOut(BaseModel):
    branches: list[BranchOut]
    total: int
