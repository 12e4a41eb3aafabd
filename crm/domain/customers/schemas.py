"""Customer domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import validate_email, validate_phone


class CustomerCreate(BaseModel):
    """Schema for creating a new customer"""

    name: str = Field(min_length=1, max_length=255)
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=150)
    preferences: Optional[dict] = None
    notes: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if not v or not v.strip():
            raise ValueError("Email is required")
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_phone(v)
        return v


class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=150)
    preferences: Optional[dict] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is None:
            raise ValueError("Name cannot be null")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if not v or not v.strip():
            raise ValueError("Email is required")
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_phone(v)
        return v


class CustomerResponse(BaseModel):
    """Schema for customer response"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    age: Optional[int] = None
    preferences: Optional[dict] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
