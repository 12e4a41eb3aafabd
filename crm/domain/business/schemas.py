"""Business settings schemas"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import validate_email, validate_phone


class BusinessSettings(BaseModel):
    """Profile details shown to the business owner"""

    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str
    website: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class BusinessSettingsUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = None
    website: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

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
