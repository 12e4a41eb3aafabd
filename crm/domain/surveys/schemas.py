"""Survey domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...analytics.bucketing import parse_timestamp
from ...shared.validators import validate_email, validate_questions

SurveyStatus = Literal["draft", "active", "completed"]


class SurveyCreate(BaseModel):
    """Schema for creating a new survey"""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    welcomeMessage: Optional[str] = None
    completionMessage: Optional[str] = None
    questions: list[dict[str, Any]]
    expiresAt: Optional[datetime] = None

    @field_validator("questions")
    @classmethod
    def check_questions(cls, v):
        return validate_questions(v)

    @field_validator("expiresAt")
    @classmethod
    def check_expires_at(cls, v):
        return parse_timestamp(v)


class SurveyUpdate(BaseModel):
    """Schema for updating an existing survey"""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    welcomeMessage: Optional[str] = None
    completionMessage: Optional[str] = None
    questions: Optional[list[dict[str, Any]]] = None
    status: Optional[SurveyStatus] = None
    expiresAt: Optional[datetime] = None

    @field_validator("title", "questions", "status")
    @classmethod
    def check_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("questions")
    @classmethod
    def check_questions(cls, v):
        if v is not None:
            return validate_questions(v)
        return v

    @field_validator("expiresAt")
    @classmethod
    def check_expires_at(cls, v):
        # stored as UTC; SQLite drops the offset of aware values
        return parse_timestamp(v)


class SurveyResponseModel(BaseModel):
    """Schema for survey response (the survey itself, not a submission)"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    public_id: str
    title: str
    description: Optional[str] = None
    status: str
    welcome_message: Optional[str] = None
    completion_message: Optional[str] = None
    questions: list[dict[str, Any]]
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    response_count: int = 0


class PublicSurveyResponse(BaseModel):
    """What respondents see; no tenant or status details"""

    public_id: str
    title: str
    description: Optional[str] = None
    welcome_message: Optional[str] = None
    completion_message: Optional[str] = None
    questions: list[dict[str, Any]]


class CustomerInfo(BaseModel):
    """Optional contact details left by a respondent"""

    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=150)
    notes: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if v:
            return validate_email(v)
        return v


class SubmissionCreate(BaseModel):
    """Schema for a public survey submission"""

    answers: dict[str, Any]
    customerInfo: Optional[CustomerInfo] = None

    @field_validator("answers")
    @classmethod
    def check_answers(cls, v):
        if not v:
            raise ValueError("Answers are required")
        return v


class SubmissionResponse(BaseModel):
    """Schema for a stored survey submission"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    survey_id: int
    customer_id: Optional[int] = None
    answers: dict[str, Any]
    submitted_at: Optional[datetime] = None
