"""Survey service - Business logic for survey operations"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...analytics.bucketing import parse_timestamp
from ...models import Business, Survey, SurveyResponse
from ..customers.service import CustomerService
from .repository import SurveyRepository
from .schemas import (
    PublicSurveyResponse,
    SubmissionCreate,
    SurveyCreate,
    SurveyResponseModel,
    SurveyUpdate,
)

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "title": "title",
    "description": "description",
    "welcomeMessage": "welcome_message",
    "completionMessage": "completion_message",
    "questions": "questions",
    "status": "status",
    "expiresAt": "expires_at",
}


def expiry_passed(expires_at, now: Optional[datetime] = None) -> bool:
    expires_at = parse_timestamp(expires_at)
    if expires_at is None:
        return False
    return expires_at <= (now or datetime.now(timezone.utc))


def is_expired(survey: Survey, now: Optional[datetime] = None) -> bool:
    return expiry_passed(survey.expires_at, now)


def to_survey_response(survey: Survey, response_count: int = 0) -> SurveyResponseModel:
    return SurveyResponseModel(
        id=survey.id,
        public_id=survey.public_id,
        title=survey.title,
        description=survey.description,
        status=survey.status,
        welcome_message=survey.welcome_message,
        completion_message=survey.completion_message,
        questions=survey.questions or [],
        expires_at=survey.expires_at,
        created_at=survey.created_at,
        response_count=response_count,
    )


class SurveyService:
    """Service layer for survey business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SurveyRepository()
        self.customers = CustomerService(db)

    def get_surveys(self, business: Business) -> list[SurveyResponseModel]:
        return [to_survey_response(survey, count) for survey, count in self.repo.get_surveys(self.db, business.id)]

    def get_survey(self, survey_id: int, business: Business) -> Survey:
        survey = self.repo.get_survey_by_id(self.db, survey_id, business.id)
        if not survey:
            raise HTTPException(status_code=404, detail="Survey not found")
        return survey

    def get_survey_detail(self, survey_id: int, business: Business) -> SurveyResponseModel:
        survey = self.get_survey(survey_id, business)
        return to_survey_response(survey, self.repo.count_responses(self.db, survey.id))

    def create_survey(self, data: SurveyCreate, business: Business) -> SurveyResponseModel:
        logger.info(f"📝 Creating survey for business_id: {business.id}")
        survey_data = {
            FIELD_MAP[key]: value for key, value in data.model_dump().items() if key in FIELD_MAP
        }
        survey = self.repo.create_survey(self.db, business.id, status="draft", **survey_data)
        return to_survey_response(survey)

    def update_survey(self, survey_id: int, data: SurveyUpdate, business: Business) -> SurveyResponseModel:
        survey = self.get_survey(survey_id, business)
        updates = {FIELD_MAP[key]: value for key, value in data.model_dump(exclude_unset=True).items()}

        # Same rule as set_status, against the expiry this update leaves behind
        if updates.get("status") == "active" and expiry_passed(updates.get("expires_at", survey.expires_at)):
            raise HTTPException(status_code=400, detail="Cannot open an expired survey")

        survey = self.repo.update_survey(self.db, survey, **updates)
        return to_survey_response(survey, self.repo.count_responses(self.db, survey.id))

    def delete_survey(self, survey_id: int, business: Business) -> dict:
        survey = self.get_survey(survey_id, business)
        self.repo.delete_survey(self.db, survey)
        logger.info(f"🗑️ Deleted survey {survey_id} for business {business.id}")
        return {"message": "Survey deleted"}

    def set_status(self, survey_id: int, status: str, business: Business) -> SurveyResponseModel:
        """Open (active) or close (completed) a survey"""
        survey = self.get_survey(survey_id, business)
        if status == "active" and is_expired(survey):
            raise HTTPException(status_code=400, detail="Cannot open an expired survey")

        logger.info(f"🔄 Survey {survey_id} status: {survey.status} -> {status}")
        survey = self.repo.update_survey(self.db, survey, status=status)
        return to_survey_response(survey, self.repo.count_responses(self.db, survey.id))

    def get_responses(self, survey_id: int, business: Business) -> list[SurveyResponse]:
        survey = self.get_survey(survey_id, business)
        return self.repo.get_responses(self.db, survey.id)

    # Public (respondent-facing) operations
    def get_open_survey(self, public_id: str) -> Survey:
        """An active, unexpired survey by public id, else 404"""
        survey = self.repo.get_survey_by_public_id(self.db, public_id)
        if not survey or survey.status != "active" or is_expired(survey):
            raise HTTPException(status_code=404, detail="Survey not found")
        return survey

    def get_public_survey(self, public_id: str) -> PublicSurveyResponse:
        survey = self.get_open_survey(public_id)
        return PublicSurveyResponse(
            public_id=survey.public_id,
            title=survey.title,
            description=survey.description,
            welcome_message=survey.welcome_message,
            completion_message=survey.completion_message,
            questions=survey.questions or [],
        )

    def submit_response(self, public_id: str, data: SubmissionCreate) -> dict:
        survey = self.get_open_survey(public_id)

        customer = None
        if data.customerInfo and data.customerInfo.email:
            customer = self.customers.upsert_from_survey(
                survey.business_id, data.customerInfo.model_dump(exclude_none=True)
            )

        response = self.repo.create_response(
            self.db, survey, data.answers, customer_id=customer.id if customer else None
        )
        logger.info(f"✅ Stored response {response.id} for survey {survey.id}")
        return {"success": True, "responseId": response.id}
