"""Survey router - FastAPI endpoints for survey operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_business
from ...database import get_db
from ...models import Business
from .schemas import (
    PublicSurveyResponse,
    SubmissionCreate,
    SubmissionResponse,
    SurveyCreate,
    SurveyResponseModel,
    SurveyUpdate,
)
from .service import SurveyService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/surveys", tags=["Surveys"])


def get_survey_service(db: Session = Depends(get_db)) -> SurveyService:
    """Dependency injection for SurveyService"""
    return SurveyService(db)


# ============================================================================
# PUBLIC ROUTES (no tenant header; addressed by public id)
# ============================================================================


@router.get("/public/{public_id}", response_model=PublicSurveyResponse)
async def get_public_survey(
    public_id: str,
    service: SurveyService = Depends(get_survey_service),
):
    """Get an open survey for a respondent"""
    return service.get_public_survey(public_id)


@router.post("/public/{public_id}/responses", status_code=201)
async def submit_survey_response(
    public_id: str,
    data: SubmissionCreate,
    service: SurveyService = Depends(get_survey_service),
):
    """Submit answers to an open survey"""
    return service.submit_response(public_id, data)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[SurveyResponseModel])
async def get_surveys(
    business: Business = Depends(get_current_business),
    service: SurveyService = Depends(get_survey_service),
):
    """Get all surveys for the current business"""
    return service.get_surveys(business)


@router.get("/{survey_id}", response_model=SurveyResponseModel)
async def get_survey(
    survey_id: int,
    business: Business = Depends(get_current_business),
    service: SurveyService = Depends(get_survey_service),
):
    return service.get_survey_detail(survey_id, business)


@router.post("", response_model=SurveyResponseModel, status_code=201)
async def create_survey(
    data: SurveyCreate,
    business: Business = Depends(get_current_business),
    service: SurveyService = Depends(get_survey_service),
):
    return service.create_survey(data, business)


@router.patch("/{survey_id}", response_model=SurveyResponseModel)
async def update_survey(
    survey_id: int,
    data: SurveyUpdate,
    business: Business = Depends(get_current_business),
    service: SurveyService = Depends(get_survey_service),
):
    return service.update_survey(survey_id, data, business)


@router.delete("/{survey_id}")
async def delete_survey(
    survey_id: int,
    business: Business = Depends(get_current_business),
    service: SurveyService = Depends(get_survey_service),
):
    return service.delete_survey(survey_id, business)


@router.post("/{survey_id}/open", response_model=SurveyResponseModel)
async def open_survey(
    survey_id: int,
    business: Business = Depends(get_current_business),
    service: SurveyService = Depends(get_survey_service),
):
    """Start accepting responses"""
    return service.set_status(survey_id, "active", business)


@router.post("/{survey_id}/close", response_model=SurveyResponseModel)
async def close_survey(
    survey_id: int,
    business: Business = Depends(get_current_business),
    service: SurveyService = Depends(get_survey_service),
):
    """Stop accepting responses"""
    return service.set_status(survey_id, "completed", business)


@router.get("/{survey_id}/responses", response_model=list[SubmissionResponse])
async def get_survey_responses(
    survey_id: int,
    business: Business = Depends(get_current_business),
    service: SurveyService = Depends(get_survey_service),
):
    return service.get_responses(survey_id, business)
