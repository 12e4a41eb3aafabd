"""Survey repository - Database operations for surveys and their responses"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Survey, SurveyResponse


class SurveyRepository:
    """Repository for survey database operations"""

    @staticmethod
    def get_surveys(db: Session, business_id: int) -> list[tuple[Survey, int]]:
        """Surveys of a business with their response counts, newest first"""
        response_counts = (
            db.query(SurveyResponse.survey_id, func.count(SurveyResponse.id).label("response_count"))
            .group_by(SurveyResponse.survey_id)
            .subquery()
        )
        rows = (
            db.query(Survey, func.coalesce(response_counts.c.response_count, 0))
            .outerjoin(response_counts, response_counts.c.survey_id == Survey.id)
            .filter(Survey.business_id == business_id)
            .order_by(Survey.created_at.desc(), Survey.id.desc())
            .all()
        )
        return [(survey, int(count)) for survey, count in rows]

    @staticmethod
    def get_survey_by_id(db: Session, survey_id: int, business_id: int) -> Optional[Survey]:
        return (
            db.query(Survey)
            .filter(Survey.id == survey_id, Survey.business_id == business_id)
            .first()
        )

    @staticmethod
    def get_survey_by_public_id(db: Session, public_id: str) -> Optional[Survey]:
        """Get a survey by public UUID"""
        return db.query(Survey).filter(Survey.public_id == public_id).first()

    @staticmethod
    def count_responses(db: Session, survey_id: int) -> int:
        return db.query(func.count(SurveyResponse.id)).filter(SurveyResponse.survey_id == survey_id).scalar()

    @staticmethod
    def create_survey(db: Session, business_id: int, **survey_data) -> Survey:
        survey = Survey(business_id=business_id, **survey_data)
        db.add(survey)
        db.commit()
        db.refresh(survey)
        return survey

    @staticmethod
    def update_survey(db: Session, survey: Survey, **updates) -> Survey:
        """Update a survey with provided fields"""
        for key, value in updates.items():
            if hasattr(survey, key):
                setattr(survey, key, value)

        db.commit()
        db.refresh(survey)
        return survey

    @staticmethod
    def delete_survey(db: Session, survey: Survey) -> None:
        db.delete(survey)
        db.commit()

    # Response Methods
    @staticmethod
    def get_responses(db: Session, survey_id: int) -> list[SurveyResponse]:
        return (
            db.query(SurveyResponse)
            .filter(SurveyResponse.survey_id == survey_id)
            .order_by(SurveyResponse.submitted_at.desc(), SurveyResponse.id.desc())
            .all()
        )

    @staticmethod
    def create_response(db: Session, survey: Survey, answers: dict, customer_id: Optional[int] = None) -> SurveyResponse:
        response = SurveyResponse(
            survey_id=survey.id,
            business_id=survey.business_id,
            customer_id=customer_id,
            answers=answers,
        )
        db.add(response)
        db.commit()
        db.refresh(response)
        return response
