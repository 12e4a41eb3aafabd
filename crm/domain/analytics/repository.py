"""Analytics repository - Read-only queries feeding the dashboard"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Customer, Survey, SurveyResponse


class AnalyticsRepository:
    """Tenant-scoped reads for analytics"""

    @staticmethod
    def get_totals(db: Session, business_id: int) -> dict:
        total_customers = (
            db.query(func.count(Customer.id)).filter(Customer.business_id == business_id).scalar()
        )
        total_surveys = db.query(func.count(Survey.id)).filter(Survey.business_id == business_id).scalar()
        total_responses = (
            db.query(func.count(SurveyResponse.id))
            .filter(SurveyResponse.business_id == business_id)
            .scalar()
        )
        active_surveys = (
            db.query(func.count(Survey.id))
            .filter(Survey.business_id == business_id, Survey.status == "active")
            .scalar()
        )

        return {
            "total_customers": total_customers or 0,
            "total_surveys": total_surveys or 0,
            "total_responses": total_responses or 0,
            "active_surveys": active_surveys or 0,
        }

    @staticmethod
    def get_customers(db: Session, business_id: int, since: Optional[datetime] = None) -> list[Customer]:
        """Customers created on or after ``since`` (all when None), oldest first"""
        query = db.query(Customer).filter(Customer.business_id == business_id)
        if since is not None:
            query = query.filter(Customer.created_at >= since)
        return query.order_by(Customer.created_at.asc(), Customer.id.asc()).all()

    @staticmethod
    def get_responses(db: Session, business_id: int, since: Optional[datetime] = None) -> list[SurveyResponse]:
        """Responses received by a business, oldest first"""
        query = db.query(SurveyResponse).filter(SurveyResponse.business_id == business_id)
        if since is not None:
            query = query.filter(SurveyResponse.submitted_at >= since)
        return query.order_by(SurveyResponse.submitted_at.asc(), SurveyResponse.id.asc()).all()

    @staticmethod
    def get_survey_questions(db: Session, business_id: int) -> dict[int, list]:
        """survey id -> question definitions, for rating extraction"""
        rows = db.query(Survey.id, Survey.questions).filter(Survey.business_id == business_id).all()
        return {survey_id: questions or [] for survey_id, questions in rows}

    @staticmethod
    def get_customer_ages(db: Session, business_id: int) -> list[int]:
        rows = (
            db.query(Customer.age)
            .filter(Customer.business_id == business_id, Customer.age.isnot(None))
            .all()
        )
        return [age for (age,) in rows]

    @staticmethod
    def get_location_counts(db: Session, business_id: int) -> list[tuple[str, int]]:
        """(location, customers) pairs, most common first"""
        count = func.count(Customer.id)
        return (
            db.query(Customer.location, count)
            .filter(Customer.business_id == business_id, Customer.location.isnot(None))
            .group_by(Customer.location)
            .order_by(count.desc(), Customer.location.asc())
            .all()
        )
