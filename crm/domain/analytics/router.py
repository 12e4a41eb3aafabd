"""Analytics router - FastAPI endpoints for the dashboard"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_business
from ...database import get_db
from ...models import Business
from .schemas import AnalyticsOverview
from .service import AnalyticsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    """Dependency injection for AnalyticsService"""
    return AnalyticsService(db)


@router.get("", response_model=AnalyticsOverview)
async def get_analytics(
    business: Business = Depends(get_current_business),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Metrics plus every chart series for the current business"""
    return service.get_overview(business)


@router.get("/charts/{chart}")
async def get_chart(
    chart: str,
    business: Business = Depends(get_current_business),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """One chart series: responses, growth, satisfaction, age or location"""
    return service.get_chart(business, chart)
