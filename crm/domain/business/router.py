"""Business router - settings for the current business"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_business
from ...database import get_db
from ...models import Business
from .schemas import BusinessSettings, BusinessSettingsUpdate
from .service import BusinessService

router = APIRouter(prefix="/business", tags=["Business"])


def get_business_service(db: Session = Depends(get_db)) -> BusinessService:
    """Dependency injection for BusinessService"""
    return BusinessService(db)


@router.get("/settings", response_model=BusinessSettings)
async def get_settings(business: Business = Depends(get_current_business)):
    return business


@router.patch("/settings", response_model=BusinessSettings)
async def update_settings(
    data: BusinessSettingsUpdate,
    business: Business = Depends(get_current_business),
    service: BusinessService = Depends(get_business_service),
):
    return service.update_settings(business, data)
