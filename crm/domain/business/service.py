"""Business service - Settings for the authenticated business"""

import logging

from sqlalchemy.orm import Session

from ...models import Business
from .repository import BusinessRepository
from .schemas import BusinessSettingsUpdate

logger = logging.getLogger(__name__)


class BusinessService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BusinessRepository()

    def update_settings(self, business: Business, data: BusinessSettingsUpdate) -> Business:
        updates = data.model_dump(exclude_unset=True)
        logger.info(f"⚙️ Updating settings for business_id: {business.id} ({', '.join(sorted(updates)) or 'no fields'})")
        return self.repo.update_business(self.db, business, **updates)
