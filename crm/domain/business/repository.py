"""Business repository - Database operations for the tenant's own profile"""

from sqlalchemy.orm import Session

from ...models import Business


class BusinessRepository:
    @staticmethod
    def update_business(db: Session, business: Business, **updates) -> Business:
        for key, value in updates.items():
            if hasattr(business, key):
                setattr(business, key, value)

        db.commit()
        db.refresh(business)
        return business
