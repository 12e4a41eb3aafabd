"""Customer service - Business logic for customer operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Business, Customer
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository()

    def get_customers(self, business: Business, search: Optional[str] = None) -> list[Customer]:
        return self.repo.get_customers(self.db, business.id, search)

    def get_customer(self, customer_id: int, business: Business) -> Customer:
        customer = self.repo.get_customer_by_id(self.db, customer_id, business.id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer

    def create_customer(self, data: CustomerCreate, business: Business) -> Customer:
        """Create a new customer, rejecting duplicate emails"""
        logger.info(f"📥 Creating customer for business_id: {business.id}")

        if self.repo.get_customer_by_email(self.db, data.email, business.id):
            logger.warning(f"⚠️ Duplicate customer email for business {business.id}")
            raise HTTPException(status_code=409, detail="A customer with this email already exists")

        return self.repo.create_customer(self.db, business.id, **data.model_dump())

    def update_customer(self, customer_id: int, data: CustomerUpdate, business: Business) -> Customer:
        customer = self.get_customer(customer_id, business)
        updates = data.model_dump(exclude_unset=True)

        new_email = updates.get("email")
        if new_email and new_email != customer.email:
            if self.repo.get_customer_by_email(self.db, new_email, business.id):
                raise HTTPException(status_code=409, detail="A customer with this email already exists")

        return self.repo.update_customer(self.db, customer, **updates)

    def delete_customer(self, customer_id: int, business: Business) -> dict:
        customer = self.get_customer(customer_id, business)
        self.repo.delete_customer(self.db, customer)
        logger.info(f"🗑️ Deleted customer {customer_id} for business {business.id}")
        return {"message": "Customer deleted"}

    def upsert_from_survey(self, business_id: int, customer_info: dict) -> Optional[Customer]:
        """
        Create or refresh a customer from the contact details left on a
        public survey. Returns None when no email was given.
        """
        email = (customer_info.get("email") or "").strip().lower()
        if not email:
            return None

        fields = {
            key: customer_info.get(key)
            for key in ("name", "phone", "location", "age", "notes")
            if customer_info.get(key) not in (None, "")
        }

        customer = self.repo.get_customer_by_email(self.db, email, business_id)
        if customer:
            return self.repo.update_customer(self.db, customer, **fields)

        fields.setdefault("name", email.split("@")[0])
        logger.info(f"📥 Creating customer from survey submission for business_id: {business_id}")
        return self.repo.create_customer(self.db, business_id, email=email, **fields)
