"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Customer


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def get_customers(db: Session, business_id: int, search: Optional[str] = None) -> list[Customer]:
        """Get customers for a business, optionally filtered by a search term"""
        query = db.query(Customer).filter(Customer.business_id == business_id)

        if search:
            # % and _ in the term match themselves, not any characters
            escaped = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            search_term = f"%{escaped}%"
            query = query.filter(
                or_(
                    Customer.name.ilike(search_term, escape="\\"),
                    Customer.email.ilike(search_term, escape="\\"),
                    Customer.location.ilike(search_term, escape="\\"),
                    Customer.phone.ilike(search_term, escape="\\"),
                )
            )

        return query.order_by(Customer.name.asc()).all()

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: int, business_id: int) -> Optional[Customer]:
        return (
            db.query(Customer)
            .filter(Customer.id == customer_id, Customer.business_id == business_id)
            .first()
        )

    @staticmethod
    def get_customer_by_email(db: Session, email: str, business_id: int) -> Optional[Customer]:
        return (
            db.query(Customer)
            .filter(Customer.email == email, Customer.business_id == business_id)
            .first()
        )

    @staticmethod
    def create_customer(db: Session, business_id: int, **customer_data) -> Customer:
        customer = Customer(business_id=business_id, **customer_data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def update_customer(db: Session, customer: Customer, **updates) -> Customer:
        """Update a customer with provided fields"""
        for key, value in updates.items():
            if hasattr(customer, key):
                setattr(customer, key, value)

        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def delete_customer(db: Session, customer: Customer) -> None:
        db.delete(customer)
        db.commit()
