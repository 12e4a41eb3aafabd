"""Customer router - FastAPI endpoints for customer operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_business
from ...database import get_db
from ...models import Business
from .schemas import CustomerCreate, CustomerResponse, CustomerUpdate
from .service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["Customers"])


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db)


@router.get("", response_model=list[CustomerResponse])
async def get_customers(
    search: Optional[str] = Query(None, description="Match name, email, location or phone"),
    business: Business = Depends(get_current_business),
    service: CustomerService = Depends(get_customer_service),
):
    """Get all customers for the current business"""
    return service.get_customers(business, search)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    business: Business = Depends(get_current_business),
    service: CustomerService = Depends(get_customer_service),
):
    return service.get_customer(customer_id, business)


@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    data: CustomerCreate,
    business: Business = Depends(get_current_business),
    service: CustomerService = Depends(get_customer_service),
):
    return service.create_customer(data, business)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    business: Business = Depends(get_current_business),
    service: CustomerService = Depends(get_customer_service),
):
    return service.update_customer(customer_id, data, business)


@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: int,
    business: Business = Depends(get_current_business),
    service: CustomerService = Depends(get_customer_service),
):
    return service.delete_customer(customer_id, business)
