import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from .database import get_db
from .models import Business

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def get_current_business(
    api_key: Optional[str] = Depends(api_key_header),
    db: Session = Depends(get_db),
) -> Business:
    """Resolve the business (tenant) the request acts for"""
    if not api_key:
        raise HTTPException(
            status_code=401,
            detail=f"Not authenticated. Please provide the {API_KEY_HEADER} header.",
        )

    business = db.query(Business).filter(Business.api_key == api_key).first()
    if not business:
        logger.warning("❌ Rejected request with unknown API key")
        raise HTTPException(status_code=401, detail="Invalid API key")

    return business
