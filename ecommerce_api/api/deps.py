"""
Shared API dependencies: database session, current principal, pagination
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ecommerce_api.config import settings
from ecommerce_api.database import get_db
from ecommerce_api.errors import UnauthenticatedError
from ecommerce_api.policy import Principal
from ecommerce_api.services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Principal:
    """Resolve the bearer token; every protected route depends on this"""
    if credentials is None:
        raise UnauthenticatedError("Authentication required")
    return AuthService(db).resolve_principal(credentials.credentials)


@dataclass
class PageParams:
    page: int
    limit: int


def get_page_params(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"),
) -> PageParams:
    return PageParams(page=page, limit=limit)


__all__ = ["get_db", "get_current_principal", "get_page_params", "PageParams"]
