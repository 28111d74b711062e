"""
Domain error taxonomy

Services raise these; the handlers in ``ecommerce_api.api.errors`` turn
them into the JSON error envelope with the matching HTTP status.
"""
from typing import Any, Optional


class AppError(Exception):
    """Base exception for all domain errors"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def name(self) -> str:
        return type(self).__name__


class ValidationError(AppError):
    """Malformed or missing input"""

    status_code = 400


class ConflictError(ValidationError):
    """Input collides with an existing unique value (email, slug, review pair)"""

    status_code = 409


class NotFoundError(AppError):
    """Referenced entity does not exist"""

    status_code = 404


class ForbiddenError(AppError):
    """Authenticated, but not allowed to perform the operation"""

    status_code = 403


class InvalidStateError(AppError):
    """Operation is not valid for the entity's current state"""

    status_code = 400


class InsufficientStockError(InvalidStateError):
    """Requested quantity exceeds available stock"""

    def __init__(self, product_name: str, available: Optional[int] = None):
        self.product_name = product_name
        self.available = available
        message = f'Insufficient stock for "{product_name}"'
        if available is not None:
            message = f"{message}. Available: {available}"
        super().__init__(message, details={"product": product_name, "available": available})


class UnauthenticatedError(AppError):
    """Missing, invalid or revoked credentials"""

    status_code = 401
