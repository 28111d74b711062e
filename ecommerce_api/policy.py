"""
Access policy

Every role or ownership decision made by the services goes through these
functions, so admin-versus-user branching lives in one place.
"""
from dataclasses import dataclass
from typing import Optional

from ecommerce_api.errors import ForbiddenError
from ecommerce_api.models.user import Role


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request"""

    id: str
    role: Role
    email: Optional[str] = None


def is_admin(principal: Principal) -> bool:
    return principal.role == Role.ADMIN


def is_owner(principal: Principal, owner_id: str) -> bool:
    return principal.id == owner_id


def can_access(principal: Principal, owner_id: str) -> bool:
    return is_admin(principal) or is_owner(principal, owner_id)


def require_admin(principal: Principal, message: str = "Administrator access required") -> None:
    if not is_admin(principal):
        raise ForbiddenError(message)


def require_owner_or_admin(principal: Principal, owner_id: str, message: str = "Access denied") -> None:
    if not can_access(principal, owner_id):
        raise ForbiddenError(message)


def scope_user_filter(principal: Principal, requested_user_id: Optional[str]) -> Optional[str]:
    """
    Resolve the user id a listing is restricted to

    Admins get whatever they asked for (``None`` meaning everyone); anybody
    else is pinned to their own id regardless of the request.
    """
    if is_admin(principal):
        return requested_user_id
    return principal.id
