"""Identity/Access collaborator for the command line.

The core accepts an already-authorized customer ID; this module is where
the caller's identity and role are resolved and checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shopcore.domain.exceptions import ForbiddenError, UnauthenticatedError


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    customer_id: int | None
    role: Role = Role.CUSTOMER


def current_customer_id(principal: Principal) -> int:
    if principal.customer_id is None:
        raise UnauthenticatedError(
            "Not authenticated: pass --customer-id or set SHOPCORE_CUSTOMER_ID"
        )
    return principal.customer_id


def require_admin(principal: Principal) -> int:
    customer_id = current_customer_id(principal)
    if principal.role is not Role.ADMIN:
        raise ForbiddenError("Admin role required")
    return customer_id
