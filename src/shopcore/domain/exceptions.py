"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so callers can catch them uniformly and display user-friendly messages.

Transactional and storage failures are deliberately *not* domain errors:
``ConflictError`` is retryable, ``OperationFailedError`` is opaque.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainException):
    """A requested entity does not exist (or is not visible to the caller)."""


class InvalidInputError(DomainException):
    """A value is malformed or outside its allowed domain."""


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the product's current availability."""

    def __init__(
        self,
        product_id: int,
        product_name: str,
        available: int,
        requested: int,
    ) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}. "
            f"Only {available} available (requested {requested})"
        )


class EmptySelectionError(DomainException):
    """Checkout was attempted on a selection without lines."""


class ConflictError(Exception):
    """A concurrent transaction touched the same rows; the call may be retried."""


class OperationFailedError(Exception):
    """Storage-level failure. Carries no internal detail."""

    def __init__(self, operation: str = "operation") -> None:
        self.operation = operation
        super().__init__(f"The {operation} failed")


class UnauthenticatedError(Exception):
    """No caller identity was supplied."""


class ForbiddenError(Exception):
    """The caller's role does not allow the requested operation."""
