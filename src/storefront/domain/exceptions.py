"""Domain-level exceptions.

Every failure a use case can report is a subclass of DomainException.  Each
carries a stable ``code`` so the outer layers can turn it into a structured
failure result without inspecting message text.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": str(self)}


class InvalidRequestError(DomainException):
    """A request was malformed or missed a required field."""

    code = "INVALID_REQUEST"


class InvalidReasonError(InvalidRequestError):
    """A cancellation reason was missing or too short."""

    code = "INVALID_REASON"


class EntityNotFoundError(DomainException):
    """A requested product, order or customer does not exist."""

    code = "NOT_FOUND"


class InsufficientStockError(DomainException):
    """A product cannot supply the requested quantity."""

    code = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        product_id: str,
        product_title: str,
        available: int,
        requested: int,
    ) -> None:
        self.product_id = product_id
        self.product_title = product_title
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_title} "
            f"(need {requested}, only {available} available)"
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            product_id=self.product_id,
            available=self.available,
            requested=self.requested,
        )
        return data


class MissingAddressError(DomainException):
    """No shipping address was supplied and none is on file."""

    code = "MISSING_ADDRESS"


class UnauthorizedError(DomainException):
    """The actor is neither the owner nor privileged."""

    code = "UNAUTHORIZED"


class InvalidStateTransitionError(DomainException):
    """The order's current status does not allow the requested change."""

    code = "INVALID_STATE_TRANSITION"


class StorageError(DomainException):
    """The persistence layer failed; wraps the underlying error."""

    code = "STORAGE_ERROR"
