"""Domain errors raised by the services.

Every error carries a machine readable ``code`` and the HTTP status the API
answers with, so the caller can drive a toast/alert from structured data
(kind + relevant numbers) rather than parsing messages.
"""
from decimal import Decimal
from typing import Any, Dict, Optional


class TrackNTomsError(Exception):
    status_code = 400
    code = "error"

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"detail": self.message, "code": self.code}
        for key, value in self.extra.items():
            body[key] = float(value) if isinstance(value, Decimal) else value
        return body


class ValidationError(TrackNTomsError):
    """Missing field, non-positive quantity/price, price over the ceiling,
    partially filled line item. Raised before any write."""

    status_code = 400
    code = "validation_error"


class InvalidStatusError(ValidationError):
    code = "invalid_status"

    def __init__(self, entity: str, entity_id: int, status: str, action: str):
        super().__init__(
            f"Cannot {action} a {entity.lower()} that is already {status}",
            entity=entity,
            entity_id=entity_id,
            status=status,
        )
        self.status = status


class NotFoundError(TrackNTomsError):
    status_code = 404
    code = "not_found"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} not found", entity=entity, entity_id=entity_id)
        self.entity = entity
        self.entity_id = entity_id


class InsufficientStockError(TrackNTomsError):
    """Requested decrement would drive an ingredient below zero."""

    status_code = 400
    code = "insufficient_stock"

    def __init__(self, ingredient_id: int, available: Decimal, requested: Decimal):
        super().__init__(
            f"Not enough quantity available for ingredient {ingredient_id}. "
            f"Available: {available}, requested: {requested}",
            ingredient_id=ingredient_id,
            available=available,
            requested=requested,
        )
        self.ingredient_id = ingredient_id
        self.available = available
        self.requested = requested


class TransactionError(TrackNTomsError):
    """Unexpected storage failure inside an atomic unit. Always rolled back."""

    status_code = 500
    code = "transaction_error"

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original
