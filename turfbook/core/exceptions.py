"""
Domain exceptions raised by the store services.

Routers translate these into HTTP errors; services never raise HTTPException.
"""
from typing import Optional


class TurfBookError(Exception):
    """Base exception for all booking marketplace errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(TurfBookError, ValueError):
    """Raised when a turf, slot, booking, review or user does not exist."""

    def __init__(self, entity: str, entity_id):
        super().__init__(
            message=f"{entity} {entity_id} not found",
            details={"entity": entity, "id": entity_id},
        )


class PermissionDeniedError(TurfBookError):
    """Raised when the caller may not act on a resource."""


class SlotUnavailableError(TurfBookError):
    """Raised when a requested slot cannot be booked."""

    def __init__(self, slot_ref, reason: str):
        super().__init__(
            message=f"Slot {slot_ref} is not available: {reason}",
            details={"slot": slot_ref, "reason": reason},
        )


class InvalidStateError(TurfBookError):
    """Raised when a status transition is not allowed."""

    def __init__(self, entity: str, entity_id, current: str, action: str):
        super().__init__(
            message=f"Cannot {action} {entity.lower()} {entity_id} in status '{current}'",
            details={"entity": entity, "id": entity_id, "status": current, "action": action},
        )


class ValidationFailedError(TurfBookError):
    """Raised when a request is well-formed but semantically invalid."""
