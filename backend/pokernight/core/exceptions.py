"""Domain errors raised by the services and rendered by the API layer."""
from __future__ import annotations

from typing import Any


class ErrorMessages:
    TABLE_NOT_FOUND = "Table not found"
    PLAYER_NOT_FOUND = "Player not found"
    GROUP_NOT_FOUND = "Group not found"
    USER_NOT_FOUND = "User not found"
    DUPLICATE_PLAYER = "Player with this name and nickname is already at the table"
    INVALID_BLINDS = "Small blind must be positive and big blind at least equal to small blind"
    BUY_IN_NOT_POSITIVE = "Buy-in amount must be greater than zero"
    CASH_OUT_NEGATIVE = "Cash-out amount cannot be negative"
    INITIAL_CHIPS_NEGATIVE = "Initial chips cannot be negative"
    CHIPS_NEGATIVE = "Chip count cannot be negative"
    PLAYER_CASHED_OUT = "Player has cashed out, reactivate before changing chips"
    NAME_REQUIRED = "Name is required"
    FOOD_PLAYER_NOT_AT_TABLE = "Selected player is not in the table"
    GROUP_HAS_TABLES = "Cannot delete group that has tables assigned to it"
    GROUP_NAME_EXISTS = "Group name already exists"
    USERNAME_EXISTS = "Username already exists"
    INVALID_ROLE = "Role must be one of admin, editor, viewer"
    PASSWORD_TOO_SHORT = "Password must be at least 4 characters"
    DEACTIVATION_REJECTED = "Table cannot be deactivated"
    CONCURRENT_UPDATE = "Conflicting update, reload and try again"
    STORE_FAILURE = "Database error"


class PokerNightError(Exception):
    """Base class for errors the service layer reports to callers."""

    kind = "error"
    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.kind, "message": self.message, "details": self.details}


class ValidationError(PokerNightError):
    kind = "validation_error"
    status_code = 400


class NotFoundError(PokerNightError):
    kind = "not_found"
    status_code = 404


class ConflictError(PokerNightError):
    kind = "conflict"
    status_code = 409


class StoreError(PokerNightError):
    kind = "store_error"
    status_code = 503
