"""
Domain errors raised by the service layer

The HTTP layer maps each class to a status code in chaifi.main; services never
raise HTTPException themselves so they stay usable from scripts and tests.
"""
from typing import Any, Dict, Optional


class ChaifiError(Exception):
    """Base class for errors that carry a human-readable message"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(ChaifiError):
    """A referenced menu item, transaction or summary does not exist"""

    status_code = 404


class InsufficientStockError(ChaifiError):
    """A line item asks for more than the item's current stock"""

    status_code = 409

    def __init__(self, item_name: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for {item_name}. Available: {available}, Requested: {requested}",
            {"item": item_name, "available": available, "requested": requested},
        )
        self.item_name = item_name
        self.available = available
        self.requested = requested


class StorageError(ChaifiError):
    """The database is unreachable or rejected a write"""

    status_code = 503


class InvalidAmountError(ChaifiError):
    """An amount cannot be stored as integer cents"""

    status_code = 422
