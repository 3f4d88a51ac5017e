"""Error types raised by the price resolver."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class PricingError(Exception):
    """Base exception for pricing errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(code=self.code, message=self.message, details=self.details)


class InvalidInput(PricingError):
    """The pricing request cannot be resolved as given (e.g. no currency)."""

    def __init__(self, message: str = "Invalid pricing input", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_DATA", message, details)
