"""
Engine error types.
"""

from typing import Any, Dict, List, Optional


class EngineError(Exception):
    """Base class for errors raised by the season engine."""

    category = "ENGINE"

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the caller's error envelope."""
        body: Dict[str, Any] = {
            "category": self.category,
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(EngineError):
    """Raised when input is malformed or impossible."""
    category = "VALIDATION"


class NotFoundError(EngineError):
    """Raised when a referenced record does not exist."""
    category = "NOT_FOUND"
