"""Exceptions raised by the basket core and translated to HTTP responses by the app."""

from typing import Dict, List, Optional


class BasketError(Exception):
    """Base class for errors the API reports back to the caller."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(BasketError):
    """Exception raised when a request payload fails field validation."""
    def __init__(self, errors: Optional[Dict[str, List[str]]] = None, message: str = "Request validation failed"):
        self.errors = errors or {}
        super().__init__(message)


class InvalidDiscountCodeError(BasketError):
    """Exception raised when a discount code is unknown or inactive."""
    def __init__(self, code: Optional[str], message: str = "Invalid or inactive discount code"):
        self.code = code
        super().__init__(message)
