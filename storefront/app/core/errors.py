"""Storefront service exceptions"""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for storefront service errors"""
    pass


class APIError(StorefrontError):
    """The storefront REST API answered with an error status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class EmptyCartError(StorefrontError):
    """Checkout was attempted with nothing in the cart"""
    pass


class CheckoutInProgressError(StorefrontError):
    """Another checkout for the same cart has not finished yet"""
    pass
