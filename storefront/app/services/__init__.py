# Services

from .api_client import StorefrontAPIClient
from .checkout import CheckoutService

__all__ = ["StorefrontAPIClient", "CheckoutService"]
