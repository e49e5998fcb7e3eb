# Core modules

from .config import settings, get_settings, Settings
from .errors import StorefrontError, APIError, EmptyCartError, CheckoutInProgressError

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "StorefrontError",
    "APIError",
    "EmptyCartError",
    "CheckoutInProgressError",
]
