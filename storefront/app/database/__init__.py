# Database modules

from .carts import cart_db, get_cart_db, CartDatabase, CartSession

__all__ = [
    "cart_db",
    "get_cart_db",
    "CartDatabase",
    "CartSession",
]
