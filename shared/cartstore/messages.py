"""Notification texts emitted by the cart store"""


def _units(available: int) -> str:
    return "item" if available == 1 else "items"


def out_of_stock_on_add(available: int, product_name: str) -> str:
    return f"Only {available} {_units(available)} available in stock for {product_name}"


def out_of_stock_on_update(available: int) -> str:
    return f"Only {available} {_units(available)} available in stock"


def added_to_cart(product_name: str) -> str:
    return f"{product_name} added to cart successfully!"


def quantity_updated(product_name: str) -> str:
    return f"{product_name} quantity updated in cart!"
