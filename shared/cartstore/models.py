"""Cart Store Data Models"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Union


class NotificationKind(str, Enum):
    """Kind of user-facing notification"""
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Bounded:
    """Stock limited to a known number of units"""
    quantity: int

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"Available quantity must be an integer: {self.quantity!r}")
        if self.quantity < 0:
            raise ValueError(f"Available quantity cannot be negative: {self.quantity}")

    @property
    def available(self) -> Optional[int]:
        return self.quantity

    def allows(self, requested: int) -> bool:
        return requested <= self.quantity


@dataclass(frozen=True)
class Unlimited:
    """Stock with no known upper bound"""

    @property
    def available(self) -> Optional[int]:
        return None

    def allows(self, requested: int) -> bool:
        return True


UNLIMITED = Unlimited()

StockLimit = Union[Bounded, Unlimited]


def stock_limit(available: Optional[int]) -> StockLimit:
    """Map an optional available quantity onto a stock limit"""
    if available is None:
        return UNLIMITED
    return Bounded(available)


@dataclass(frozen=True)
class Product:
    """
    Product snapshot as reported by the catalog.

    The cart never re-reads the catalog: a snapshot keeps the price and
    stock it was captured with.
    """
    id: str
    name: str
    price: Decimal
    stock: StockLimit = UNLIMITED
    attributes: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            try:
                object.__setattr__(self, "price", Decimal(str(self.price)))
            except InvalidOperation as e:
                raise ValueError(f"Invalid product price: {self.price!r}") from e
        if self.price < 0:
            raise ValueError(f"Product price cannot be negative: {self.price}")

    @property
    def available_quantity(self) -> Optional[int]:
        return self.stock.available

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a snapshot from the listing wire shape"""
        payload = dict(data)
        try:
            product_id = payload.pop("id")
            price = payload.pop("price")
        except KeyError as e:
            raise ValueError(f"Product payload is missing '{e.args[0]}'") from e

        return cls(
            id=str(product_id),
            name=str(payload.pop("name", product_id)),
            price=price,
            stock=stock_limit(payload.pop("availableQuantity", None)),
            attributes=payload,
        )

    def to_dict(self) -> dict[str, Any]:
        """Inverse of from_dict"""
        data = dict(self.attributes)
        data.update({
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "availableQuantity": self.available_quantity,
        })
        return data


@dataclass(frozen=True)
class CartLine:
    """One product and how many units of it are in the cart"""
    product: Product
    quantity: int

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(f"Cart line quantity must be at least 1, got {self.quantity}")

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CartState:
    """Ordered cart lines, unique by product id"""
    lines: tuple[CartLine, ...] = ()

    def find(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.product_id == product_id), None)

    def quantity_of(self, product_id: str) -> int:
        line = self.find(product_id)
        return line.quantity if line else 0

    @property
    def cart_count(self) -> int:
        """Total units across all lines"""
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> Decimal:
        """Undiscounted, unrounded sum of line totals"""
        return sum((line.line_total for line in self.lines), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.lines


EMPTY_CART = CartState()


# ==================== Commands ====================

@dataclass(frozen=True)
class AddItem:
    """Add one unit of a product"""
    product: Product


@dataclass(frozen=True)
class RemoveItem:
    """Drop the line for a product"""
    product_id: str


@dataclass(frozen=True)
class SetQuantity:
    """Set a line to an absolute quantity"""
    product_id: str
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    """Empty the cart"""


CartCommand = Union[AddItem, RemoveItem, SetQuantity, ClearCart]


# ==================== Outcomes ====================

@dataclass(frozen=True)
class Notification:
    """Message the store wants surfaced to the user"""
    message: str
    kind: NotificationKind


class OutcomeStatus(str, Enum):
    """What a command did to the cart"""
    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"
    CLEARED = "cleared"
    REJECTED = "rejected"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class CartOutcome:
    """Result of applying a command"""
    status: OutcomeStatus
    state: CartState
    notification: Optional[Notification] = None

    @property
    def accepted(self) -> bool:
        return self.status != OutcomeStatus.REJECTED

    @property
    def changed(self) -> bool:
        return self.status not in (OutcomeStatus.REJECTED, OutcomeStatus.UNCHANGED)
