"""Product snapshot models for the storefront service"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from cartstore import Product, stock_limit


class ProductSnapshot(BaseModel):
    """
    Listing as the storefront UI holds it.

    Display fields the cart does not interpret (image, category,
    description, ratings...) are carried through untouched.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    price: Decimal = Field(ge=0)
    available_quantity: Optional[int] = Field(default=None, ge=0, alias="availableQuantity")

    def to_product(self) -> Product:
        """Convert to the cart store's snapshot type"""
        return Product(
            id=self.id,
            name=self.name,
            price=self.price,
            stock=stock_limit(self.available_quantity),
            attributes=dict(self.model_extra or {}),
        )

    @classmethod
    def from_product(cls, product: Product) -> "ProductSnapshot":
        data: dict[str, Any] = dict(product.attributes)
        data.update(
            id=product.id,
            name=product.name,
            price=product.price,
            availableQuantity=product.available_quantity,
        )
        return cls.model_validate(data)
