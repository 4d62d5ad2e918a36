import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def non_negative(value, cast):
    """
    Coerce a stored count or amount to a usable non-negative number.

    Older browser data can hold null (a NaN price), negative or
    non-numeric values; those read as 0.
    """
    try:
        number = cast(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return max(0, number)


class Product(BaseModel):
    """
    Catalog entry for an item the shop hands out on consignment.

    Attributes:
        id: Unique identifier, generated at creation and stable afterwards
        code: Free-text product code (not enforced unique)
        name: Product name
        price: Unit price (non-negative)
        inventory: Units held by the shop itself (non-negative)
    """
    model_config = ConfigDict(frozen=True)

    id: int
    code: str
    name: str
    price: float = Field(0, ge=0)
    inventory: int = Field(0, ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value):
        return non_negative(value, float)

    @field_validator("inventory", mode="before")
    @classmethod
    def _coerce_inventory(cls, value):
        return non_negative(value, int)

    def __repr__(self):
        return f"<Product(id={self.id}, code='{self.code}', inventory={self.inventory})>"


class ConsignedProduct(Product):
    """
    Snapshot of a Product held by a client.

    The catalog fields are copied when the product is attached, so later
    catalog edits never reach entries a client already holds.

    Attributes:
        quantity: Units currently held by the client (floored at zero)
        purchase_date: When the entry was last attached or merged
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    quantity: int = Field(0, ge=0)
    purchase_date: datetime = Field(..., alias="purchaseDate")

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value):
        return non_negative(value, int)

    @classmethod
    def from_product(cls, product: Product, quantity: int, purchase_date: datetime) -> "ConsignedProduct":
        """Copy a catalog product into a new held entry."""
        fields = product.model_dump(include=set(Product.model_fields))
        return cls(**fields, quantity=quantity, purchase_date=purchase_date)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

    def __repr__(self):
        return f"<ConsignedProduct(id={self.id}, name='{self.name}', quantity={self.quantity})>"
