"""
Cart Domain Model

The cart lives on the client; the backend prices it against the current
catalog before checkout. Quantity rules follow the storefront cart overlay:
stepping a quantity of 1 down removes the line.
"""
from decimal import Decimal
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from storefront.domain.product import Product


class CartItem(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    product_id: str
    quantity: int = Field(1, ge=1)
    product: Optional[Product] = None

    @property
    def unit_price(self) -> Decimal:
        if self.product is None:
            return Decimal("0")
        return self.product.effective_price

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class Cart(BaseModel):
    items: List[CartItem] = Field(default_factory=list)

    @property
    def total_price(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, item_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def add_item(self, product: Product, quantity: int = 1) -> CartItem:
        """Add a product, merging into an existing line for the same product"""
        for item in self.items:
            if item.product_id == product.id:
                item.quantity += quantity
                item.product = product
                return item
        item = CartItem(product_id=product.id, quantity=quantity, product=product)
        self.items.append(item)
        return item

    def update_quantity(self, item_id: str, delta: int) -> Optional[CartItem]:
        """
        Step a line's quantity by delta.

        Returns the updated line, or None when the line was removed or
        does not exist.
        """
        item = self.find(item_id)
        if item is None:
            return None
        new_quantity = item.quantity + delta
        if new_quantity < 1:
            self.remove_item(item_id)
            return None
        item.quantity = new_quantity
        return item

    def remove_item(self, item_id: str) -> bool:
        before = len(self.items)
        self.items = [item for item in self.items if item.id != item_id]
        return len(self.items) < before

    def to_dict(self) -> dict:
        return {
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "product": item.product.to_dict() if item.product else None,
                    "unit_price": float(item.unit_price),
                    "line_total": float(item.line_total),
                }
                for item in self.items
            ],
            "total_items": self.total_items,
            "total_price": float(self.total_price),
        }
