"""
Order Domain Models

Represents order-related entities in the JRadiance storefront.
These are the single source of truth for order data structure.

Author: JRadiance
Date: 2026-02-09
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Any, Dict
from datetime import datetime
from decimal import Decimal


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class SalesPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class OrderItem(BaseModel):
    """
    Order Item domain model - represents a line item in an order

    Fields:
        id: Order item id
        order_id: Parent order id
        product_id: Reference to product catalog
        product_name: Product name at time of order
        quantity: Number of units ordered
        unit_price: Price per unit at time of order
    """

    id: Optional[str] = Field(None, description="Order item id")
    order_id: Optional[str] = Field(None, description="Parent order id")
    product_id: Optional[str] = Field(None, description="Product catalog id")
    product_name: str = Field(..., description="Product name at order time")
    quantity: int = Field(..., description="Quantity ordered", ge=1)
    unit_price: Decimal = Field(..., description="Price per unit", ge=0)

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump(mode="json")
        data['unit_price'] = float(self.unit_price)
        data['line_total'] = float(self.line_total)
        return data


class Order(BaseModel):
    """
    Order domain model - represents a customer order

    Fields:
        id: Order id (uuid)
        user_id: Profile id of the customer
        total_amount: Order total (NGN)
        status: Fulfilment status (pending, processing, shipped, delivered, cancelled)
        payment_status: Payment status (pending, completed, failed, refunded)
        shipping_address: Delivery address
        phone: Contact phone
        notes: Customer notes
        created_at / updated_at: Timestamps

        # Related data (optional, from embedded selects)
        customer_email / customer_name: From profiles
        items: Order items
    """

    id: str = Field(..., description="Order id")
    user_id: Optional[str] = Field(None, description="Customer profile id")
    total_amount: Decimal = Field(..., description="Order total", ge=0)
    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    payment_status: PaymentStatus = Field(PaymentStatus.PENDING, description="Payment status")
    shipping_address: Optional[str] = Field(None, description="Delivery address")
    phone: Optional[str] = Field(None, description="Contact phone")
    notes: Optional[str] = Field(None, description="Customer notes")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    customer_email: Optional[str] = Field(None, description="Customer email (from profiles)")
    customer_name: Optional[str] = Field(None, description="Customer name (from profiles)")

    items: List[OrderItem] = Field(default_factory=list, description="Order items")

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Order":
        """Build from a row that may carry embedded profiles/order_items"""
        data = dict(row)
        profile = data.pop("profiles", None) or {}
        if isinstance(profile, list):
            profile = profile[0] if profile else {}
        data.setdefault("customer_email", profile.get("email"))
        data.setdefault("customer_name", profile.get("full_name"))
        data["items"] = data.pop("order_items", None) or data.get("items") or []
        return cls(**data)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.COMPLETED

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data['total_amount'] = float(self.total_amount)
        data['item_count'] = self.item_count
        data['total_quantity'] = self.total_quantity
        data['is_paid'] = self.is_paid
        data['items'] = [item.to_dict() for item in self.items]
        return data


class SalesStats(BaseModel):
    """Sales summary over completed payments"""
    period: SalesPeriod
    total_revenue: float
    total_orders: int
    completed_orders: int
    orders: List[Dict[str, Any]] = Field(default_factory=list)


class CheckoutLine(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class CheckoutRequest(BaseModel):
    """Schema for placing an order from the cart"""
    items: List[CheckoutLine] = Field(..., min_length=1)
    shipping_address: str = Field(..., min_length=1)
    phone: Optional[str] = None
    notes: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
