"""
Order Repository - Data Access Layer for Orders

Handles orders and order_items queries and returns Order domain models.

Author: JRadiance
Date: 2026-02-09
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from storefront.domain.order import Order, OrderStatus
from storefront.repositories.base import SupabaseRepository

# orders joined with the customer profile and the line items
ORDER_WITH_ITEMS = """
    *,
    profiles (email, full_name),
    order_items (id, order_id, product_id, product_name, quantity, unit_price)
"""


class OrderRepository(SupabaseRepository):
    """
    Repository for Order data access

    Returns Order domain models with related data (customer, items).
    """

    table_name = "orders"

    def find_all_with_items(self) -> List[Order]:
        """All orders with customer and items, newest first"""
        response = (
            self._table()
            .select(ORDER_WITH_ITEMS)
            .order("created_at", desc=True)
            .execute()
        )
        return [Order.from_row(row) for row in self._rows(response)]

    def find_by_user(self, user_id: str) -> List[Order]:
        """A customer's own orders, newest first"""
        response = (
            self._table()
            .select(ORDER_WITH_ITEMS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [Order.from_row(row) for row in self._rows(response)]

    def find_paid_since(self, since: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """
        Orders with a completed payment, optionally created on or after `since`

        Returns raw rows (total_amount, status, created_at) for sales reports.
        """
        query = (
            self._table()
            .select("id, total_amount, status, created_at")
            .eq("payment_status", "completed")
        )
        if since is not None:
            query = query.gte("created_at", since.isoformat())
        return self._rows(query.execute())

    def create(self, row: Dict[str, Any]) -> str:
        """Insert an order row and return its id"""
        response = self._table().insert(row).execute()
        return self._rows(response)[0]["id"]

    def add_items(self, rows: List[Dict[str, Any]]) -> None:
        if rows:
            self.client.table("order_items").insert(rows).execute()

    def delete(self, order_id: str) -> None:
        self._table().delete().eq("id", order_id).execute()

    def update_status(self, order_id: str, status: OrderStatus, updated_at: datetime) -> None:
        (
            self._table()
            .update({"status": status.value, "updated_at": updated_at.isoformat()})
            .eq("id", order_id)
            .execute()
        )
