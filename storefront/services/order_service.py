"""
Order Service - checkout, order history, order management and sales reports

Purpose:
- Price a client-side cart against the live catalog
- Turn a cart into an order with its line items (checkout)
- Let customers see their own order history
- Let staff list orders and move them through statuses
- Summarise completed-payment sales for admins

Author: JRadiance
Date: 2026-02-09
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta
from supabase import Client

from storefront.core.auth import TokenUser
from storefront.domain.audit import ActivityAction, ResourceType
from storefront.domain.cart import Cart, CartItem
from storefront.domain.order import (
    CheckoutLine,
    CheckoutRequest,
    OrderStatus,
    PaymentStatus,
    SalesPeriod,
    SalesStats,
)
from storefront.domain.results import ActionResult
from storefront.domain.user import UserRole
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.services.audit_service import AuditService
from storefront.services.base import AccessDenied, StorefrontService

logger = logging.getLogger(__name__)


def period_start(period: SalesPeriod, now: Optional[datetime] = None) -> Optional[datetime]:
    """Start of the reporting window, None for all time"""
    now = now or datetime.now(timezone.utc)
    if period == SalesPeriod.DAY:
        return now - relativedelta(days=1)
    if period == SalesPeriod.WEEK:
        return now - relativedelta(days=7)
    if period == SalesPeriod.MONTH:
        return now - relativedelta(months=1)
    return None


class OrderService(StorefrontService):

    def __init__(self, client: Optional[Client] = None):
        super().__init__(client)
        self.orders = OrderRepository(self.client)
        self.products = ProductRepository(self.client)
        self.audit = AuditService(self.client)

    # ------------------------------------------------------------------
    # Cart and checkout
    # ------------------------------------------------------------------

    def _build_cart(self, lines: List[CheckoutLine]):
        """Cart of the lines whose product exists and is active, plus the rest"""
        catalog = self.products.find_by_ids([line.product_id for line in lines])
        cart = Cart()
        unavailable = []
        for line in lines:
            product = catalog.get(line.product_id)
            if product is None or not product.is_active:
                unavailable.append(line.product_id)
                continue
            cart.add_item(product, line.quantity)
        return cart, unavailable

    def quote_cart(self, lines: List[CheckoutLine]) -> ActionResult:
        """Price a cart with current catalog prices"""
        try:
            cart, unavailable = self._build_cart(lines)
            data = cart.to_dict()
            data["unavailable"] = unavailable
            return ActionResult.ok(data=data)
        except Exception:
            logger.exception("Error pricing cart")
            return ActionResult.fail("Failed to price cart", status_code=500)

    def checkout(self, caller: Optional[TokenUser], request: CheckoutRequest) -> ActionResult:
        """
        Create a pending order from the cart.

        Every product must exist, be active and have enough stock. Lines are
        charged at the product's effective price at checkout time.
        """
        try:
            self.require_role(caller, UserRole.CUSTOMER)

            cart, unavailable = self._build_cart(request.items)
            if unavailable:
                return ActionResult.fail(
                    f"Some products are no longer available: {', '.join(unavailable)}",
                    data={"unavailable": unavailable},
                )

            short = [item.product.name for item in cart.items if item.quantity > item.product.stock_quantity]
            if short:
                return ActionResult.fail(f"Insufficient stock for: {', '.join(short)}")

            total = cart.total_price
            order_id = self.orders.create({
                "user_id": caller.id,
                "total_amount": float(total),
                "status": OrderStatus.PENDING.value,
                "payment_status": PaymentStatus.PENDING.value,
                "shipping_address": request.shipping_address,
                "phone": request.phone,
                "notes": request.notes,
            })
            try:
                self.orders.add_items([self._item_row(order_id, item) for item in cart.items])
            except Exception:
                self._discard_order(order_id)
                raise

            logger.info(f"Order {order_id} placed by {caller.id} for {total}")
            return ActionResult.ok(
                message="Order placed successfully",
                data={"order_id": order_id, "total_amount": float(total), "total_items": cart.total_items},
                status_code=201,
            )
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception("Error during checkout")
            return ActionResult.unexpected(e, "Failed to place order")

    def _discard_order(self, order_id: str) -> None:
        """Remove an order whose items could not be written"""
        try:
            self.orders.delete(order_id)
            logger.warning(f"Discarded order {order_id} after its items failed to save")
        except Exception as e:
            logger.error(f"Orphan pending order {order_id} left behind: {e}")

    @staticmethod
    def _item_row(order_id: str, item: CartItem) -> dict:
        return {
            "order_id": order_id,
            "product_id": item.product_id,
            "product_name": item.product.name,
            "quantity": item.quantity,
            "unit_price": float(item.unit_price),
        }

    def get_order_history(self, caller: Optional[TokenUser]) -> ActionResult:
        """The caller's own orders"""
        try:
            if caller is None:
                return ActionResult.not_authenticated()
            orders = self.orders.find_by_user(caller.id)
            return ActionResult.ok(data=[order.to_dict() for order in orders])
        except Exception:
            logger.exception("Error fetching order history")
            return ActionResult.fail("Failed to fetch order history", status_code=500)

    # ------------------------------------------------------------------
    # Order management
    # ------------------------------------------------------------------

    def get_all_orders(self, caller: Optional[TokenUser]) -> ActionResult:
        try:
            self.require_role(caller, UserRole.AGENT)
            orders = self.orders.find_all_with_items()
            return ActionResult.ok(data=[order.to_dict() for order in orders])
        except AccessDenied as denied:
            return denied.result
        except Exception:
            logger.exception("Error fetching orders")
            return ActionResult.fail("Failed to fetch orders", status_code=500)

    def update_order_status(self, caller: Optional[TokenUser], order_id: str, status) -> ActionResult:
        try:
            self.require_role(caller, UserRole.AGENT)

            try:
                new_status = OrderStatus(status)
            except ValueError:
                return ActionResult.fail(f"Invalid order status: {status}")

            self.orders.update_status(order_id, new_status, datetime.now(timezone.utc))

            self.audit.log_action(
                caller.id,
                ActivityAction.ORDER_STATUS_UPDATED,
                ResourceType.ORDER,
                order_id,
                {"new_status": new_status.value},
            )

            return ActionResult.ok(message=f"Order status updated to {new_status.value}")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception(f"Error updating order status {order_id}")
            return ActionResult.unexpected(e, "Failed to update order status")

    # ------------------------------------------------------------------
    # Sales reports
    # ------------------------------------------------------------------

    def get_sales_stats(self, caller: Optional[TokenUser], period: SalesPeriod = SalesPeriod.ALL) -> ActionResult:
        """Revenue over orders whose payment completed inside the period"""
        try:
            self.require_role(caller, UserRole.ADMIN, "Only admins can view sales logs")

            orders = self.orders.find_paid_since(period_start(period))

            total_revenue = sum((Decimal(str(order.get("total_amount") or 0)) for order in orders), Decimal("0"))
            completed = [order for order in orders if order.get("status") == OrderStatus.DELIVERED.value]

            stats = SalesStats(
                period=period,
                total_revenue=float(total_revenue),
                total_orders=len(orders),
                completed_orders=len(completed),
                orders=orders,
            )
            return ActionResult.ok(data=stats.model_dump(mode="json"))
        except AccessDenied as denied:
            return denied.result
        except Exception:
            logger.exception("Error fetching sales stats")
            return ActionResult.fail("Failed to fetch sales statistics", status_code=500)
