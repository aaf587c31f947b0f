"""
Unit tests for OrderService: cart pricing, checkout, order management, sales stats
"""
from datetime import datetime, timedelta, timezone

import pytest

from storefront.domain.order import CheckoutLine, CheckoutRequest, SalesPeriod
from storefront.services.order_service import OrderService, period_start
from tests.factories import (
    ADMIN_ID,
    BLACK_SOAP_ID,
    CUSTOMER_ID,
    RETIRED_SCRUB_ID,
    SHEA_BUTTER_ID,
    UNKNOWN_PRODUCT_ID,
)


def days_ago(days):
    return (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()


@pytest.fixture
def shop_db(seeded_db, sample_product_row):
    seeded_db.seed(
        "products",
        sample_product_row,
        {**sample_product_row, "id": BLACK_SOAP_ID, "name": "African Black Soap", "slug": "african-black-soap",
         "price": 2500, "discount_price": None, "stock_quantity": 1},
        {**sample_product_row, "id": RETIRED_SCRUB_ID, "name": "Retired Scrub", "slug": "retired-scrub",
         "is_active": False},
    )
    return seeded_db


@pytest.fixture
def orders_db(seeded_db):
    seeded_db.seed(
        "orders",
        {"id": "ord-1", "user_id": CUSTOMER_ID, "total_amount": 14000, "status": "delivered",
         "payment_status": "completed", "created_at": days_ago(2)},
        {"id": "ord-2", "user_id": CUSTOMER_ID, "total_amount": 5000, "status": "processing",
         "payment_status": "completed", "created_at": days_ago(40)},
        {"id": "ord-3", "user_id": ADMIN_ID, "total_amount": 9999, "status": "pending",
         "payment_status": "pending", "created_at": days_ago(1)},
    )
    return seeded_db


def checkout_request(*lines):
    return CheckoutRequest(
        items=[CheckoutLine(product_id=pid, quantity=qty) for pid, qty in lines],
        shipping_address="12 Admiralty Way, Lekki, Lagos",
        phone="+2348012345678",
    )


class TestPeriodStart:

    NOW = datetime(2026, 3, 31, 12, 0, tzinfo=timezone.utc)

    def test_windows(self):
        assert period_start(SalesPeriod.DAY, self.NOW) == datetime(2026, 3, 30, 12, 0, tzinfo=timezone.utc)
        assert period_start(SalesPeriod.WEEK, self.NOW) == datetime(2026, 3, 24, 12, 0, tzinfo=timezone.utc)
        # calendar month, clamped to the shorter month
        assert period_start(SalesPeriod.MONTH, self.NOW) == datetime(2026, 2, 28, 12, 0, tzinfo=timezone.utc)

    def test_all_time_has_no_start(self):
        assert period_start(SalesPeriod.ALL, self.NOW) is None


class TestCartQuote:

    def test_quote_uses_effective_prices(self, shop_db):
        result = OrderService(shop_db).quote_cart([
            CheckoutLine(product_id=SHEA_BUTTER_ID, quantity=2),
            CheckoutLine(product_id=BLACK_SOAP_ID, quantity=1),
        ])

        assert result.success
        assert result.data["total_items"] == 3
        assert result.data["total_price"] == 16500.0
        assert result.data["unavailable"] == []

    def test_quote_reports_unavailable_products(self, shop_db):
        result = OrderService(shop_db).quote_cart([
            CheckoutLine(product_id=RETIRED_SCRUB_ID, quantity=1),
            CheckoutLine(product_id=UNKNOWN_PRODUCT_ID, quantity=1),
        ])

        assert result.data["items"] == []
        assert result.data["unavailable"] == [RETIRED_SCRUB_ID, UNKNOWN_PRODUCT_ID]

    def test_quote_marks_malformed_ids_unavailable(self, shop_db):
        result = OrderService(shop_db).quote_cart([
            CheckoutLine(product_id=SHEA_BUTTER_ID, quantity=1),
            CheckoutLine(product_id="not-a-uuid", quantity=1),
        ])

        assert result.success
        assert result.data["total_items"] == 1
        assert result.data["unavailable"] == ["not-a-uuid"]


class TestCheckout:

    def test_checkout_creates_pending_order_with_items(self, shop_db, customer):
        # Act
        result = OrderService(shop_db).checkout(customer, checkout_request((SHEA_BUTTER_ID, 2)))

        # Assert
        assert result.success
        assert result.status_code == 201
        assert result.data["total_amount"] == 14000.0
        assert result.data["total_items"] == 2

        order = shop_db.rows("orders")[0]
        assert order["id"] == result.data["order_id"]
        assert order["user_id"] == CUSTOMER_ID
        assert order["status"] == "pending"
        assert order["payment_status"] == "pending"
        assert order["shipping_address"] == "12 Admiralty Way, Lekki, Lagos"

        items = shop_db.rows("order_items")
        assert len(items) == 1
        assert items[0]["product_name"] == "Whipped Shea Butter"
        assert items[0]["unit_price"] == 7000.0
        assert items[0]["quantity"] == 2

    def test_checkout_requires_login(self, shop_db):
        result = OrderService(shop_db).checkout(None, checkout_request((BLACK_SOAP_ID, 1)))

        assert result.status_code == 401
        assert shop_db.rows("orders") == []

    def test_checkout_rejects_inactive_products(self, shop_db, customer):
        result = OrderService(shop_db).checkout(customer, checkout_request((RETIRED_SCRUB_ID, 1)))

        assert not result.success
        assert result.data == {"unavailable": [RETIRED_SCRUB_ID]}
        assert shop_db.rows("orders") == []

    def test_checkout_rejects_malformed_product_id(self, shop_db, customer):
        result = OrderService(shop_db).checkout(customer, checkout_request(("shea", 1)))

        assert not result.success
        assert result.status_code == 400
        assert result.data == {"unavailable": ["shea"]}
        assert shop_db.rows("orders") == []

    def test_failed_item_insert_discards_the_order(self, shop_db, customer):
        # Arrange
        shop_db.fail("order_items", "insert", RuntimeError("order_items unavailable"))

        # Act
        result = OrderService(shop_db).checkout(customer, checkout_request((SHEA_BUTTER_ID, 1)))

        # Assert
        assert result.status_code == 500
        assert result.error == "order_items unavailable"
        assert shop_db.rows("orders") == []

    def test_failed_cleanup_still_reports_the_error(self, shop_db, customer):
        shop_db.fail("order_items", "insert", RuntimeError("order_items unavailable"))
        shop_db.fail("orders", "delete", RuntimeError("orders unavailable"))

        result = OrderService(shop_db).checkout(customer, checkout_request((SHEA_BUTTER_ID, 1)))

        assert result.status_code == 500
        assert result.error == "order_items unavailable"
        assert len(shop_db.rows("orders")) == 1

    def test_checkout_rejects_insufficient_stock(self, shop_db, customer):
        result = OrderService(shop_db).checkout(customer, checkout_request((BLACK_SOAP_ID, 2)))

        assert not result.success
        assert result.error == "Insufficient stock for: African Black Soap"

    def test_duplicate_lines_are_merged(self, shop_db, customer):
        result = OrderService(shop_db).checkout(
            customer, checkout_request((SHEA_BUTTER_ID, 1), (SHEA_BUTTER_ID, 1))
        )

        assert result.data["total_items"] == 2
        assert len(shop_db.rows("order_items")) == 1

    def test_order_history_is_per_customer(self, orders_db, customer):
        result = OrderService(orders_db).get_order_history(customer)

        assert [order["id"] for order in result.data] == ["ord-1", "ord-2"]

    def test_order_history_requires_login(self, orders_db):
        assert OrderService(orders_db).get_order_history(None).status_code == 401


class TestOrderManagement:

    def test_agent_lists_all_orders(self, orders_db, agent):
        result = OrderService(orders_db).get_all_orders(agent)
        assert len(result.data) == 3

    def test_customer_cannot_list_all_orders(self, orders_db, customer):
        assert OrderService(orders_db).get_all_orders(customer).status_code == 403

    def test_update_status(self, orders_db, agent):
        result = OrderService(orders_db).update_order_status(agent, "ord-3", "shipped")

        assert result.success
        assert result.message == "Order status updated to shipped"
        order = next(row for row in orders_db.rows("orders") if row["id"] == "ord-3")
        assert order["status"] == "shipped"
        assert order["updated_at"]

        log = orders_db.rows("admin_activity_logs")[-1]
        assert log["action"] == "order_status_updated"
        assert log["resource_type"] == "order"
        assert log["changes"] == {"new_status": "shipped"}

    def test_invalid_status(self, orders_db, agent):
        result = OrderService(orders_db).update_order_status(agent, "ord-3", "lost")

        assert result.status_code == 400
        assert result.error == "Invalid order status: lost"
        assert orders_db.rows("admin_activity_logs") == []


class TestSalesStats:

    def test_all_time(self, orders_db, admin_user):
        result = OrderService(orders_db).get_sales_stats(admin_user, SalesPeriod.ALL)

        assert result.success
        assert result.data["total_orders"] == 2
        assert result.data["total_revenue"] == 19000.0
        assert result.data["completed_orders"] == 1

    def test_week_window(self, orders_db, admin_user):
        result = OrderService(orders_db).get_sales_stats(admin_user, SalesPeriod.WEEK)

        assert result.data["period"] == "week"
        assert result.data["total_orders"] == 1
        assert result.data["total_revenue"] == 14000.0

    def test_agents_cannot_view_sales(self, orders_db, agent):
        result = OrderService(orders_db).get_sales_stats(agent)

        assert result.status_code == 403
        assert result.error == "Only admins can view sales logs"
