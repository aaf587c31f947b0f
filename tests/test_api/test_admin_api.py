"""
Integration tests for the admin API over the fake database
"""
from unittest.mock import patch

from storefront.domain.upload import UploadResult
from tests.factories import ADMIN_ID, AGENT_ID, CHIEF_ID, CUSTOMER_ID, auth_headers


class TestDashboardAPI:

    def test_dashboard_returns_permissions(self, client):
        response = client.get("/admin/dashboard", headers=auth_headers(AGENT_ID))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["role"] == "agent"
        assert data["can_manage_products"] is True
        assert data["can_view_audit_logs"] is False

    def test_role_hierarchy(self, client):
        response = client.get("/admin/roles", headers=auth_headers(CHIEF_ID))

        assert response.json()["data"] == [
            {"role": "customer", "level": 0},
            {"role": "agent", "level": 1},
            {"role": "admin", "level": 2},
            {"role": "chief_admin", "level": 3},
        ]


class TestUsersAPI:

    def test_chief_admin_lists_users(self, client):
        response = client.get("/admin/users", headers=auth_headers(CHIEF_ID))

        assert response.status_code == 200
        assert len(response.json()["data"]) == 4

    def test_admin_is_redirected_from_users(self, client):
        response = client.get("/admin/users", headers=auth_headers(ADMIN_ID), follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/admin/dashboard"

    def test_promote_and_demote_through_roles(self, client, seeded_db):
        promoted = client.post(f"/admin/roles/{CUSTOMER_ID}", json={"role": "agent"}, headers=auth_headers(CHIEF_ID))
        demoted = client.post(f"/admin/roles/{CUSTOMER_ID}", json={"role": "customer"}, headers=auth_headers(CHIEF_ID))

        assert promoted.json() == {"success": True, "message": "User promoted to agent"}
        assert demoted.json() == {"success": True, "message": "User demoted to customer"}
        assert seeded_db.rows("admin_staff") == []

    def test_unknown_role_is_rejected(self, client):
        response = client.post(f"/admin/roles/{CUSTOMER_ID}", json={"role": "owner"}, headers=auth_headers(CHIEF_ID))
        assert response.status_code == 422

    def test_toggle_status(self, client):
        response = client.post(f"/admin/users/{AGENT_ID}/toggle-status", headers=auth_headers(CHIEF_ID))

        assert response.status_code == 200
        assert response.json()["message"] == "User deactivated"


class TestCatalogAPI:

    def test_create_product(self, client, seeded_db):
        response = client.post(
            "/admin/catalog",
            json={"name": "Shea Lip Balm", "slug": "shea-lip-balm", "category": "lip-care", "price": 1500},
            headers=auth_headers(AGENT_ID),
        )

        assert response.status_code == 201
        assert response.json()["data"]["product_id"]
        assert seeded_db.rows("products")[0]["slug"] == "shea-lip-balm"

    def test_bad_slug_is_rejected(self, client):
        response = client.post(
            "/admin/catalog",
            json={"name": "Lip Balm", "slug": "Lip Balm!", "category": "lip-care", "price": 1500},
            headers=auth_headers(AGENT_ID),
        )
        assert response.status_code == 422

    def test_toggle_missing_product(self, client):
        response = client.post("/admin/catalog/nope/toggle-status", headers=auth_headers(ADMIN_ID))

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Product not found"}

    def test_upload_media(self, client):
        with patch("storefront.services.catalog_service.FTPConnector") as connector_class:
            connector_class.return_value.upload_files.return_value = [
                UploadResult(success=True, url="https://cdn.jradianceco.com/products/1-a.jpg", filename="1-a.jpg"),
            ]

            response = client.post(
                "/admin/catalog/uploads",
                files=[("files", ("front.jpg", b"jpeg-bytes", "image/jpeg"))],
                data={"folder": "products"},
                headers=auth_headers(AGENT_ID),
            )

        assert response.status_code == 200
        assert response.json()["data"][0]["url"] == "https://cdn.jradianceco.com/products/1-a.jpg"
        connector_class.return_value.upload_files.assert_called_once_with(
            [("front.jpg", b"jpeg-bytes")], "products"
        )


class TestOrdersAndLogsAPI:

    def test_update_order_status(self, client, seeded_db):
        seeded_db.seed("orders", {"id": "ord-1", "user_id": CUSTOMER_ID, "total_amount": 5000,
                                  "status": "pending", "payment_status": "completed"})

        response = client.patch("/admin/orders/ord-1/status", json={"status": "processing"},
                                headers=auth_headers(AGENT_ID))

        assert response.status_code == 200
        assert response.json()["message"] == "Order status updated to processing"

    def test_invalid_status_is_rejected(self, client):
        response = client.patch("/admin/orders/ord-1/status", json={"status": "lost"},
                                headers=auth_headers(AGENT_ID))
        assert response.status_code == 422

    def test_sales_log(self, client, seeded_db):
        seeded_db.seed("orders", {"id": "ord-1", "user_id": CUSTOMER_ID, "total_amount": 5000,
                                  "status": "delivered", "payment_status": "completed",
                                  "created_at": "2026-01-05T10:00:00+00:00"})

        response = client.get("/admin/sales-log?period=all", headers=auth_headers(ADMIN_ID))

        data = response.json()["data"]
        assert data["total_revenue"] == 5000.0
        assert data["completed_orders"] == 1

    def test_audit_log_includes_admin_actions(self, client):
        client.post(f"/admin/users/{AGENT_ID}/toggle-status", headers=auth_headers(CHIEF_ID))

        response = client.get("/admin/audit-log?limit=10", headers=auth_headers(CHIEF_ID))

        actions = [entry["action"] for entry in response.json()["data"]]
        assert "user_deactivated" in actions
        assert "dashboard_access" in actions

    def test_audit_log_limit_is_bounded(self, client):
        response = client.get("/admin/audit-log?limit=5000", headers=auth_headers(CHIEF_ID))
        assert response.status_code == 422
