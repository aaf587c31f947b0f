"""
Admin API - dashboard, users, roles, catalog, orders, audit and sales logs

Every path here sits behind the route guard (see core/route_guard.py); the
services check the caller's role again before touching data.

Author: JRadiance
Date: 2026-02-09
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import BaseModel
from supabase import Client

from storefront.api.responses import respond
from storefront.core.auth import ROLE_HIERARCHY, TokenUser, get_current_user_optional
from storefront.core.database import get_supabase
from storefront.domain.order import OrderStatusUpdate, SalesPeriod
from storefront.domain.product import ProductCreate, ProductUpdate
from storefront.domain.results import ActionResult
from storefront.domain.user import UserRole
from storefront.services.admin_service import AdminService
from storefront.services.audit_service import AuditService
from storefront.services.catalog_service import CatalogService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/admin", tags=["Admin"])


class RoleChange(BaseModel):
    role: UserRole


def get_admin_service(client: Client = Depends(get_supabase)) -> AdminService:
    return AdminService(client)


def get_catalog_service(client: Client = Depends(get_supabase)) -> CatalogService:
    return CatalogService(client)


def get_order_service(client: Client = Depends(get_supabase)) -> OrderService:
    return OrderService(client)


def get_audit_service(client: Client = Depends(get_supabase)) -> AuditService:
    return AuditService(client)


# =============================================================================
# Dashboard
# =============================================================================

@router.get("/dashboard")
async def dashboard(
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: AdminService = Depends(get_admin_service),
):
    """Capability flags for the signed-in staff member"""
    permissions = service.get_admin_permissions(caller)
    if permissions is None:
        return respond(ActionResult.forbidden("No admin permissions"))
    return respond(ActionResult.ok(data=permissions.model_dump(mode="json")))


@router.get("/issues")
async def issues(
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: AdminService = Depends(get_admin_service),
):
    return respond(service.get_system_issues(caller))


# =============================================================================
# Users, roles and agents (chief admin)
# =============================================================================

@router.get("/users")
async def list_users(
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: AdminService = Depends(get_admin_service),
):
    return respond(service.get_all_users(caller))


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: AdminService = Depends(get_admin_service),
):
    return respond(service.delete_user(caller, user_id))


@router.post("/users/{user_id}/toggle-status")
async def toggle_user_status(
    user_id: str,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: AdminService = Depends(get_admin_service),
):
    return respond(service.toggle_user_status(caller, user_id))


@router.get("/roles")
async def list_roles():
    """Role hierarchy, lowest first"""
    return respond(ActionResult.ok(data=[
        {"role": role.value, "level": level}
        for role, level in sorted(ROLE_HIERARCHY.items(), key=lambda item: item[1])
    ]))


@router.post("/roles/{user_id}")
async def change_role(
    user_id: str,
    body: RoleChange,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: AdminService = Depends(get_admin_service),
):
    """Setting customer demotes; any other role promotes"""
    if body.role == UserRole.CUSTOMER:
        return respond(service.demote_user(caller, user_id))
    return respond(service.promote_user(caller, user_id, body.role))


@router.get("/agents")
async def list_agents(
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: AdminService = Depends(get_admin_service),
):
    return respond(service.get_all_agents(caller))


# =============================================================================
# Audit and sales logs (admin and above)
# =============================================================================

@router.get("/audit-log")
async def audit_log(
    limit: int = Query(100, ge=1, le=1000),
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: AuditService = Depends(get_audit_service),
):
    return respond(service.get_activity_logs(caller, limit))


@router.get("/sales-log")
async def sales_log(
    period: SalesPeriod = Query(SalesPeriod.ALL, description="day, week, month or all"),
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: OrderService = Depends(get_order_service),
):
    return respond(service.get_sales_stats(caller, period))


# =============================================================================
# Catalog (agents and above)
# =============================================================================

@router.get("/catalog")
async def list_catalog(
    category: Optional[str] = Query(None, description="Filter by category"),
    is_active: Optional[bool] = Query(None, description="Filter by active status"),
    search: Optional[str] = Query(None, description="Search by name"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: CatalogService = Depends(get_catalog_service),
):
    return respond(service.list_products(caller, category, is_active, search, limit, offset))


@router.post("/catalog")
async def create_product(
    body: ProductCreate,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: CatalogService = Depends(get_catalog_service),
):
    return respond(service.create_product(caller, body))


@router.post("/catalog/uploads")
async def upload_media(
    files: List[UploadFile] = File(...),
    folder: Optional[str] = Form(None),
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: CatalogService = Depends(get_catalog_service),
):
    """Upload product images/videos to the media host"""
    payload = [(upload.filename or "", await upload.read()) for upload in files]
    return respond(service.upload_media(caller, payload, folder))


@router.delete("/catalog/uploads")
async def delete_media(
    url: str = Query(..., description="Public URL of the file"),
    folder: Optional[str] = Query(None),
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: CatalogService = Depends(get_catalog_service),
):
    return respond(service.delete_media(caller, url, folder))


@router.patch("/catalog/{product_id}")
async def update_product(
    product_id: str,
    body: ProductUpdate,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: CatalogService = Depends(get_catalog_service),
):
    return respond(service.update_product(caller, product_id, body))


@router.delete("/catalog/{product_id}")
async def delete_product(
    product_id: str,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: CatalogService = Depends(get_catalog_service),
):
    return respond(service.delete_product(caller, product_id))


@router.post("/catalog/{product_id}/toggle-status")
async def toggle_product_status(
    product_id: str,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: CatalogService = Depends(get_catalog_service),
):
    return respond(service.toggle_product_status(caller, product_id))


# =============================================================================
# Orders (agents and above)
# =============================================================================

@router.get("/orders")
async def list_orders(
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: OrderService = Depends(get_order_service),
):
    return respond(service.get_all_orders(caller))


@router.patch("/orders/{order_id}/status")
async def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: OrderService = Depends(get_order_service),
):
    return respond(service.update_order_status(caller, order_id, body.status))
