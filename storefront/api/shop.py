"""
Shop API Endpoints
Public catalog, cart pricing, checkout and customer order history

Author: JRadiance
Date: 2026-02-09
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from supabase import Client

from storefront.api.responses import respond
from storefront.core.auth import TokenUser, get_current_user_optional
from storefront.core.database import get_supabase
from storefront.domain.order import CheckoutLine, CheckoutRequest
from storefront.services.catalog_service import CatalogService
from storefront.services.order_service import OrderService

router = APIRouter(tags=["Shop"])


class CartQuote(BaseModel):
    items: List[CheckoutLine] = Field(default_factory=list)


def get_catalog_service(client: Client = Depends(get_supabase)) -> CatalogService:
    return CatalogService(client)


def get_order_service(client: Client = Depends(get_supabase)) -> OrderService:
    return OrderService(client)


@router.get("/shop/products")
async def get_products(
    category: Optional[str] = Query(None, description="Filter by category"),
    search: Optional[str] = Query(None, description="Search by name"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: CatalogService = Depends(get_catalog_service),
):
    """Active products for the shop grid"""
    return respond(service.list_active_products(category, search, limit, offset))


@router.get("/products/{id_or_slug}")
async def get_product(id_or_slug: str, service: CatalogService = Depends(get_catalog_service)):
    return respond(service.get_product(id_or_slug))


@router.post("/shop/cart")
async def quote_cart(body: CartQuote, service: OrderService = Depends(get_order_service)):
    """Price the client-side cart with current catalog prices"""
    return respond(service.quote_cart(body.items))


@router.post("/shop/checkout")
async def checkout(
    body: CheckoutRequest,
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: OrderService = Depends(get_order_service),
):
    return respond(service.checkout(caller, body))


@router.get("/shop/history")
async def order_history(
    caller: Optional[TokenUser] = Depends(get_current_user_optional),
    service: OrderService = Depends(get_order_service),
):
    return respond(service.get_order_history(caller))
