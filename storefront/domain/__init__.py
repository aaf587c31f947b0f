"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.

Author: JRadiance
Date: 2026-02-09
"""
from storefront.domain.user import UserRole, Profile, AdminStaff, AdminPermissions
from storefront.domain.product import Product, ProductCreate, ProductUpdate
from storefront.domain.order import (
    Order, OrderItem, OrderStatus, PaymentStatus, SalesPeriod, SalesStats, CheckoutRequest
)
from storefront.domain.cart import Cart, CartItem
from storefront.domain.audit import ActivityLog, ActivityAction, ResourceType
from storefront.domain.results import ActionResult
from storefront.domain.upload import UploadResult

__all__ = [
    'UserRole', 'Profile', 'AdminStaff', 'AdminPermissions',
    'Product', 'ProductCreate', 'ProductUpdate',
    'Order', 'OrderItem', 'OrderStatus', 'PaymentStatus', 'SalesPeriod', 'SalesStats', 'CheckoutRequest',
    'Cart', 'CartItem',
    'ActivityLog', 'ActivityAction', 'ResourceType',
    'ActionResult',
    'UploadResult',
]
