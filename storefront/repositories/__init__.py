"""
Repository Layer - Data Access

This layer handles all Supabase queries and returns domain models.
Repositories abstract away query-builder details from business logic.

Author: JRadiance
Date: 2026-02-09
"""
from storefront.repositories.profile_repository import ProfileRepository, StaffRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.activity_log_repository import ActivityLogRepository

__all__ = [
    'ProfileRepository',
    'StaffRepository',
    'ProductRepository',
    'OrderRepository',
    'ActivityLogRepository',
]
