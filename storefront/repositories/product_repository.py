"""
Product Repository - Data Access Layer for Products

Handles all catalog queries and returns Product domain models.

Author: JRadiance
Date: 2026-02-09
"""
from typing import Any, Dict, List, Optional, Tuple

from storefront.core.database import is_uuid
from storefront.domain.product import Product
from storefront.repositories.base import SupabaseRepository


class ProductRepository(SupabaseRepository):
    """
    Repository for Product data access

    All product queries are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    table_name = "products"

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Product uuid

        Returns:
            Product or None if not found (including ids that are not uuids)
        """
        if not is_uuid(product_id):
            return None
        row = self._one(
            self._table().select("*").eq("id", product_id).maybe_single().execute()
        )
        return Product(**row) if row else None

    def find_by_slug(self, slug: str) -> Optional[Product]:
        row = self._one(
            self._table().select("*").eq("slug", slug).maybe_single().execute()
        )
        return Product(**row) if row else None

    def find_by_ids(self, product_ids: List[str]) -> Dict[str, Product]:
        """Products keyed by id; unknown or malformed ids are simply absent"""
        ids = list({product_id for product_id in product_ids if is_uuid(product_id)})
        if not ids:
            return {}
        response = self._table().select("*").in_("id", ids).execute()
        return {row["id"]: Product(**row) for row in self._rows(response)}

    def find_all(
        self,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        """
        Find products with filters

        Args:
            category: Filter by category
            is_active: Filter by active status
            search: Case-insensitive match on product name
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        query = self._table().select("*", count="exact")

        if category:
            query = query.eq("category", category)
        if is_active is not None:
            query = query.eq("is_active", is_active)
        if search:
            query = query.ilike("name", f"%{search}%")

        response = (
            query
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )

        products = [Product(**row) for row in self._rows(response)]
        total = response.count if response.count is not None else len(products)
        return products, total

    def create(self, row: Dict[str, Any]) -> str:
        """Insert a product row and return its id"""
        response = self._table().insert(row).execute()
        return self._rows(response)[0]["id"]

    def update(self, product_id: str, changes: Dict[str, Any]) -> None:
        self._table().update(changes).eq("id", product_id).execute()

    def delete(self, product_id: str) -> None:
        self._table().delete().eq("id", product_id).execute()

    def set_active(self, product_id: str, is_active: bool) -> None:
        self._table().update({"is_active": is_active}).eq("id", product_id).execute()
