"""
Catalog Service - product management and storefront catalog reads

Author: JRadiance
Date: 2026-02-09
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from supabase import Client

from storefront.connectors.ftp_connector import FTPConnector
from storefront.core.auth import TokenUser
from storefront.domain.audit import ActivityAction, ResourceType
from storefront.domain.product import ProductCreate, ProductUpdate
from storefront.domain.results import ActionResult
from storefront.domain.user import UserRole
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.profile_repository import StaffRepository
from storefront.services.audit_service import AuditService
from storefront.services.base import AccessDenied, StorefrontService

logger = logging.getLogger(__name__)


class CatalogService(StorefrontService):
    """
    Product CRUD for staff (agents and above) plus public catalog reads.

    Public reads only ever expose active products.
    """

    def __init__(self, client: Optional[Client] = None, ftp: Optional[FTPConnector] = None):
        super().__init__(client)
        self.products = ProductRepository(self.client)
        self.staff = StaffRepository(self.client)
        self.audit = AuditService(self.client)
        self._ftp = ftp

    @property
    def ftp(self) -> FTPConnector:
        if self._ftp is None:
            self._ftp = FTPConnector()
        return self._ftp

    # ------------------------------------------------------------------
    # Storefront (public)
    # ------------------------------------------------------------------

    def list_active_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> ActionResult:
        try:
            products, total = self.products.find_all(
                category=category, is_active=True, search=search, limit=limit, offset=offset
            )
            return ActionResult.ok(data={
                "total": total,
                "limit": limit,
                "offset": offset,
                "count": len(products),
                "products": [product.to_dict() for product in products],
            })
        except Exception:
            logger.exception("Error fetching products")
            return ActionResult.fail("Failed to fetch products", status_code=500)

    def get_product(self, id_or_slug: str) -> ActionResult:
        """Single active product by slug, falling back to id"""
        try:
            product = self.products.find_by_slug(id_or_slug) or self.products.find_by_id(id_or_slug)
            if product is None or not product.is_active:
                return ActionResult.not_found("Product not found")
            return ActionResult.ok(data=product.to_dict())
        except Exception:
            logger.exception(f"Error fetching product {id_or_slug}")
            return ActionResult.fail("Failed to fetch product", status_code=500)

    # ------------------------------------------------------------------
    # Admin catalog
    # ------------------------------------------------------------------

    def list_products(
        self,
        caller: Optional[TokenUser],
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> ActionResult:
        try:
            self.require_role(caller, UserRole.AGENT)
            products, total = self.products.find_all(
                category=category, is_active=is_active, search=search, limit=limit, offset=offset
            )
            return ActionResult.ok(data={
                "total": total,
                "count": len(products),
                "products": [product.to_dict() for product in products],
            })
        except AccessDenied as denied:
            return denied.result
        except Exception:
            logger.exception("Error fetching admin catalog")
            return ActionResult.fail("Failed to fetch products", status_code=500)

    def create_product(self, caller: Optional[TokenUser], product_data: ProductCreate) -> ActionResult:
        try:
            self.require_role(caller, UserRole.AGENT)

            row = product_data.to_row()
            row["created_by"] = self.staff.find_id(caller.id)
            product_id = self.products.create(row)

            self.audit.log_action(
                caller.id,
                ActivityAction.PRODUCT_CREATED,
                ResourceType.PRODUCT,
                product_id,
                {"name": product_data.name},
            )

            logger.info(f"Product {product_id} ({product_data.slug}) created by {caller.id}")
            return ActionResult.ok(
                message="Product created successfully",
                data={"product_id": product_id},
                status_code=201,
            )
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception("Error creating product")
            return ActionResult.unexpected(e, "Failed to create product")

    def update_product(self, caller: Optional[TokenUser], product_id: str, updates: ProductUpdate) -> ActionResult:
        try:
            self.require_role(caller, UserRole.AGENT)

            changes = updates.to_changes()
            self.products.update(
                product_id,
                {**changes, "updated_at": datetime.now(timezone.utc).isoformat()},
            )

            self.audit.log_action(
                caller.id, ActivityAction.PRODUCT_UPDATED, ResourceType.PRODUCT, product_id, changes
            )

            return ActionResult.ok(message="Product updated successfully")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception(f"Error updating product {product_id}")
            return ActionResult.unexpected(e, "Failed to update product")

    def delete_product(self, caller: Optional[TokenUser], product_id: str) -> ActionResult:
        try:
            self.require_role(caller, UserRole.AGENT)

            self.products.delete(product_id)
            self.audit.log_action(caller.id, ActivityAction.PRODUCT_DELETED, ResourceType.PRODUCT, product_id)

            logger.info(f"Product {product_id} deleted by {caller.id}")
            return ActionResult.ok(message="Product deleted successfully")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception(f"Error deleting product {product_id}")
            return ActionResult.unexpected(e, "Failed to delete product")

    def toggle_product_status(self, caller: Optional[TokenUser], product_id: str) -> ActionResult:
        try:
            self.require_role(caller, UserRole.AGENT)

            product = self.products.find_by_id(product_id)
            if product is None:
                return ActionResult.not_found("Product not found")

            was_active = product.is_active
            self.products.set_active(product_id, not was_active)

            action = ActivityAction.PRODUCT_DEACTIVATED if was_active else ActivityAction.PRODUCT_ACTIVATED
            self.audit.log_action(caller.id, action, ResourceType.PRODUCT, product_id)

            return ActionResult.ok(message=f"Product {'deactivated' if was_active else 'activated'}")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception(f"Error toggling product status {product_id}")
            return ActionResult.unexpected(e, "Failed to toggle product status")

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------

    def upload_media(
        self,
        caller: Optional[TokenUser],
        files: Iterable[Tuple[str, bytes]],
        folder: Optional[str] = None
    ) -> ActionResult:
        """Upload product images/videos; succeeds only if every file uploaded"""
        try:
            self.require_role(caller, UserRole.AGENT)

            results = self.ftp.upload_files(files, folder)
            data = [result.model_dump() for result in results]
            failed = [result for result in results if not result.success]

            if failed:
                return ActionResult.fail(
                    f"{len(failed)} of {len(results)} uploads failed: {failed[0].error}",
                    status_code=502,
                    data=data,
                )
            return ActionResult.ok(message=f"Uploaded {len(results)} file(s)", data=data)
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception("Error uploading media")
            return ActionResult.unexpected(e, "Failed to upload files")

    def delete_media(self, caller: Optional[TokenUser], url: str, folder: Optional[str] = None) -> ActionResult:
        try:
            self.require_role(caller, UserRole.AGENT)

            result = self.ftp.delete_url(url, folder)
            if not result.success:
                return ActionResult.fail(result.error, status_code=502)
            return ActionResult.ok(message="File deleted successfully")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception("Error deleting media")
            return ActionResult.unexpected(e, "Failed to delete file")
