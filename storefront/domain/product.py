"""
Product Domain Model

Represents a product entity in the JRadiance catalog.
This is the single source of truth for product data structure.

Author: JRadiance
Date: 2026-02-09
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List, Dict, Union
from datetime import datetime
from decimal import Decimal
import re


AttributeValue = Union[str, int, float, bool, None]

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class Product(BaseModel):
    """
    Product domain model - represents a product in our catalog

    This model matches the products table and provides type safety
    for all product-related operations.

    Fields:
        id: Product id (uuid)
        name: Product name
        slug: URL slug used by /products/{slug}
        description: Long description (optional)
        category: Product category (body care, skin care, ...)

        # Pricing and inventory
        price: Regular selling price (NGN)
        discount_price: Promotional price, used instead of price when set
        stock_quantity: Units available
        sku: Stock Keeping Unit (optional)

        # Media and attributes
        images: Public URLs of uploaded images, first one is the cover
        attributes: Free-form key/value attributes (size, scent, ...)

        # Metadata
        is_active: Whether product is visible in the shop
        created_by: admin_staff id of the creator
        created_at: When product was created
        updated_at: When product was last updated
    """

    id: str = Field(..., description="Product id")
    name: str = Field(..., description="Product name")
    slug: str = Field(..., description="URL slug")
    description: Optional[str] = Field(None, description="Product description")
    category: Optional[str] = Field(None, description="Product category")

    price: Decimal = Field(..., description="Regular price", ge=0)
    discount_price: Optional[Decimal] = Field(None, description="Discounted price", ge=0)
    stock_quantity: int = Field(0, description="Units in stock", ge=0)
    sku: Optional[str] = Field(None, description="Stock Keeping Unit")

    images: List[str] = Field(default_factory=list, description="Image URLs")
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict, description="Product attributes")

    is_active: bool = Field(True, description="Visible in the shop")
    created_by: Optional[str] = Field(None, description="Creator admin_staff id")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    @field_validator("images", mode="before")
    @classmethod
    def _null_images(cls, value):
        return value or []

    @field_validator("attributes", mode="before")
    @classmethod
    def _null_attributes(cls, value):
        return value or {}

    @property
    def effective_price(self) -> Decimal:
        """Discount price when set (and non-zero), otherwise the regular price"""
        return self.discount_price or self.price

    @property
    def cover_image(self) -> Optional[str]:
        return self.images[0] if self.images else None

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    def to_dict(self) -> dict:
        """Convert to dictionary with computed fields and Decimal to float"""
        data = self.model_dump(mode="json")

        for field in ['price', 'discount_price']:
            if data.get(field) is not None:
                data[field] = float(data[field])

        data['effective_price'] = float(self.effective_price)
        data['in_stock'] = self.in_stock
        data['cover_image'] = self.cover_image
        return data


class ProductCreate(BaseModel):
    """Schema for creating a new product"""
    name: str = Field(..., min_length=1)
    slug: str
    description: Optional[str] = None
    category: str
    price: Decimal = Field(..., ge=0)
    discount_price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: int = Field(0, ge=0)
    sku: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict)

    @field_validator("slug")
    @classmethod
    def _valid_slug(cls, value: str) -> str:
        if not SLUG_PATTERN.match(value):
            raise ValueError("slug must be lower-case letters, digits and single hyphens")
        return value

    def to_row(self) -> dict:
        return self.model_dump(mode="json")


class ProductUpdate(BaseModel):
    """Schema for updating an existing product (partial)"""
    name: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    discount_price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    sku: Optional[str] = None
    images: Optional[List[str]] = None
    attributes: Optional[Dict[str, AttributeValue]] = None
    is_active: Optional[bool] = None

    @field_validator("slug")
    @classmethod
    def _valid_slug(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not SLUG_PATTERN.match(value):
            raise ValueError("slug must be lower-case letters, digits and single hyphens")
        return value

    def to_changes(self) -> dict:
        """Only the fields the caller actually sent"""
        return self.model_dump(mode="json", exclude_unset=True)
