"""
Product-related schemas.
"""

from pydantic import BaseModel, ConfigDict
from typing import Any, Optional, List


class Variant(BaseModel):
    """Purchasable configuration of a product."""
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    price: Optional[str] = ""
    compare_at_price: Optional[str] = None
    inventory_quantity: Optional[int] = 0
    inventory_management: Optional[str] = None
    sku: Optional[str] = None


class ProductImage(BaseModel):
    """Product image."""
    model_config = ConfigDict(extra="allow")

    src: Optional[str] = ""


class Product(BaseModel):
    """Shopify product as returned upstream; unknown fields pass through."""
    model_config = ConfigDict(extra="allow")

    id: int
    title: Optional[str] = ""
    body_html: Optional[str] = None
    handle: Optional[str] = ""
    vendor: Optional[str] = ""
    product_type: Optional[str] = ""
    status: Optional[str] = ""
    updated_at: Optional[str] = None
    variants: Optional[List[Variant]] = []
    images: Optional[List[ProductImage]] = []
    tags: Optional[str] = ""


class ProductListResponse(BaseModel):
    """Product list response."""
    success: bool = True
    count: int
    products: List[Product]


class StatusUpdateRequest(BaseModel):
    """Status update body. Validated by the status operation, not here, so bad values get a 400."""
    status: Any = None


class ProductUpdateResponse(BaseModel):
    """Status update response."""
    success: bool = True
    product: Product
