"""
Product status operation: toggle a single product between active and draft.
"""

import logging
from enum import Enum
from typing import Dict, Any

from app.core.shopify_client import ShopifyClient, ShopifyError


logger = logging.getLogger(__name__)


class ProductStatus(str, Enum):
    """Storefront visibility state. Draft products are hidden from customers."""
    ACTIVE = "active"
    DRAFT = "draft"


class InvalidStatusError(ValueError):
    """Requested status is outside the active/draft enumeration."""
    pass


def parse_status(value: Any) -> ProductStatus:
    """
    Validate a raw status value.

    Raises:
        InvalidStatusError: If value is not 'active' or 'draft'
    """
    try:
        return ProductStatus(value)
    except (TypeError, ValueError):
        raise InvalidStatusError(f"Invalid status: {value!r}") from None


async def set_product_status(
    client: ShopifyClient,
    product_id: int,
    status: Any
) -> Dict[str, Any]:
    """
    Set one product's status upstream.

    Validation happens before any request is made. There is no batching:
    bulk changes are a caller-side loop of these calls, with no rollback
    if one of them fails.

    Args:
        client: ShopifyClient instance
        product_id: Product ID
        status: Requested status ('active' or 'draft')

    Returns:
        Updated product dict as returned by Shopify

    Raises:
        InvalidStatusError: If status is invalid (no upstream call made)
        ShopifyError: If the upstream update fails or returns no product
    """
    new_status = parse_status(status)

    logger.info(f"Setting product {product_id} status to {new_status.value}")
    result = await client.update_product(product_id, {"status": new_status.value})
    product = result.get("product") if isinstance(result, dict) else None
    if not product:
        raise ShopifyError(f"Failed to update product: no product in response for {product_id}")
    return product
