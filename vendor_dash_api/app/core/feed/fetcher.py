"""
Fetch active products from Shopify and convert them to feed items.
"""

import re
import logging
from typing import List, Dict, Any

from app.core.shopify_client import ShopifyClient
from .models import FeedConfig, FeedItem


logger = logging.getLogger(__name__)

# Only this inventory_management value means the quantity is authoritative
TRACKED_INVENTORY = 'shopify'

_TAG_RE = re.compile(r'<[^>]*>')
_WHITESPACE_RE = re.compile(r'\s+')


def strip_html(html: str) -> str:
    """Replace every tag with a space, collapse whitespace runs and trim."""
    if not html:
        return ''
    text = _TAG_RE.sub(' ', html)
    return _WHITESPACE_RE.sub(' ', text).strip()


def is_in_stock(variant: Dict[str, Any]) -> bool:
    """
    Untracked inventory is always in stock, whatever the quantity says.
    Tracked inventory is in stock only while the quantity is positive.
    """
    if variant.get('inventory_management') != TRACKED_INVENTORY:
        return True
    return _safe_int(variant.get('inventory_quantity')) > 0


def availability_label(variant: Dict[str, Any]) -> str:
    return 'in stock' if is_in_stock(variant) else 'out of stock'


def build_product_url(storefront_domain: str, handle: str, variant_id: Any) -> str:
    """Storefront product page preselecting the given variant."""
    variant_part = '' if variant_id is None else str(variant_id)
    return f"https://{storefront_domain}/products/{handle or ''}?variant={variant_part}"


def _safe_int(value: Any, default: int = 0) -> int:
    """Convert value to int safely."""
    try:
        if value is None:
            return default
        return int(value)
    except (TypeError, ValueError):
        return default


def _text(value: Any) -> str:
    """None-safe string conversion."""
    return '' if value is None else str(value)


def product_to_feed_item(product: Dict[str, Any], config: FeedConfig) -> FeedItem:
    """
    Build the feed item for a product's first variant.

    Products without variants or images still produce an item, with the
    missing values left empty.
    """
    variants = product.get('variants') or []
    variant = variants[0] if variants else {}
    images = product.get('images') or []
    image_src = images[0].get('src') if images and isinstance(images[0], dict) else ''

    title = _text(product.get('title'))
    sale_price = _text(variant.get('price'))
    regular_price = _text(variant.get('compare_at_price')) or sale_price
    currency = config.price_currency

    return FeedItem(
        title=title,
        link=build_product_url(config.storefront_domain, product.get('handle'), variant.get('id')),
        description=strip_html(product.get('body_html') or title),
        item_group_id=_text(product.get('id')),
        id=_text(variant.get('id')),
        price=f"{regular_price} {currency}",
        sale_price=f"{sale_price} {currency}",
        availability=availability_label(variant),
        image_link=_text(image_src),
        brand=_text(product.get('vendor')),
        mpn=_text(variant.get('sku')),
    )


async def fetch_feed_items(
    client: ShopifyClient,
    config: FeedConfig
) -> List[FeedItem]:
    """
    Fetch all active products and convert to FeedItem objects, one per product.

    Args:
        client: ShopifyClient instance
        config: FeedConfig with storefront domain and currency

    Returns:
        List of FeedItem objects ready for XML generation

    Raises:
        ShopifyError: If any page of the listing fails
    """
    products = await client.fetch_all_active_products()

    items = [product_to_feed_item(product, config) for product in products]
    logger.info(f"Built {len(items)} feed items")
    return items
