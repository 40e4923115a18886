"""
Feed generation service - fetch, transform, serialize.
"""

import logging

from app.core.shopify_client import ShopifyClient
from .models import FeedConfig
from .fetcher import fetch_feed_items
from .xml_writer import write_feed_xml


logger = logging.getLogger(__name__)


async def generate_feed(client: ShopifyClient, config: FeedConfig) -> str:
    """
    Build the catalog feed from all active products.

    The document is only rendered once the whole listing has been fetched;
    a failed fetch raises before any XML exists.

    Raises:
        ShopifyError: If fetching products fails
    """
    feed_items = await fetch_feed_items(client, config)
    xml_string = write_feed_xml(feed_items, config)
    logger.info(f"Generated feed with {len(feed_items)} items ({len(xml_string)} chars)")
    return xml_string
