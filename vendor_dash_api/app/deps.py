"""
Dependency injection for FastAPI.
"""

import logging
from typing import AsyncIterator
from fastapi import Depends, HTTPException, status

from app.config import Settings, get_settings
from app.core.feed.models import FeedConfig
from app.core.shopify_client import ShopifyClient


logger = logging.getLogger(__name__)


async def get_shopify_client(
    settings: Settings = Depends(get_settings)
) -> AsyncIterator[ShopifyClient]:
    """
    Create a ShopifyClient for the current request and close it afterwards.

    Raises:
        HTTPException: If the upstream connection is not configured.
    """
    try:
        client = ShopifyClient(settings)
    except ValueError as e:
        logger.error(f"Shopify client not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    try:
        yield client
    finally:
        await client.close()


def get_feed_config(settings: Settings = Depends(get_settings)) -> FeedConfig:
    """Feed configuration built from settings."""
    return FeedConfig.from_settings(settings)
