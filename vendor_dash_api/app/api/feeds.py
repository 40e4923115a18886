"""
Feed API endpoint.
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from app.deps import get_shopify_client, get_feed_config
from app.core.shopify_client import ShopifyClient
from app.core.feed.models import FeedConfig
from app.core.feed.service import generate_feed
from app.schemas.common import ErrorResponse

router = APIRouter(tags=["Feeds"])

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
}


@router.get(
    "/feed",
    response_class=Response,
    responses={
        200: {"content": {"application/xml": {}}},
        500: {"model": ErrorResponse}
    }
)
async def get_feed(
    client: ShopifyClient = Depends(get_shopify_client),
    config: FeedConfig = Depends(get_feed_config)
):
    """
    Catalog feed of all active products, regenerated on every request.
    """
    try:
        xml_string = await generate_feed(client, config)
    except Exception as e:
        logger.exception(f"Error generating feed: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Failed to generate feed").model_dump(exclude_none=True)
        )

    return Response(
        content=xml_string.encode("utf-8"),
        media_type="application/xml",
        headers=NO_CACHE_HEADERS
    )
