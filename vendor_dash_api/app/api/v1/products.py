"""
Products API endpoints.
"""

import logging
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from typing import Optional

from app.config import Settings, get_settings
from app.deps import get_shopify_client
from app.core.shopify_client import ShopifyClient, ShopifyError
from app.core.ops.product_status import InvalidStatusError, set_product_status
from app.schemas.common import ErrorResponse
from app.schemas.products import (
    ProductListResponse,
    ProductUpdateResponse,
    StatusUpdateRequest
)

router = APIRouter()

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, upstream_status: Optional[int] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, upstream_status=upstream_status).model_dump(exclude_none=True)
    )


@router.get(
    "",
    response_model=ProductListResponse,
    responses={500: {"model": ErrorResponse}}
)
async def list_products(
    vendor: Optional[str] = Query(None),
    client: ShopifyClient = Depends(get_shopify_client),
    settings: Settings = Depends(get_settings)
):
    """
    List every product of a vendor (all pages).
    """
    vendor = vendor or settings.default_vendor

    try:
        products = await client.fetch_products_by_vendor(vendor)
        response = ProductListResponse(
            success=True,
            count=len(products),
            products=products
        )
    except ShopifyError as e:
        logger.error(f"Error fetching products for vendor {vendor!r}: {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch products",
            upstream_status=e.status_code
        )
    except Exception as e:
        logger.exception(f"Unexpected error fetching products for vendor {vendor!r}: {str(e)}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch products")

    return response


@router.put(
    "/{product_id}",
    response_model=ProductUpdateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def update_product_status(
    product_id: int,
    request: StatusUpdateRequest,
    client: ShopifyClient = Depends(get_shopify_client)
):
    """
    Set a product to active or draft.
    """
    try:
        product = await set_product_status(client, product_id, request.status)
        response = ProductUpdateResponse(success=True, product=product)
    except InvalidStatusError as e:
        logger.warning(f"Rejected status update for product {product_id}: {e}")
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid status")
    except ShopifyError as e:
        logger.error(f"Error updating product {product_id}: {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to update product",
            upstream_status=e.status_code
        )
    except Exception as e:
        logger.exception(f"Unexpected error updating product {product_id}: {str(e)}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update product")

    return response
