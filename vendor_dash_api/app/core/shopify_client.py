"""
Shopify Admin REST API client with cursor pagination.
"""

import re
import logging
from dataclasses import dataclass
from typing import Optional, Dict, List, Any
import httpx

from app.config import Settings, normalize_domain, validate_settings
from app.core.security import sanitize_string_for_logging


logger = logging.getLogger(__name__)

PAGE_SIZE = 250

_NEXT_LINK_RE = re.compile(r'<([^>]+)>;\s*rel="next"')


class ShopifyError(Exception):
    """Upstream status or transport failure. status_code is None for transport errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class PageCursor:
    """Opaque continuation token pointing at the next page of a listing."""
    url: str

    @classmethod
    def from_link_header(cls, link_header: Optional[str]) -> Optional["PageCursor"]:
        """Return the cursor for rel="next", or None when the listing is exhausted."""
        if not link_header:
            return None
        match = _NEXT_LINK_RE.search(link_header)
        if not match:
            return None
        return cls(url=match.group(1))


class ShopifyClient:
    """
    Async Shopify Admin REST API client.

    No retries: every non-success response is raised as ShopifyError
    and left to the caller.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Shopify client.

        Args:
            settings: Explicit application settings (domain, token, version, limits)
            transport: Optional httpx transport (tests inject httpx.MockTransport)

        Raises:
            ValueError: If the store domain or access token is missing
        """
        is_valid, error = validate_settings(settings)
        if not is_valid:
            raise ValueError(error)

        self.domain = normalize_domain(settings.shopify_store_domain)
        self.api_version = settings.api_version
        self.max_pages = settings.max_pages
        self.timeout = settings.request_timeout
        self.base_url = f"https://{self.domain}/admin/api/{self.api_version}"

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={
                "X-Shopify-Access-Token": settings.shopify_access_token,
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict] = None,
        json_data: Optional[Dict] = None,
        error_prefix: str = "Shopify API error"
    ) -> httpx.Response:
        """
        Make a single HTTP request.

        Raises:
            ShopifyError: On non-2xx status or transport failure
        """
        logger.debug(f"{method} {url} params={params}")
        try:
            response = await self.client.request(method, url, params=params, json=json_data)
        except httpx.TimeoutException as e:
            raise ShopifyError(f"{error_prefix}: timeout ({e})") from e
        except httpx.RequestError as e:
            raise ShopifyError(f"{error_prefix}: request error ({e})") from e

        if not response.is_success:
            body = sanitize_string_for_logging(response.text[:200])
            logger.error(f"{method} {url} -> HTTP {response.status_code}: {body}")
            raise ShopifyError(f"{error_prefix}: {response.status_code}", status_code=response.status_code)

        return response

    async def _fetch_all_pages(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Follow rel="next" cursors from the first listing page until exhausted.

        Pages are fetched strictly in sequence; any failed page discards
        everything fetched so far.
        """
        all_products: List[Dict[str, Any]] = []
        url = f"{self.base_url}/products.json"
        request_params: Optional[Dict[str, Any]] = {"limit": PAGE_SIZE, **params}
        pages = 0

        while True:
            if pages >= self.max_pages:
                raise ShopifyError(f"Pagination exceeded {self.max_pages} pages")

            response = await self._request("GET", url, params=request_params)
            pages += 1

            data = response.json()
            all_products.extend(data.get("products") or [])

            cursor = PageCursor.from_link_header(response.headers.get("link"))
            if cursor is None:
                break

            # The cursor URL already carries limit and page_info
            url = cursor.url
            request_params = None

        logger.info(f"Fetched {len(all_products)} products in {pages} page(s) with filter {params}")
        return all_products

    async def fetch_products_by_vendor(self, vendor: str = "Wellbeing") -> List[Dict[str, Any]]:
        """
        List every product from one vendor.

        Args:
            vendor: Vendor name

        Returns:
            Products in upstream order, across all pages
        """
        return await self._fetch_all_pages({"vendor": vendor})

    async def fetch_all_active_products(self) -> List[Dict[str, Any]]:
        """List every product with status=active, across all pages."""
        return await self._fetch_all_pages({"status": "active"})

    async def update_product(self, product_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update product fields.

        Args:
            product_id: Product ID
            data: Update data (partial product object)

        Returns:
            Response body (contains 'product')
        """
        url = f"{self.base_url}/products/{product_id}.json"
        payload = {"product": {"id": product_id, **data}}
        response = await self._request(
            "PUT",
            url,
            json_data=payload,
            error_prefix="Failed to update product"
        )
        return response.json()

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
