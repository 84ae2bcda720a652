"""
WooCommerce Product Catalogue HTTP Client.

Purpose:
- Fetches published products from the shop's WooCommerce REST API (wc/v3)
- Returns raw product records; src.catalog.normalizer maps them to Product

Important:
- This client should be the ONLY place that talks to WooCommerce.
- Failures (HTTP errors, timeouts, non-JSON bodies) are logged and returned as
  an unsuccessful CatalogFetchResult, never raised.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from src.integrations.contracts.catalog import CatalogFetchResult, CatalogSource

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/wp-json/wc/v3/products"


class WooCommerceCatalogClient(CatalogSource):
    def __init__(
        self,
        base_url: Optional[str] = None,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        timeout_seconds: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("WC_BASE_URL", "")).rstrip("/")
        self.consumer_key = consumer_key if consumer_key is not None else os.getenv("WC_CONSUMER_KEY", "")
        self.consumer_secret = consumer_secret if consumer_secret is not None else os.getenv("WC_CONSUMER_SECRET", "")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout_seconds,
            auth=(self.consumer_key, self.consumer_secret),
            headers={"Content-Type": "application/json"},
            transport=self._transport,
        )

    async def fetch_products(
        self,
        search: str = "",
        category: str = "",
        limit: int = 20,
        page: int = 1,
    ) -> CatalogFetchResult:
        if not self.base_url:
            return CatalogFetchResult.failed("WooCommerce base URL is not configured.")

        params: Dict[str, Any] = {"per_page": str(limit), "status": "publish"}
        if search:
            params["search"] = search
        if category:
            params["category"] = category
        if page > 1:
            params["page"] = str(page)

        url = f"{self.base_url}{PRODUCTS_PATH}"
        try:
            async with self._client() as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("WooCommerce API error: %s %s", e.response.status_code, e.response.reason_phrase)
            return CatalogFetchResult.failed(f"WooCommerce API error: {e.response.status_code} {e.response.reason_phrase}")
        except httpx.RequestError as e:
            logger.error("WooCommerce request failed: %s", e)
            return CatalogFetchResult.failed(f"WooCommerce request failed: {e}")
        except ValueError as e:
            logger.error("WooCommerce returned invalid JSON: %s", e)
            return CatalogFetchResult.failed(f"WooCommerce returned invalid JSON: {e}")

        if not isinstance(data, list):
            logger.error("Unexpected WooCommerce payload type: %s", type(data).__name__)
            return CatalogFetchResult.failed("Unexpected WooCommerce payload")

        products = [p for p in data if isinstance(p, dict)]
        logger.info("Fetched %d WooCommerce products (search=%r, category=%r, page=%d)", len(products), search, category, page)
        return CatalogFetchResult(success=True, products=products)

    async def fetch_all(self, search: str = "", category: str = "", per_page: int = 100, max_pages: int = 10) -> CatalogFetchResult:
        """Walk result pages until a short page (or ``max_pages``) is reached."""
        collected: List[Dict[str, Any]] = []
        for page in range(1, max_pages + 1):
            result = await self.fetch_products(search=search, category=category, limit=per_page, page=page)
            if not result.success:
                if collected:
                    logger.warning("Stopping pagination at page %d: %s", page, result.error)
                    break
                return result
            collected.extend(result.products)
            if result.count < per_page:
                break
        return CatalogFetchResult(success=True, products=collected)

    async def fetch_product_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        if not self.base_url:
            return None

        url = f"{self.base_url}{PRODUCTS_PATH}/{product_id}"
        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Product %s not found: %s", product_id, e.response.status_code)
            return None
        except (httpx.RequestError, ValueError) as e:
            logger.error("Product fetch error for %s: %s", product_id, e)
            return None
        return data if isinstance(data, dict) else None
