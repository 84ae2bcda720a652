"""
Catalog source contract.

Defines the shape every product catalogue source returns, so the retrieval
step never has to care whether products came from:
- clients/mocks/local_product_catalogues.py (JSON snapshot on disk)
- clients/real_http/woocommerce_product_catalogues.py (WooCommerce REST API)

Sources never raise for load failures. They return an unsuccessful result
with an empty product list so the message flow can continue with a
"no products found" prompt instead of aborting.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CatalogFetchResult:
    success: bool
    products: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.products)

    @classmethod
    def failed(cls, error: str) -> "CatalogFetchResult":
        return cls(success=False, products=[], error=error)


class CatalogSource(ABC):
    """Every product catalogue client must implement this interface."""

    @abstractmethod
    async def fetch_products(self, search: str = "", category: str = "", limit: int = 20) -> CatalogFetchResult:
        """Return raw catalog records; remote sources pre-filter and cap the page at ``limit``."""

    @abstractmethod
    async def fetch_product_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a single raw record, or None when it doesn't exist or can't be loaded."""
