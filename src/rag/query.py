"""
Product retrieval for one inbound message: detect intent, load a catalog page,
rank it with the relevance search.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from src.catalog.intent import DEFAULT_PRODUCT_KEYWORDS, ProductIntent, extract_product_intent
from src.catalog.normalizer import Product
from src.catalog.search import ProductSearch
from src.integrations.contracts.catalog import CatalogSource

logger = logging.getLogger(__name__)

TARGETED_LIMIT = 15
OVERVIEW_LIMIT = 8


@dataclass
class RetrievalResult:
    intent: ProductIntent
    products: List[Product] = field(default_factory=list)
    catalog_success: bool = True
    catalog_count: int = 0
    catalog_error: Optional[str] = None

    def summary(self) -> dict:
        return {
            "intent_detected": self.intent.has_product_intent,
            "search_terms": list(self.intent.search_terms),
            "products_found": len(self.products),
            "catalog_count": self.catalog_count,
            "catalog_success": self.catalog_success,
        }


async def retrieve_products(
    message: str,
    source: CatalogSource,
    searcher: Optional[ProductSearch] = None,
    keywords: Sequence[str] = DEFAULT_PRODUCT_KEYWORDS,
    targeted_limit: int = TARGETED_LIMIT,
    overview_limit: int = OVERVIEW_LIMIT,
) -> RetrievalResult:
    """
    Load catalog records relevant to ``message`` and rank them.

    A catalog source failure is not an error here: it yields an empty product
    list (and catalog_success=False) so the prompt can say nothing was found.
    """
    searcher = searcher or ProductSearch()
    intent = extract_product_intent(message, keywords)

    if intent.has_product_intent:
        logger.info("Searching catalog for specific products: %s", intent.search_query)
        fetched = await source.fetch_products(search=intent.search_query, limit=targeted_limit)
    else:
        logger.info("Fetching general product overview")
        fetched = await source.fetch_products(limit=overview_limit)

    logger.info("Catalog fetch: success=%s count=%d", fetched.success, fetched.count)

    products = searcher.search(message, fetched.products) if fetched.success else []
    return RetrievalResult(
        intent=intent,
        products=products,
        catalog_success=fetched.success,
        catalog_count=fetched.count,
        catalog_error=fetched.error,
    )
