"""
Keyword relevance search over an in-memory product catalog.

Matching is plain substring containment on the lowercased searchable text of
each product; there is no tokenization on the catalog side and no scoring.
Ranking is a stable two-bucket partition: products of a priority brand come
first, everything else after, and catalog order is kept inside each bucket.

When nothing matches at all, a fixed, ordered table of product categories is
consulted. The first category whose keyword or synonym appears in the query
is used to re-scan the catalog by category / active ingredient; later entries
are never tried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple

from src.catalog.normalizer import Product, normalize

logger = logging.getLogger(__name__)

MAX_RESULTS = 5
MIN_WORD_LENGTH = 3

# Per-bucket caps applied to fallback results only.
FALLBACK_PRIORITY_LIMIT = 3
FALLBACK_OTHER_LIMIT = 2

DEFAULT_PRIORITY_BRANDS: Tuple[str, ...] = ("medi pharma", "medipharma")


@dataclass(frozen=True)
class FallbackCategory:
    """One row of the fallback table: category keyword, query synonyms, fields to filter."""

    keyword: str
    synonyms: Tuple[str, ...] = ()
    fields: Tuple[str, ...] = ("categories", "active_ingredient")

    def triggered_by(self, query_lower: str) -> bool:
        if self.keyword.lower() in query_lower:
            return True
        return any(s and s.lower() in query_lower for s in self.synonyms)

    def covers(self, product: Product) -> bool:
        needle = self.keyword.lower()
        return any(needle in str(getattr(product, f, "") or "").lower() for f in self.fields)


DEFAULT_FALLBACK_CATEGORIES: Tuple[FallbackCategory, ...] = (
    FallbackCategory("testosteron", ("testo", "enantat", "cypionat", "propionat", "sustanon")),
    FallbackCategory("peptide", ("peptid", "bpc", "tb-500", "ipamorelin", "hgh", "wachstumshormon")),
    FallbackCategory("steroide", ("steroid", "anabolika", "muskelaufbau")),
    FallbackCategory("tabletten", ("tablette", "tabs", "oral", "kapseln", "pillen")),
    FallbackCategory("fatburner", ("fett", "abnehmen", "diät", "diaet", "definition", "clenbuterol")),
)


def search_words(query: str) -> List[str]:
    """Lowercased whitespace tokens of the query that are at least three characters long."""
    return [w for w in query.lower().split() if len(w) >= MIN_WORD_LENGTH]


def is_priority(product: Product, priority_brands: Sequence[str] = DEFAULT_PRIORITY_BRANDS) -> bool:
    manufacturer = product.manufacturer.lower()
    return any(brand.lower() in manufacturer for brand in priority_brands if brand)


def partition_by_brand(
    products: Iterable[Product],
    priority_brands: Sequence[str] = DEFAULT_PRIORITY_BRANDS,
) -> Tuple[List[Product], List[Product]]:
    """Stable split into (priority, other)."""
    priority: List[Product] = []
    other: List[Product] = []
    for product in products:
        (priority if is_priority(product, priority_brands) else other).append(product)
    return priority, other


def search(
    query: str,
    catalog: Iterable[Any],
    *,
    priority_brands: Sequence[str] = DEFAULT_PRIORITY_BRANDS,
    fallback_categories: Sequence[FallbackCategory] = DEFAULT_FALLBACK_CATEGORIES,
    max_results: int = MAX_RESULTS,
) -> List[Product]:
    """
    Return up to ``max_results`` products matching ``query``, priority brand first.

    Args:
        query: Free text from the customer message
        catalog: Raw catalog records in any shape ``normalize`` understands
        priority_brands: Manufacturer markers whose products are ranked first
        fallback_categories: Ordered category table used when nothing matches
        max_results: Length cap of the returned list, never above MAX_RESULTS

    Returns:
        Ranked list of normalized products (possibly empty)
    """
    query_lower = (query or "").lower()
    words = search_words(query_lower)
    products = [normalize(record) for record in catalog]

    matches = []
    for product in products:
        text = product.searchable_text()
        if query_lower in text or any(w in text for w in words):
            matches.append(product)

    priority, other = partition_by_brand(matches, priority_brands)

    if not priority and not other:
        priority, other = _fallback(query_lower, products, priority_brands, fallback_categories)

    ranked = (priority + other)[: min(max_results, MAX_RESULTS)]
    logger.debug(
        "Search '%s': %d/%d matched, returning %d (%d priority)",
        query,
        len(matches),
        len(products),
        len(ranked),
        min(len(priority), len(ranked)),
    )
    return ranked


def _fallback(
    query_lower: str,
    products: List[Product],
    priority_brands: Sequence[str],
    fallback_categories: Sequence[FallbackCategory],
) -> Tuple[List[Product], List[Product]]:
    for category in fallback_categories:
        if not category.triggered_by(query_lower):
            continue
        in_category = [p for p in products if category.covers(p)]
        priority, other = partition_by_brand(in_category, priority_brands)
        logger.debug(
            "Fallback category '%s' matched query, %d products in category",
            category.keyword,
            len(in_category),
        )
        return priority[:FALLBACK_PRIORITY_LIMIT], other[:FALLBACK_OTHER_LIMIT]
    return [], []


@dataclass(frozen=True)
class ProductSearch:
    """Search configured once (brands, fallback table, result cap) and reused per message."""

    priority_brands: Tuple[str, ...] = DEFAULT_PRIORITY_BRANDS
    fallback_categories: Tuple[FallbackCategory, ...] = DEFAULT_FALLBACK_CATEGORIES
    max_results: int = MAX_RESULTS

    def search(self, query: str, catalog: Iterable[Any]) -> List[Product]:
        return search(
            query,
            catalog,
            priority_brands=self.priority_brands,
            fallback_categories=self.fallback_categories,
            max_results=self.max_results,
        )
