"""
Product catalog core: record normalization, intent detection and relevance search.

Everything in this package works on in-memory data only. Catalog loading
lives in src.integrations (local snapshot or WooCommerce REST).
"""

from .intent import ProductIntent, extract_product_intent
from .normalizer import Product, normalize
from .search import (
    DEFAULT_FALLBACK_CATEGORIES,
    DEFAULT_PRIORITY_BRANDS,
    FallbackCategory,
    ProductSearch,
    search,
)

__all__ = [
    "DEFAULT_FALLBACK_CATEGORIES",
    "DEFAULT_PRIORITY_BRANDS",
    "FallbackCategory",
    "Product",
    "ProductIntent",
    "ProductSearch",
    "extract_product_intent",
    "normalize",
    "search",
]
