"""Detect whether a customer message asks about specific products."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

DEFAULT_PRODUCT_KEYWORDS: Tuple[str, ...] = (
    "testosteron", "test", "tren", "trenbolon", "anavar", "winstrol", "dbol",
    "dianabol", "deca", "equipoise", "masteron", "primo", "primobolan",
    "hgh", "wachstumshormon", "peptid", "fatburner", "clenbuterol",
    "medipharma", "akra labs", "global pharma", "steroide", "tabletten",
)


@dataclass(frozen=True)
class ProductIntent:
    has_product_intent: bool
    search_terms: List[str] = field(default_factory=list)
    search_query: str = ""


def extract_product_intent(
    message: str,
    keywords: Sequence[str] = DEFAULT_PRODUCT_KEYWORDS,
) -> ProductIntent:
    """Collect every known product keyword contained in the message, in keyword-list order."""
    lowered = (message or "").lower()
    terms = [k for k in keywords if k and k.lower() in lowered]
    return ProductIntent(
        has_product_intent=bool(terms),
        search_terms=terms,
        search_query=" ".join(terms),
    )
