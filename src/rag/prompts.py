"""
System prompt assembly for the shop support bot.

The product block is rendered from the ranked search result; shop persona and
policy lines come from the `shop` section of config/bot_config.yml.
"""

from __future__ import annotations

import html
import re
from typing import List, Optional, Sequence

from src.catalog.normalizer import Product
from src.utils.bot_config_loader import ShopConfig

NO_PRODUCTS_TEXT = "Keine passenden Produkte gefunden."
PRICE_ON_REQUEST = "Preis auf Anfrage"

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def strip_html(text: str) -> str:
    """Drop tags, unescape entities and collapse whitespace."""
    if not text:
        return ""
    return _WS_RE.sub(" ", html.unescape(_TAG_RE.sub(" ", text))).strip()


def format_price(value: Optional[float]) -> str:
    if value is None:
        return PRICE_ON_REQUEST
    return f"{value:.2f}".replace(".", ",") + " €"


def render_product(product: Product) -> str:
    lines = [f"• {product.name or 'Unbenanntes Produkt'} ({format_price(product.price)})"]
    if product.sale_price is not None and product.regular_price is not None and product.sale_price < product.regular_price:
        lines.append(f"  Statt {format_price(product.regular_price)}")
    if product.manufacturer:
        lines.append(f"  Hersteller: {product.manufacturer}")
    if product.active_ingredient:
        lines.append(f"  Wirkstoff: {product.active_ingredient}")
    if product.categories:
        lines.append(f"  Kategorien: {product.categories}")
    if product.in_stock is not None:
        lines.append("  ✅ Verfügbar" if product.in_stock else "  ❌ Nicht verfügbar")
    if product.permalink:
        lines.append(f"  Link: {product.permalink}")
    description = strip_html(product.short_description)
    if description:
        lines.append(f"  {description}")
    return "\n".join(lines)


def render_products(products: Sequence[Product]) -> str:
    if not products:
        return NO_PRODUCTS_TEXT
    return "\n\n".join(render_product(p) for p in products)


def build_system_prompt(
    shop: ShopConfig,
    products: Sequence[Product],
    priority_brands: Sequence[str] = (),
    targeted: bool = False,
) -> str:
    parts: List[str] = [
        f"Du bist {shop.persona} für {shop.name}.",
        f"Antworte immer auf {shop.language}, es sei denn, der Kunde schreibt in einer anderen Sprache.",
        "Empfiehl ausschließlich Produkte aus den Produktinformationen unten und erfinde keine Preise oder Links.",
    ]
    if priority_brands:
        parts.append(f"Bevorzuge bei gleichwertigen Produkten die Marke(n): {', '.join(priority_brands)}.")

    parts.append("")
    parts.append("=== AKTUELLE PRODUKTINFORMATIONEN ===")
    parts.append(render_products(products))
    if products:
        note = " basierend auf der Kundenanfrage" if targeted else ""
        parts.append(f"({len(products)} Produkte geladen{note})")
    parts.append("=== ENDE PRODUKTINFORMATIONEN ===")

    if shop.policies:
        parts.append("")
        parts.extend(f"- {line}" for line in shop.policies)

    return "\n".join(parts)
