"""
Catalog record normalization.

Catalog records arrive in different shapes depending on where they came from:
- WooCommerce REST products (snake_case keys, categories as objects, brand and
  ingredient data hidden in ``attributes``)
- local JSON snapshots exported by hand (often with German column names)
- already-normalized products, either as ``Product`` values or serialized with
  ``Product.to_dict()``

``normalize`` maps all of them onto one ``Product`` shape. It never raises:
missing or unusable values become ``""`` (text) or ``None`` (prices), so the
search code can treat every field as present.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

# Accepted keys per canonical field, checked in order; the first non-empty wins.
_NAME_KEYS = ("name", "Name", "Produktname", "title")
_SHORT_DESCRIPTION_KEYS = ("short_description", "shortDescription", "Kurzbeschreibung")
_LONG_DESCRIPTION_KEYS = ("long_description", "longDescription", "description", "Beschreibung")
_CATEGORY_KEYS = ("categories", "Kategorien", "category", "Kategorie")
_MANUFACTURER_KEYS = ("manufacturer", "Hersteller", "brand", "Marke")
_ACTIVE_INGREDIENT_KEYS = ("active_ingredient", "activeIngredient", "Wirkstoff")
_CARRIER_KEYS = ("carrier", "Trägerstoff", "Traegerstoff", "Träger")
_SALE_PRICE_KEYS = ("sale_price", "salePrice", "Angebotspreis")
_REGULAR_PRICE_KEYS = ("regular_price", "regularPrice", "Regulärer Preis", "price", "Preis")
_PERMALINK_KEYS = ("permalink", "Permalink", "url", "Link")
_STOCK_KEYS = ("in_stock", "inStock", "stock_status", "stockStatus", "Lagerstatus", "Verfügbar")

_IN_STOCK_VALUES = ("instock", "true", "yes", "ja", "verfügbar", "1")
_OUT_OF_STOCK_VALUES = ("outofstock", "onbackorder", "false", "no", "nein", "nicht verfügbar", "0")

# WooCommerce keeps these in ``attributes`` (matched by lowercased attribute name).
_ATTRIBUTE_NAMES = {
    "manufacturer": ("hersteller", "manufacturer", "marke", "brand"),
    "active_ingredient": ("wirkstoff", "active ingredient", "active_ingredient"),
    "carrier": ("trägerstoff", "traegerstoff", "träger", "carrier"),
}

_TEXT_FIELDS = (
    "name",
    "short_description",
    "long_description",
    "categories",
    "manufacturer",
    "active_ingredient",
    "carrier",
)


@dataclass(frozen=True)
class Product:
    """Canonical, read-only view of one catalog record."""

    name: str = ""
    short_description: str = ""
    long_description: str = ""
    categories: str = ""
    manufacturer: str = ""
    active_ingredient: str = ""
    carrier: str = ""
    sale_price: Optional[float] = None
    regular_price: Optional[float] = None
    permalink: str = ""
    # None when the source does not report availability.
    in_stock: Optional[bool] = None

    def searchable_text(self) -> str:
        """Lowercased text of all non-empty descriptive fields, space separated."""
        parts = [getattr(self, f) for f in _TEXT_FIELDS]
        return " ".join(p for p in parts if p).lower()

    @property
    def price(self) -> Optional[float]:
        """Effective price: the sale price when set, else the regular price."""
        return self.sale_price if self.sale_price is not None else self.regular_price

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def normalize(raw: Any) -> Product:
    """Project a raw catalog record onto ``Product``."""
    if isinstance(raw, Product):
        return raw
    if not isinstance(raw, Mapping):
        return Product()

    attributes = _attribute_options(raw)

    return Product(
        name=_text(_first(raw, _NAME_KEYS)),
        short_description=_text(_first(raw, _SHORT_DESCRIPTION_KEYS)),
        long_description=_text(_first(raw, _LONG_DESCRIPTION_KEYS)),
        categories=_joined(_first(raw, _CATEGORY_KEYS)),
        manufacturer=_text(_first(raw, _MANUFACTURER_KEYS)) or attributes.get("manufacturer") or _brand_names(raw),
        active_ingredient=_text(_first(raw, _ACTIVE_INGREDIENT_KEYS)) or attributes.get("active_ingredient", ""),
        carrier=_text(_first(raw, _CARRIER_KEYS)) or attributes.get("carrier", ""),
        sale_price=_price(_first(raw, _SALE_PRICE_KEYS)),
        regular_price=_price(_first(raw, _REGULAR_PRICE_KEYS)),
        permalink=_text(_first(raw, _PERMALINK_KEYS)),
        in_stock=_stock(_first(raw, _STOCK_KEYS)),
    )


def _first(data: Mapping, keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if isinstance(value, (list, tuple)) and not value:
            continue
        return value
    return None


def _text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    if isinstance(value, Mapping):
        return _text(value.get("name"))
    if isinstance(value, (list, tuple)):
        return _joined(value)
    return ""


def _joined(value: Any) -> str:
    """Category-style value: a string, or a sequence joined with ", " in source order."""
    if isinstance(value, (list, tuple)):
        items = (_text(v) for v in value)
        return ", ".join(i for i in items if i)
    return _text(value)


def _price(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        cleaned = value.strip().replace("€", "").replace(" ", "")
        if not cleaned:
            return None
        # "1.234,50" -> "1234.50", "49,90" -> "49.90"
        if "," in cleaned:
            cleaned = cleaned.replace(".", "").replace(",", ".")
        try:
            return float(cleaned)
        except ValueError:
            return None
    return None


def _stock(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    label = _text(value).lower()
    if label in _IN_STOCK_VALUES:
        return True
    if label in _OUT_OF_STOCK_VALUES:
        return False
    return None


def _attribute_options(raw: Mapping) -> Dict[str, str]:
    attributes = raw.get("attributes")
    if not isinstance(attributes, (list, tuple)):
        return {}

    found: Dict[str, str] = {}
    for attribute in attributes:
        if not isinstance(attribute, Mapping):
            continue
        label = _text(attribute.get("name")).lower()
        for field_name, names in _ATTRIBUTE_NAMES.items():
            if label in names and field_name not in found:
                options = attribute.get("options")
                value = _joined(options) if options is not None else _text(attribute.get("option"))
                if value:
                    found[field_name] = value
    return found


def _brand_names(raw: Mapping) -> str:
    brands = raw.get("brands")
    if not isinstance(brands, Iterable) or isinstance(brands, (str, bytes, Mapping)):
        return ""
    return _joined(list(brands))
