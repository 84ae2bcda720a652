"""Pytest fixtures for catalog search, retrieval and webhook tests."""

import pytest

from src.integrations.contracts.catalog import CatalogFetchResult, CatalogSource


class FakeCatalogSource(CatalogSource):
    def __init__(self, records=None, fail_with=None):
        self.records = list(records or [])
        self.fail_with = fail_with
        self.calls = []

    async def fetch_products(self, search="", category="", limit=20):
        self.calls.append({"search": search, "category": category, "limit": limit})
        if self.fail_with:
            return CatalogFetchResult.failed(self.fail_with)
        return CatalogFetchResult(success=True, products=list(self.records))

    async def fetch_product_by_id(self, product_id):
        for r in self.records:
            if str(r.get("id")) == str(product_id):
                return r
        return None


@pytest.fixture
def woo_product():
    """A WooCommerce wc/v3 product as returned by GET /products."""
    return {
        "id": 101,
        "name": "Ripomed 250",
        "permalink": "https://shop.example/produkt/ripomed-250",
        "description": "<p>Mehrdosen-Ampulle</p>",
        "short_description": "<p>Testosteron-Mischung</p>",
        "price": "39.90",
        "regular_price": "45.00",
        "sale_price": "39.90",
        "stock_status": "instock",
        "categories": [{"id": 1, "name": "Steroide", "slug": "steroide"}, {"id": 2, "name": "Injektionen"}],
        "attributes": [
            {"id": 0, "name": "Hersteller", "options": ["Medi Pharma GmbH"]},
            {"id": 0, "name": "Wirkstoff", "options": ["Testosteron Enantat"]},
            {"id": 0, "name": "Trägerstoff", "options": ["Öl"]},
        ],
    }


@pytest.fixture
def sample_catalog():
    return [
        {
            "id": 1,
            "Name": "Ripomed 250",
            "Kategorien": ["Steroide", "Injektionen"],
            "Hersteller": "Medi Pharma GmbH",
            "Wirkstoff": "Testosteron Enantat",
            "Regulärer Preis": "59,00",
            "Link": "https://shop.example/produkt/ripomed-250",
        },
        {
            "id": 2,
            "Name": "Testo E 250",
            "Kategorien": "Steroide",
            "Hersteller": "Global Pharma",
            "Wirkstoff": "Testosteron Enantat",
            "Regulärer Preis": "45,00",
            "Angebotspreis": "39,90",
        },
        {
            "id": 3,
            "Name": "Akratropin 100 IE",
            "Kategorien": ["Peptide", "HGH"],
            "Hersteller": "Akra Labs",
            "Wirkstoff": "Somatropin",
        },
    ]


@pytest.fixture
def catalog_source(sample_catalog):
    return FakeCatalogSource(sample_catalog)


@pytest.fixture
def failing_catalog_source():
    return FakeCatalogSource(fail_with="WooCommerce API error: 503 Service Unavailable")
