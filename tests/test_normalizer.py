from src.catalog.normalizer import Product, normalize


def test_woocommerce_record_is_normalized(woo_product):
    p = normalize(woo_product)

    assert p.name == "Ripomed 250"
    assert p.short_description == "<p>Testosteron-Mischung</p>"
    assert p.long_description == "<p>Mehrdosen-Ampulle</p>"
    assert p.categories == "Steroide, Injektionen"
    assert p.manufacturer == "Medi Pharma GmbH"
    assert p.active_ingredient == "Testosteron Enantat"
    assert p.carrier == "Öl"
    assert p.sale_price == 39.9
    assert p.regular_price == 45.0
    assert p.permalink == "https://shop.example/produkt/ripomed-250"


def test_localized_snapshot_aliases():
    p = normalize(
        {
            "Name": "Clen 40",
            "Kurzbeschreibung": "100 Tabletten",
            "Kategorien": "Fatburner",
            "Hersteller": "Medipharma",
            "Wirkstoff": "Clenbuterol",
            "Regulärer Preis": "1.234,50",
            "Angebotspreis": "",
            "Link": "https://shop.example/clen-40",
        }
    )

    assert p.name == "Clen 40"
    assert p.short_description == "100 Tabletten"
    assert p.manufacturer == "Medipharma"
    assert p.regular_price == 1234.5
    assert p.sale_price is None
    assert p.permalink == "https://shop.example/clen-40"


def test_camel_case_aliases():
    p = normalize({"name": "X", "shortDescription": "kurz", "activeIngredient": "BPC-157", "salePrice": 12})
    assert p.short_description == "kurz"
    assert p.active_ingredient == "BPC-157"
    assert p.sale_price == 12.0


def test_category_sequence_keeps_source_order():
    p = normalize({"categories": ["Peptide", "HGH", "", {"name": "Injektionen"}]})
    assert p.categories == "Peptide, HGH, Injektionen"


def test_missing_fields_default_to_empty_or_none():
    p = normalize({})
    assert p == Product()
    assert p.name == ""
    assert p.sale_price is None
    assert p.regular_price is None


def test_unusable_values_never_raise():
    p = normalize({"name": None, "categories": 42, "sale_price": "auf Anfrage", "regular_price": True, "attributes": "x"})
    assert p.name == ""
    assert p.categories == "42"
    assert p.sale_price is None
    assert p.regular_price is None


def test_non_mapping_record_gives_empty_product():
    assert normalize(None) == Product()
    assert normalize(["not", "a", "record"]) == Product()


def test_normalizing_a_normalized_product_is_idempotent(woo_product, sample_catalog):
    for raw in [woo_product, *sample_catalog, {}]:
        once = normalize(raw)
        assert normalize(once.to_dict()) == once


def test_searchable_text_skips_empty_fields_and_lowercases():
    p = Product(name="Ripomed 250", manufacturer="Medi Pharma GmbH", carrier="Öl")
    assert p.searchable_text() == "ripomed 250 medi pharma gmbh öl"


def test_effective_price_prefers_sale_price():
    assert Product(sale_price=9.5, regular_price=12.0).price == 9.5
    assert Product(regular_price=12.0).price == 12.0
    assert Product().price is None


def test_product_value_passes_through_unchanged():
    p = Product(name="Ripomed 250", manufacturer="Medi Pharma GmbH", active_ingredient="Testosteron", in_stock=True)
    assert normalize(p) is p
    assert normalize(normalize(p)) == p


def test_stock_status_is_carried_through(woo_product):
    assert normalize(woo_product).in_stock is True
    assert normalize({"name": "Clen 40", "stock_status": "outofstock"}).in_stock is False
    assert normalize({"name": "Clen 40", "stock_status": "onbackorder"}).in_stock is False
    assert normalize({"Name": "Clen 40", "Lagerstatus": "instock"}).in_stock is True
    assert normalize({"name": "Clen 40", "inStock": False}).in_stock is False
    assert normalize({"name": "Clen 40"}).in_stock is None
    assert normalize({"name": "Clen 40", "stock_status": "vielleicht"}).in_stock is None


def test_stock_status_survives_to_dict_round_trip():
    once = normalize({"name": "Clen 40", "stock_status": "outofstock"})
    assert normalize(once.to_dict()) == once
