#!/usr/bin/env python3
"""
Run the catalog relevance search against a local JSON snapshot.

Prints the ranked products, or with --prompt the product block exactly as it
would be placed into the system prompt.

  python scripts/run_search.py "testosteron enantat"
  python scripts/run_search.py --snapshot data/catalog/products.json --prompt "fatburner"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogClient
from src.rag.prompts import render_products
from src.rag.query import retrieve_products
from src.utils.bot_config_loader import load_bot_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description="Search the product catalog snapshot")
    parser.add_argument("query", help="Customer message / search text")
    parser.add_argument("--snapshot", type=Path, default=None, help="JSON snapshot (default: catalog.local_path from config)")
    parser.add_argument("--config", type=Path, default=None, help="Bot config YAML (default: config/bot_config.yml)")
    parser.add_argument("--prompt", action="store_true", help="Print the rendered prompt block instead of a table")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    cfg = load_bot_config(args.config)

    snapshot = args.snapshot or Path(cfg.catalog.local_path)
    if not snapshot.is_absolute() and not snapshot.exists():
        snapshot = Path(__file__).parent.parent / snapshot

    source = LocalCatalogClient(snapshot)
    result = asyncio.run(
        retrieve_products(args.query, source, cfg.search.build_search(), keywords=cfg.search.product_keywords)
    )

    if not result.catalog_success:
        print(f"Catalog could not be loaded: {result.catalog_error}")
        return 1

    print(f"\n### {len(result.products)} of {result.catalog_count} products for '{args.query}'")
    print(f"    intent terms: {', '.join(result.intent.search_terms) or '-'}\n")

    if args.prompt:
        print(render_products(result.products))
        return 0

    for i, p in enumerate(result.products, start=1):
        price = f"{p.price:.2f}" if p.price is not None else "-"
        print(f"[{i}] {p.name}  ({price})")
        print(f"    manufacturer={p.manufacturer or '-'}  ingredient={p.active_ingredient or '-'}")
        print(f"    categories={p.categories or '-'}")
        if p.permalink:
            print(f"    {p.permalink}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
