"""
Local Product Catalogue Client.

Purpose:
- Serves catalog records from a JSON snapshot on disk when the shop API is not
  used (or not reachable during development).
- The snapshot is either a list of records or an object with a "products" list.

Behaviour:
- The file is read once and cached; call reload() after replacing it.
- The whole snapshot is returned for every call (search, category and limit
  are page hints for remote sources); the relevance search narrows it down.
- A missing or unreadable snapshot yields an empty, unsuccessful result.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.integrations.contracts.catalog import CatalogFetchResult, CatalogSource

logger = logging.getLogger(__name__)


class LocalCatalogClient(CatalogSource):
    def __init__(self, snapshot_path: Path | str):
        self.snapshot_path = Path(snapshot_path)
        self._records: Optional[List[Dict[str, Any]]] = None
        self._error: Optional[str] = None

    def _load(self) -> List[Dict[str, Any]]:
        if self._records is not None:
            return self._records

        try:
            with open(self.snapshot_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            self._error = f"Catalog snapshot not found: {self.snapshot_path}"
            logger.warning(self._error)
            self._records = []
            return self._records
        except (OSError, json.JSONDecodeError) as e:
            self._error = f"Failed to read catalog snapshot {self.snapshot_path}: {e}"
            logger.error(self._error)
            self._records = []
            return self._records

        if isinstance(data, dict):
            data = data.get("products", [])
        if not isinstance(data, list):
            self._error = f"Catalog snapshot {self.snapshot_path} has no product list"
            logger.error(self._error)
            data = []

        self._records = [r for r in data if isinstance(r, dict)]
        self._error = None
        logger.info("Loaded %d catalog records from %s", len(self._records), self.snapshot_path)
        return self._records

    def reload(self) -> int:
        self._records = None
        return len(self._load())

    async def fetch_products(self, search: str = "", category: str = "", limit: int = 20) -> CatalogFetchResult:
        records = self._load()
        if self._error:
            return CatalogFetchResult.failed(self._error)
        return CatalogFetchResult(success=True, products=list(records))

    async def fetch_product_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        for record in self._load():
            if str(record.get("id", "")) == str(product_id):
                return record
        return None
