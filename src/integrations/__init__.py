"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- Product catalogue sources (WooCommerce REST API or a local JSON snapshot)
- Chatwoot (inbound webhook payloads, outbound bot replies)

Key rule:
- The message pipeline MUST NOT call external APIs directly.
- It goes through the clients under src/integrations/clients and src/integrations/chatwoot.

Switching implementations:
- The selection of local vs WooCommerce catalogue happens in ONE place (src/api/main.py).
"""

from .contracts.catalog import CatalogFetchResult, CatalogSource

__all__ = ["CatalogFetchResult", "CatalogSource"]
