"""
Local integration clients.

These clients serve data without calling any external API, e.g. the product
catalogue from a JSON snapshot. They follow the SAME interface as the real
HTTP clients (src/integrations/contracts/*), so src/api/main.py can swap them.
"""
