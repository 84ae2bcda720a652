"""
Contracts (data models).

This folder defines the request/response shapes for external integrations,
e.g. the result of a product catalogue fetch.

Why this exists:
- Ensures consistent data structures across local and real HTTP clients
- Flows rely on stable models, not on ad-hoc dicts
"""
