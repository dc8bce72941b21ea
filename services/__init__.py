"""
Asset Ledger Services
=====================

Services:
- asset_registry: Authorization-gated registry of assets and maintenance history
"""

__all__ = [
    "asset_registry",
]
