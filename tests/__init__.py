"""
Asset Ledger Test Suite
=======================

Test organization:
- tests/unit/                     - Shared library tests (publisher, caller auth, logging)
- tests/services/asset_registry/  - Registry components, service and HTTP API

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=shared --cov=services
"""
