"""
Asset Ledger Shared Library
===========================

Common utilities, configuration and abstractions shared across services.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - auth: Caller-credential extraction for FastAPI routes
    - events: Outcome event publishing (memory/host-provided)
    - models: Shared Pydantic response models

Version: 0.1.0
"""

__version__ = "0.1.0"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
