"""
Margin Preview.

Client-side initial-margin estimator with server-side validation.
"""

__version__ = "0.1.0"

from margin_preview.api import MarginClient
from margin_preview.api.config import APIConfig

# Configure structlog once at import time (quiet by default).
from margin_preview.logging import configure_structlog
from margin_preview.margin import ValidationSession

configure_structlog()

__all__ = [
    "APIConfig",
    "MarginClient",
    "ValidationSession",
    "__version__",
]
