"""Margin API client module."""

from margin_preview.api.client import MarginClient
from margin_preview.api.config import APIConfig
from margin_preview.api.exceptions import (
    MalformedResponseError,
    MarginAPIError,
    MarginError,
    MarginTransportError,
)
from margin_preview.api.models import (
    Asset,
    Side,
    ValidateMarginRequest,
    ValidationOutcome,
    ValidationStatus,
)

__all__ = [
    # Clients
    "APIConfig",
    "MarginClient",
    # Exceptions
    "MalformedResponseError",
    "MarginAPIError",
    "MarginError",
    "MarginTransportError",
    # Models
    "Asset",
    "Side",
    "ValidateMarginRequest",
    "ValidationOutcome",
    "ValidationStatus",
]
