"""Pydantic models for the margin API."""

from margin_preview.api.models.asset import Asset, AssetsResponse
from margin_preview.api.models.validation import (
    NETWORK_ERROR_MESSAGE,
    Side,
    ValidateMarginRequest,
    ValidationOutcome,
    ValidationStatus,
)

__all__ = [
    "NETWORK_ERROR_MESSAGE",
    "Asset",
    "AssetsResponse",
    "Side",
    "ValidateMarginRequest",
    "ValidationOutcome",
    "ValidationStatus",
]
