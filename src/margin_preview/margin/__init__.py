"""Margin estimation and validation workflow."""

from margin_preview.margin.catalog import (
    AssetCatalog,
    AssetSource,
    CatalogLoadError,
    LoadFailureReason,
)
from margin_preview.margin.draft import OrderDraft
from margin_preview.margin.estimator import estimate_margin, notional_value, round_cents
from margin_preview.margin.leverage import resolve_leverage
from margin_preview.margin.session import (
    MarginService,
    MarginValidator,
    SessionState,
    SessionStateError,
    ValidationSession,
)

__all__ = [
    "AssetCatalog",
    "AssetSource",
    "CatalogLoadError",
    "LoadFailureReason",
    "MarginService",
    "MarginValidator",
    "OrderDraft",
    "SessionState",
    "SessionStateError",
    "ValidationSession",
    "estimate_margin",
    "notional_value",
    "resolve_leverage",
    "round_cents",
]
