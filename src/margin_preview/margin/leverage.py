"""Leverage constraint resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from margin_preview.api.models import Asset


def resolve_leverage(asset: Asset, leverage: int) -> int:
    """Return the leverage the order may actually use for `asset`.

    A permitted multiple is returned unchanged; anything else falls back to the
    asset's first (default) multiple. Total: `allowed_leverage` is never empty.
    """
    if leverage in asset.allowed_leverage:
        return leverage
    return asset.default_leverage
