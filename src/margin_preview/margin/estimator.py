"""Initial-margin estimate computed from asset parameters."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from margin_preview.api.models import Asset

_CENT = Decimal("1")
# Enough digits to quantize any finite double (max ~1.8e308) to an integer.
_WIDE = Context(prec=400)


def round_cents(value: float) -> float:
    """Round to 2 decimal places, halves away from zero.

    The float product `value * 100` is rounded (not the decimal text of
    `value`), so 0.125 -> 0.13 but 1.005 -> 1.0 because 1.005 * 100 is
    100.49999999999999.

    Raises:
        ValueError: If `value * 100` is not finite.
    """
    scaled = value * 100
    if not math.isfinite(scaled):
        raise ValueError(f"Margin estimate out of range: {value!r}")
    cents = Decimal(scaled).quantize(_CENT, rounding=ROUND_HALF_UP, context=_WIDE)
    return float(cents) / 100


def notional_value(asset: Asset, size: float) -> float:
    """Full exposure of `size` contracts at the mark price."""
    return asset.mark_price * size * asset.contract_value


def estimate_margin(asset: Asset | None, size: float, leverage: float) -> float:
    """Estimate initial margin as `mark_price * size * contract_value / leverage`.

    Returns 0.0 when there is not enough information yet (no asset, or a
    non-positive leverage). `size == 0` also yields exactly 0.0.

    Raises:
        ValueError: If the result overflows the float range.
    """
    if asset is None or leverage <= 0:
        return 0.0
    return round_cents(notional_value(asset, size) / leverage)
