"""Order draft edited by the session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from margin_preview.api.models import Side, ValidateMarginRequest

if TYPE_CHECKING:
    from margin_preview.api.models import Asset


@dataclass(frozen=True)
class OrderDraft:
    """Current order inputs.

    Edits replace the draft wholesale, so a draft captured at submit time is
    a snapshot unaffected by later edits.
    """

    asset: Asset | None = None
    side: Side = Side.LONG
    size: float = 0.0
    leverage: int = 0

    def to_request(self, margin_client: float) -> ValidateMarginRequest:
        """Build the validation payload for this draft."""
        if self.asset is None:
            raise ValueError("Cannot build a validation request without an asset")
        return ValidateMarginRequest(
            asset=self.asset.symbol,
            order_size=self.size,
            side=self.side,
            leverage=self.leverage,
            margin_client=margin_client,
        )
