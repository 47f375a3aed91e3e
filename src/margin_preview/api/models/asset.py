"""Pydantic models for the asset-configuration endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator


class Asset(BaseModel):
    """Tradable asset and its margin parameters from GET /config/assets."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1, description="Unique asset identifier")
    mark_price: float = Field(..., gt=0, description="Current reference price")
    contract_value: float = Field(..., gt=0, description="Units of underlying per contract")
    allowed_leverage: tuple[PositiveInt, ...] = Field(
        ..., min_length=1, description="Permitted leverage multiples, default first"
    )

    @field_validator("allowed_leverage")
    @classmethod
    def dedupe_leverage(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        """Collapse repeated multiples, keeping first-seen order (index 0 is the default)."""
        return tuple(dict.fromkeys(value))

    @property
    def default_leverage(self) -> int:
        """Lowest/default leverage multiple (first element)."""
        return self.allowed_leverage[0]


class AssetsResponse(BaseModel):
    """Response from GET /config/assets."""

    model_config = ConfigDict(frozen=True)

    assets: list[Asset]
