"""
Shared test fixtures.

PHILOSOPHY: Use REAL objects wherever possible. Only mock at system boundaries.
- Real Pydantic models (not dicts pretending to be models)
- respx ONLY for HTTP boundary
- Small in-process fakes where a test needs to hold a request in flight
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import pytest

from margin_preview.api.config import APIConfig
from margin_preview.api.models import Asset, ValidationOutcome

if TYPE_CHECKING:
    from collections.abc import Callable

    from margin_preview.api.models import ValidateMarginRequest

BASE_URL = "http://margin.test"


@pytest.fixture
def api_config() -> APIConfig:
    return APIConfig(base_url=BASE_URL, timeout_seconds=5.0)


# ============================================================================
# Domain Object Builders
# ============================================================================
@pytest.fixture
def make_asset_payload() -> Callable[..., dict[str, Any]]:
    """Factory for asset dicts matching the /config/assets response entries."""

    def _make(
        symbol: str = "BTC",
        mark_price: float = 60000,
        contract_value: float = 0.01,
        allowed_leverage: list[int] | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        return {
            "symbol": symbol,
            "mark_price": mark_price,
            "contract_value": contract_value,
            "allowed_leverage": allowed_leverage if allowed_leverage is not None else [5, 10, 20],
            **extra,
        }

    return _make


@pytest.fixture
def assets_payload(make_asset_payload: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    """Two-asset catalog: BTC first (the default), then ETH."""
    return {
        "assets": [
            make_asset_payload(),
            make_asset_payload(
                symbol="ETH",
                mark_price=3000,
                contract_value=0.1,
                allowed_leverage=[2, 10, 25],
            ),
        ]
    }


@pytest.fixture
def btc() -> Asset:
    return Asset(symbol="BTC", mark_price=60000, contract_value=0.01, allowed_leverage=(5, 10, 20))


@pytest.fixture
def eth() -> Asset:
    return Asset(symbol="ETH", mark_price=3000, contract_value=0.1, allowed_leverage=(2, 10, 25))


class GatedMarginService:
    """In-process service whose validate call blocks until `gate` is set."""

    def __init__(self, assets: list[Asset], outcome: ValidationOutcome) -> None:
        self.assets = assets
        self.outcome = outcome
        self.gate = asyncio.Event()
        self.requests: list[ValidateMarginRequest] = []

    async def get_assets(self) -> list[Asset]:
        return list(self.assets)

    async def validate_margin(self, request: ValidateMarginRequest) -> ValidationOutcome:
        self.requests.append(request)
        await self.gate.wait()
        return self.outcome


@pytest.fixture
def gated_service(btc: Asset, eth: Asset) -> GatedMarginService:
    return GatedMarginService(
        [btc, eth],
        ValidationOutcome(status="ok", message="Margin verified", margin_required=120.0),
    )
