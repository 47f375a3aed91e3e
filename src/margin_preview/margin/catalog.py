"""Tradable asset catalog, loaded once from the configuration service."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

import structlog

from margin_preview.api.exceptions import (
    MalformedResponseError,
    MarginAPIError,
    MarginTransportError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from margin_preview.api.models import Asset

logger = structlog.get_logger()


class AssetSource(Protocol):
    """Protocol for fetching the asset list."""

    async def get_assets(self) -> list[Asset]:
        """Return assets in server order."""
        ...


class LoadFailureReason(str, Enum):
    """Why the catalog is unusable. Diagnostic only; both are terminal."""

    NO_DATA = "no_data"
    UNREACHABLE = "unreachable"


class CatalogLoadError(RuntimeError):
    """The asset catalog could not be loaded; the session cannot continue."""

    def __init__(self, reason: LoadFailureReason, message: str) -> None:
        self.reason = reason
        self.message = message
        super().__init__(message)


class AssetCatalog:
    """Ordered, read-only set of tradable assets."""

    def __init__(self, source: AssetSource) -> None:
        self._source = source
        self._assets: tuple[Asset, ...] = ()
        self._by_symbol: dict[str, Asset] = {}
        self._load_attempted = False

    @property
    def loaded(self) -> bool:
        return bool(self._assets)

    @property
    def assets(self) -> tuple[Asset, ...]:
        return self._assets

    @property
    def symbols(self) -> list[str]:
        return [asset.symbol for asset in self._assets]

    @property
    def default(self) -> Asset:
        """First asset, used as the initial selection."""
        if not self._assets:
            raise RuntimeError("AssetCatalog has not been loaded")
        return self._assets[0]

    def get(self, symbol: str) -> Asset:
        """Look up an asset by symbol.

        Raises:
            KeyError: If the symbol is not in the catalog.
        """
        return self._by_symbol[symbol]

    def __iter__(self) -> Iterator[Asset]:
        return iter(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    async def load(self) -> Sequence[Asset]:
        """Fetch the asset list. Allowed once per catalog.

        Returns:
            Non-empty ordered assets.

        Raises:
            CatalogLoadError: If the list is empty/malformed (`NO_DATA`) or the
                service could not be reached (`UNREACHABLE`).
            RuntimeError: If called a second time.
        """
        if self._load_attempted:
            raise RuntimeError("AssetCatalog.load() may only be called once")
        self._load_attempted = True

        try:
            assets = await self._source.get_assets()
        except MalformedResponseError as e:
            raise self._fail(
                LoadFailureReason.NO_DATA,
                f"Asset configuration malformed: {e.detail}",
            ) from e
        except (MarginTransportError, MarginAPIError) as e:
            raise self._fail(
                LoadFailureReason.UNREACHABLE,
                "Could not load asset configuration. Is the backend running?",
            ) from e

        if not assets:
            raise self._fail(LoadFailureReason.NO_DATA, "Asset configuration contained no assets.")

        by_symbol: dict[str, Asset] = {}
        for asset in assets:
            if asset.symbol in by_symbol:
                raise self._fail(
                    LoadFailureReason.NO_DATA,
                    f"Asset configuration lists {asset.symbol!r} more than once.",
                )
            by_symbol[asset.symbol] = asset

        self._assets = tuple(assets)
        self._by_symbol = by_symbol
        logger.info("Asset catalog loaded", count=len(self._assets), symbols=self.symbols)
        return self._assets

    @staticmethod
    def _fail(reason: LoadFailureReason, message: str) -> CatalogLoadError:
        logger.warning("Asset catalog load failed", reason=reason.value, message=message)
        return CatalogLoadError(reason, message)
