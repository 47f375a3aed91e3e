"""Interaction state machine: catalog load, draft edits, and margin validation."""

from __future__ import annotations

import asyncio
import math
from dataclasses import replace
from enum import Enum
from typing import TYPE_CHECKING, Protocol

import structlog

from margin_preview.api.exceptions import MarginError
from margin_preview.api.models import Side, ValidationOutcome
from margin_preview.margin.catalog import AssetCatalog, AssetSource, CatalogLoadError
from margin_preview.margin.draft import OrderDraft
from margin_preview.margin.estimator import estimate_margin
from margin_preview.margin.leverage import resolve_leverage

if TYPE_CHECKING:
    from margin_preview.api.models import Asset, ValidateMarginRequest

logger = structlog.get_logger()


class MarginValidator(Protocol):
    """Protocol for the remote margin validator."""

    async def validate_margin(self, request: ValidateMarginRequest) -> ValidationOutcome:
        """Return the validator's verdict for `request`."""
        ...


class MarginService(AssetSource, MarginValidator, Protocol):
    """Both collaborators behind one base URL (see `MarginClient`)."""


class SessionState(str, Enum):
    """Where the session is in its lifecycle.

    LOADING -> READY | LOAD_ERROR (terminal). READY covers IDLE, SUBMITTING
    and RESOLVED.
    """

    LOADING = "loading"
    LOAD_ERROR = "load_error"
    IDLE = "idle"
    SUBMITTING = "submitting"
    RESOLVED = "resolved"

    @property
    def ready(self) -> bool:
        return self in _READY_STATES


_READY_STATES = frozenset({SessionState.IDLE, SessionState.SUBMITTING, SessionState.RESOLVED})


class SessionStateError(RuntimeError):
    """Raised when an operation is not allowed in the current session state."""


class ValidationSession:
    """Single-user margin preview session.

    Owns the one `OrderDraft` and the one `ValidationOutcome`. Every draft edit
    runs the same synchronous pipeline (resolve leverage, then estimate), so
    `estimate` always reflects the current draft.
    """

    def __init__(self, service: MarginService) -> None:
        self._service = service
        self._catalog = AssetCatalog(service)
        self._state = SessionState.LOADING
        self._load_error: CatalogLoadError | None = None

        self._draft: OrderDraft | None = None
        self._estimate = 0.0
        self._estimate_inputs: tuple[Asset | None, float, int] | None = None

        self._outcome: ValidationOutcome | None = None

    # ==================== State ====================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state.ready

    @property
    def catalog(self) -> AssetCatalog:
        return self._catalog

    @property
    def load_error(self) -> CatalogLoadError | None:
        return self._load_error

    @property
    def draft(self) -> OrderDraft | None:
        """Current draft; None until the catalog has loaded."""
        return self._draft

    @property
    def estimate(self) -> float:
        """Margin estimate for the current draft (0.0 before load)."""
        return self._estimate

    @property
    def outcome(self) -> ValidationOutcome | None:
        """Latest submission result; None before any submission and while one is in flight."""
        return self._outcome

    @property
    def can_submit(self) -> bool:
        """Whether a submission would be issued right now."""
        return (
            self._state in (SessionState.IDLE, SessionState.RESOLVED)
            and self._draft is not None
            and self._draft.asset is not None
            and self._draft.size > 0
        )

    # ==================== Loading ====================

    async def load(self) -> SessionState:
        """Load the asset catalog and seed the draft with the first asset.

        Failures are recorded in `load_error` and leave the session in the
        terminal LOAD_ERROR state; they are not raised.
        """
        if self._state != SessionState.LOADING:
            raise SessionStateError(f"Session already loaded (state={self._state.value})")

        try:
            await self._catalog.load()
        except CatalogLoadError as e:
            self._load_error = e
            self._state = SessionState.LOAD_ERROR
            return self._state

        first = self._catalog.default
        self._apply(OrderDraft(asset=first, leverage=first.default_leverage))
        self._state = SessionState.IDLE
        return self._state

    # ==================== Draft edits ====================

    def select_asset(self, symbol: str) -> OrderDraft:
        """Select an asset by symbol; leverage is re-resolved against it.

        Raises:
            KeyError: If the symbol is not in the catalog.
        """
        draft = self._require_draft()
        return self._apply(replace(draft, asset=self._catalog.get(symbol)))

    def set_side(self, side: Side | str) -> OrderDraft:
        draft = self._require_draft()
        return self._apply(replace(draft, side=Side(side)))

    def set_size(self, size: float) -> OrderDraft:
        """Set the order size in contracts (non-negative)."""
        draft = self._require_draft()
        size = float(size)
        if not math.isfinite(size) or size < 0:
            raise ValueError(f"Order size must be a non-negative number, got {size!r}")
        return self._apply(replace(draft, size=size))

    def set_leverage(self, leverage: int) -> OrderDraft:
        """Set leverage; a multiple the asset does not allow falls back to its default.

        Raises:
            ValueError: If `leverage` is not a whole number.
        """
        draft = self._require_draft()
        value = float(leverage)
        if not value.is_integer():
            raise ValueError(f"Leverage must be a whole number, got {leverage!r}")
        return self._apply(replace(draft, leverage=int(value)))

    def _require_draft(self) -> OrderDraft:
        if self._draft is None or not self._state.ready:
            raise SessionStateError(f"Order cannot be edited (state={self._state.value})")
        return self._draft

    def _apply(self, draft: OrderDraft) -> OrderDraft:
        if draft.asset is not None:
            leverage = resolve_leverage(draft.asset, draft.leverage)
            if leverage != draft.leverage:
                logger.debug(
                    "Leverage not allowed for asset; using default",
                    symbol=draft.asset.symbol,
                    requested=draft.leverage,
                    resolved=leverage,
                )
                draft = replace(draft, leverage=leverage)

        # Estimate first: a failed recompute must leave draft and estimate untouched.
        estimate = self._recompute(draft)
        self._draft = draft
        self._estimate = estimate
        self._estimate_inputs = (draft.asset, draft.size, draft.leverage)
        return draft

    def _recompute(self, draft: OrderDraft) -> float:
        if (draft.asset, draft.size, draft.leverage) == self._estimate_inputs:
            return self._estimate
        return estimate_margin(draft.asset, draft.size, draft.leverage)

    # ==================== Submission ====================

    async def submit(self) -> ValidationOutcome | None:
        """Send the current draft and estimate to the validator.

        The request payload is snapshotted before the first suspend point, and
        the previous outcome is cleared at the same moment. Transport failures
        and malformed responses become a synthesized network-error outcome.

        Returns:
            The new outcome, or None if the submission was suppressed because
            the draft has no asset or a non-positive size (no request is sent).

        Raises:
            SessionStateError: If the session is not ready or a submission is
                already in flight.
        """
        if self._state == SessionState.SUBMITTING:
            raise SessionStateError("A submission is already in flight")
        if not self._state.ready or self._draft is None:
            raise SessionStateError(f"Cannot submit (state={self._state.value})")

        draft = self._draft
        if draft.asset is None or draft.size <= 0:
            logger.warning(
                "Submission suppressed",
                size=draft.size,
                has_asset=draft.asset is not None,
            )
            return None

        request = draft.to_request(margin_client=self._estimate)
        self._outcome = None
        self._state = SessionState.SUBMITTING
        logger.info("Submitting margin validation", **request.model_dump(mode="json"))

        try:
            outcome = await self._service.validate_margin(request)
        except MarginError as e:
            logger.warning("Margin validation exchange failed", error=str(e))
            outcome = ValidationOutcome.network_error()
        except asyncio.CancelledError:
            self._state = SessionState.IDLE
            raise

        self._outcome = outcome
        self._state = SessionState.RESOLVED
        logger.info(
            "Margin validation resolved",
            status=outcome.status.value,
            margin_required=outcome.margin_required,
            margin_client=request.margin_client,
        )
        return outcome

    def clear_outcome(self) -> None:
        """Dismiss a resolved outcome (RESOLVED -> IDLE)."""
        if self._state == SessionState.SUBMITTING:
            raise SessionStateError("Cannot clear the outcome while a submission is in flight")
        if self._state == SessionState.RESOLVED:
            self._outcome = None
            self._state = SessionState.IDLE
