"""Pydantic models for the margin-validation endpoint."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

NETWORK_ERROR_MESSAGE = "network error connecting to backend"


class Side(str, Enum):
    """Position side."""

    LONG = "long"
    SHORT = "short"


class ValidationStatus(str, Enum):
    """Verdict reported by the validator."""

    OK = "ok"
    ERROR = "error"


class ValidateMarginRequest(BaseModel):
    """Body for POST /margin/validate."""

    model_config = ConfigDict(frozen=True)

    asset: str = Field(..., min_length=1, description="Asset symbol")
    order_size: float = Field(..., gt=0, description="Order size in contracts")
    side: Side
    leverage: PositiveInt
    margin_client: float = Field(..., ge=0, description="Client-side margin estimate")


class ValidationOutcome(BaseModel):
    """Result of one submission.

    Either the verbatim validator response (ok or error) or a locally
    synthesized error when the exchange itself failed.
    """

    model_config = ConfigDict(frozen=True)

    status: ValidationStatus
    message: str | None = None
    margin_required: float
    """Authoritative margin computed by the validator."""

    @property
    def ok(self) -> bool:
        return self.status == ValidationStatus.OK

    @classmethod
    def network_error(cls) -> ValidationOutcome:
        """Outcome used when the request failed or the response was malformed."""
        return cls(
            status=ValidationStatus.ERROR,
            message=NETWORK_ERROR_MESSAGE,
            margin_required=0,
        )
