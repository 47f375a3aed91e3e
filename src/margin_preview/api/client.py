"""Async client for the asset-configuration and margin-validation services."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import ValidationError

from margin_preview.api.config import APIConfig
from margin_preview.api.exceptions import (
    MalformedResponseError,
    MarginAPIError,
    MarginTransportError,
)
from margin_preview.api.models import (
    Asset,
    AssetsResponse,
    ValidateMarginRequest,
    ValidationOutcome,
)

if TYPE_CHECKING:
    from types import TracebackType


logger = structlog.get_logger()

ASSETS_PATH = "/config/assets"
VALIDATE_PATH = "/margin/validate"


class MarginClient:
    """
    Client for the two margin collaborators.

    Each call makes exactly one HTTP attempt; there is no retry layer.

    Use as an async context manager:

        async with MarginClient(APIConfig(base_url="http://localhost:8080")) as client:
            assets = await client.get_assets()
    """

    def __init__(
        self,
        config: APIConfig | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        self._config = config or APIConfig()
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=timeout if timeout is not None else self._config.timeout_seconds,
            headers={"Accept": "application/json"},
        )

    @property
    def config(self) -> APIConfig:
        return self._config

    async def __aenter__(self) -> MarginClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request, translating httpx failures into `MarginTransportError`."""
        try:
            return await self._client.request(method, path, json=json_body)
        except httpx.HTTPError as e:
            logger.warning("Margin API request failed", method=method, path=path, error=str(e))
            raise MarginTransportError(f"{method} {path} failed: {e}") from e

    @staticmethod
    def _decode(response: httpx.Response, path: str) -> dict[str, Any]:
        """Parse a JSON object body.

        Raises:
            MalformedResponseError: If the body is not JSON or not a JSON object.
        """
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(path, "response was not valid JSON") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(path, "expected a JSON object")
        return data

    # ==================== Config ====================

    async def get_assets(self) -> list[Asset]:
        """
        Fetch the tradable asset list.

        Returns:
            Assets in server order. May be empty; callers decide whether an
            empty list is usable.

        Raises:
            MarginTransportError: If the service could not be reached.
            MarginAPIError: On a non-2xx response.
            MalformedResponseError: If `assets` is missing or an entry is invalid.
        """
        response = await self._send("GET", ASSETS_PATH)
        if not response.is_success:
            raise MarginAPIError(status_code=response.status_code, message=response.text)

        data = self._decode(response, ASSETS_PATH)
        try:
            parsed = AssetsResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(ASSETS_PATH, str(e)) from e
        return parsed.assets

    # ==================== Validation ====================

    async def validate_margin(self, request: ValidateMarginRequest) -> ValidationOutcome:
        """
        Ask the validator to confirm a client-side margin estimate.

        A well-formed body is returned verbatim whatever the HTTP status, so a
        server rejection delivered as 4xx still reaches the caller as an
        `error` outcome.

        Raises:
            MarginTransportError: If the service could not be reached.
            MarginAPIError: On a non-2xx response without a well-formed body.
            MalformedResponseError: On a 2xx response without a well-formed body.
        """
        payload = request.model_dump(mode="json")
        response = await self._send("POST", VALIDATE_PATH, json_body=payload)

        try:
            data = self._decode(response, VALIDATE_PATH)
            return ValidationOutcome.model_validate(data)
        except (MalformedResponseError, ValidationError) as e:
            if not response.is_success:
                raise MarginAPIError(
                    status_code=response.status_code,
                    message=response.text,
                ) from e
            if isinstance(e, MalformedResponseError):
                raise
            raise MalformedResponseError(VALIDATE_PATH, str(e)) from e
