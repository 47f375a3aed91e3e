"""Custom exceptions for margin API errors."""

from __future__ import annotations


class MarginError(Exception):
    """Base exception for margin API errors."""


class MarginAPIError(MarginError):
    """HTTP API error with status code."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error {status_code}: {message}")


class MarginTransportError(MarginError):
    """The request never produced an HTTP response (connect, timeout, protocol)."""


class MalformedResponseError(MarginError):
    """The response body is not JSON or is missing required fields."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Malformed response from {path}: {detail}")
