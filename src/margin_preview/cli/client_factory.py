"""Factory functions for constructing margin API clients and sessions.

Single place where CLI commands build clients, so tests can patch one function.
"""

from margin_preview.api import APIConfig, MarginClient
from margin_preview.margin import ValidationSession


def margin_client(config: APIConfig) -> MarginClient:
    """Create a MarginClient for `config` (use as async context manager)."""
    return MarginClient(config)


def validation_session(client: MarginClient) -> ValidationSession:
    """Create a ValidationSession backed by `client`."""
    return ValidationSession(client)
