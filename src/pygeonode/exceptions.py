"""Custom exception hierarchy for pygeonode."""

from __future__ import annotations


class GeoNodeError(Exception):
    """Base exception for all pygeonode errors."""


class GeoConfigError(GeoNodeError):
    """Invalid or missing configuration."""


class GeoTransportError(GeoNodeError):
    """HTTP-level failure (network, timeout, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class GeoLookupError(GeoNodeError):
    """A provider answered, but not with a usable location.

    Raised by the provider parsers when the success indicator is off
    (e.g. ip-api ``status="fail"`` for private or reserved addresses).
    The lookup client catches it and moves on to the next provider.
    """

    def __init__(self, message: str, *, provider: str = "") -> None:
        self.provider = provider
        super().__init__(message)
