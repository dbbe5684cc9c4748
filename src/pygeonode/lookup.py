"""External IP geolocation lookups with provider fallthrough."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from pygeonode._api import ip_api as _ip_api
from pygeonode._api import ipwhois as _ipwhois
from pygeonode._transport import Transport
from pygeonode.config import GeoNodeConfig
from pygeonode.exceptions import GeoLookupError, GeoTransportError
from pygeonode.models.coordinate import Coordinate

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoProvider:
    """One geolocation provider: how to address it and how to read it."""

    name: str
    base_url: str
    build_url: Callable[[str, str | None], str]
    parse_response: Callable[[Any], Coordinate]

    def url_for(self, host: str | None) -> str:
        return self.build_url(self.base_url, host)


def default_providers(config: GeoNodeConfig) -> tuple[GeoProvider, ...]:
    """Primary ip-api, then secondary ipwho.is."""
    return (
        GeoProvider(_ip_api.NAME, config.primary_url, _ip_api.build_url, _ip_api.parse_response),
        GeoProvider(_ipwhois.NAME, config.secondary_url, _ipwhois.build_url, _ipwhois.parse_response),
    )


class GeoLookupClient:
    """Resolve a host (or this process itself) to a coordinate.

    Providers are tried in order and the first well-formed success wins.
    Every failure mode (timeout, connection error, non-200, bad JSON,
    wrong payload shape, provider-reported failure) falls through to the
    next provider; when none is left the answer is ``None``. Nothing is
    raised to the caller.
    """

    def __init__(
        self,
        config: GeoNodeConfig,
        transport: Transport,
        *,
        providers: tuple[GeoProvider, ...] | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._providers = providers if providers is not None else default_providers(config)

    @property
    def providers(self) -> tuple[GeoProvider, ...]:
        return self._providers

    async def lookup(self, host: str | None = None) -> Coordinate | None:
        """Look up *host*, or the caller's own public address when ``None``."""
        label = host or "<self>"
        for provider in self._providers:
            url = provider.url_for(host)
            try:
                payload = await self._transport.get_json(url, timeout=self._config.lookup_timeout)
                coordinate = provider.parse_response(payload)
            except GeoTransportError as exc:
                self._trace("%s lookup for %s failed: %s", provider.name, label, exc)
                continue
            except ValidationError as exc:
                self._trace("%s returned a malformed payload for %s: %s", provider.name, label, exc)
                continue
            except GeoLookupError as exc:
                self._trace("%s could not locate %s: %s", provider.name, label, exc)
                continue
            except Exception:
                _logger.debug("%s lookup for %s raised unexpectedly", provider.name, label, exc_info=True)
                continue
            self._trace("%s located %s at %s,%s", provider.name, label, coordinate.lat, coordinate.lon)
            return coordinate

        self._trace("No provider could locate %s", label)
        return None

    def _trace(self, msg: str, *args: Any) -> None:
        if self._config.debug:
            _logger.debug(msg, *args)
