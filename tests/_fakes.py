"""Test doubles shared by the test modules."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote, urlsplit

from pygeonode.exceptions import GeoTransportError
from pygeonode.models.node import NodeInfo

SELF = "<self>"


def ip_api_ok(lat: float, lon: float) -> dict[str, Any]:
    return {"status": "success", "lat": lat, "lon": lon}


def ipwhois_ok(lat: float, lon: float) -> dict[str, Any]:
    return {"success": True, "latitude": lat, "longitude": lon}


@dataclass
class FakeGeoTransport:
    """Answers provider URLs from per-provider tables keyed by host.

    Values are payloads, or exceptions to raise. Unknown hosts get a 404.
    ``SELF`` is the key for the no-host self lookup.
    """

    primary: dict[str, Any] = field(default_factory=dict)
    secondary: dict[str, Any] = field(default_factory=dict)
    delay: float = 0.0
    calls: list[str] = field(default_factory=list)

    def hosts_looked_up(self) -> list[str]:
        return [self._route(url)[1] for url in self.calls]

    def _route(self, url: str) -> tuple[dict[str, Any], str]:
        parts = urlsplit(url)
        host = unquote(parts.path.rsplit("/", 1)[-1]) or SELF
        table = self.primary if parts.netloc == "ip-api.com" else self.secondary
        return table, host

    async def get_json(self, url: str, *, timeout: float) -> Any:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        table, host = self._route(url)
        if host not in table:
            raise GeoTransportError(f"HTTP 404 from {url}", status_code=404, url=url)
        value = table[host]
        if isinstance(value, BaseException):
            raise value
        return value


@dataclass
class FakeRegistry:
    nodes: list[NodeInfo] = field(default_factory=list)
    created: list[dict[str, Any]] = field(default_factory=list)
    voice_updates: list[Any] = field(default_factory=list)

    def create(self, options: dict[str, Any]) -> dict[str, Any]:
        self.created.append(dict(options))
        return dict(options)

    def update_voice_state(self, payload: Any) -> str:
        self.voice_updates.append(payload)
        return "forwarded"

    def destroy(self, guild_id: str) -> str:
        return f"destroyed {guild_id}"
