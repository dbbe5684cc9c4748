"""HTTP transport for the geolocation providers."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pygeonode._constants import USER_AGENT
from pygeonode.exceptions import GeoTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the lookup client.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str, *, timeout: float) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed transport: one GET per call, bounded by its own timeout."""

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        user_agent: str = USER_AGENT,
    ) -> None:
        self._http = http_session
        self._user_agent = user_agent

    async def get_json(self, url: str, *, timeout: float) -> Any:
        """GET *url* and return the decoded JSON body.

        Raises
        ------
        GeoTransportError
            On timeout, connection failure, non-200 status or invalid JSON.
        """
        headers = {"accept": "application/json", "user-agent": self._user_agent}

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(
                url,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                body = await resp.read()
                if resp.status != 200:
                    text = body.decode("utf-8", errors="replace")
                    raise GeoTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except GeoTransportError:
            raise
        except TimeoutError as exc:
            raise GeoTransportError(f"Request to {url} timed out after {timeout}s", url=url) from exc
        except aiohttp.ClientError as exc:
            raise GeoTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise GeoTransportError(f"Invalid JSON from {url}: {body[:200]!r}", url=url) from exc
