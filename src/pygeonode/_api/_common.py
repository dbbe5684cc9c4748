"""Shared helpers for the provider modules.

Internal to pygeonode and may change at any time.
"""

from __future__ import annotations

from urllib.parse import quote


def strip_port(host: str) -> str:
    """Drop a ``:port`` suffix, keeping bracketed or bare IPv6 literals intact."""
    value = host.strip()
    if value.startswith("["):
        end = value.find("]")
        return value[1:end] if end != -1 else value
    if value.count(":") == 1:
        return value.split(":", 1)[0]
    return value


def build_lookup_url(base_url: str, host: str | None, query: str = "") -> str:
    """Join a provider base URL with an optional host path segment.

    ``host=None`` asks the provider about the caller's own public address.
    """
    url = base_url.rstrip("/") + "/"
    if host:
        url += quote(strip_port(host), safe="")
    if query:
        url += f"?{query}"
    return url
