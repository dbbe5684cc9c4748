"""Balancer configuration for pygeonode."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pygeonode._constants import (
    DEFAULT_LOOKUP_TIMEOUT,
    PRIMARY_PROVIDER_URL,
    SECONDARY_PROVIDER_URL,
    USER_AGENT,
)
from pygeonode.exceptions import GeoConfigError

TargetResolver = Callable[[str], Awaitable[Any]]
"""Async callback ``(target_id) -> Coordinate | RegionRef | mapping | None``."""


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class GeoNodeConfig:
    """Balancer configuration.

    Parameters
    ----------
    refresh_interval : float
        Seconds between background re-resolution passes over all known
        nodes. ``0`` disables the refresh scheduler; nodes are then only
        resolved on demand when selection misses the cache.
    lookup_timeout : float
        Per-provider timeout in seconds for external geolocation lookups.
    debug : bool
        Emit diagnostic log records. Never changes outcomes.
    primary_url : str
        Base URL of the primary provider (ip-api compatible).
    secondary_url : str
        Base URL of the secondary provider (ipwho.is compatible).
    user_agent : str
        User-Agent header sent to the providers.
    node_overrides : Mapping
        Node key -> ``Coordinate`` / ``RegionRef`` / mapping. Read on every
        resolution, so later changes to the caller's mapping are honoured.
    target_overrides : Mapping
        Target key -> ``Coordinate`` / ``RegionRef`` / mapping.
    target_resolver : callable or None
        Async callback used for targets with no override or cached hint.
    """

    refresh_interval: float = 0.0
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
    debug: bool = False
    primary_url: str = PRIMARY_PROVIDER_URL
    secondary_url: str = SECONDARY_PROVIDER_URL
    user_agent: str = USER_AGENT
    node_overrides: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    target_overrides: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    target_resolver: TargetResolver | None = None

    def __post_init__(self) -> None:
        if self.refresh_interval < 0:
            raise GeoConfigError(f"refresh_interval must be >= 0, got {self.refresh_interval}")
        if self.lookup_timeout <= 0:
            raise GeoConfigError(f"lookup_timeout must be > 0, got {self.lookup_timeout}")

    @property
    def refresh_enabled(self) -> bool:
        return self.refresh_interval > 0

    @classmethod
    def from_env(cls, **overrides: Any) -> GeoNodeConfig:
        """Create configuration from environment variables.

        Reads ``GEONODE_REFRESH_INTERVAL``, ``GEONODE_LOOKUP_TIMEOUT``,
        ``GEONODE_DEBUG``, ``GEONODE_PRIMARY_URL`` and
        ``GEONODE_SECONDARY_URL``. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        GeoNodeConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        for env_key, field_name in (
            ("GEONODE_REFRESH_INTERVAL", "refresh_interval"),
            ("GEONODE_LOOKUP_TIMEOUT", "lookup_timeout"),
        ):
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise GeoConfigError(f"{env_key} must be a number, got {val!r}") from exc

        for env_key, field_name in (
            ("GEONODE_PRIMARY_URL", "primary_url"),
            ("GEONODE_SECONDARY_URL", "secondary_url"),
        ):
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.rstrip("/")

        if "debug" not in overrides:
            config_kwargs["debug"] = _env_bool(env.get("GEONODE_DEBUG"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
