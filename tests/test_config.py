from __future__ import annotations

import pytest

from pygeonode.config import GeoNodeConfig
from pygeonode.exceptions import GeoConfigError


def test_defaults() -> None:
    config = GeoNodeConfig()

    assert config.refresh_interval == 0
    assert config.refresh_enabled is False
    assert config.lookup_timeout == pytest.approx(4.5)
    assert config.debug is False
    assert config.primary_url == "http://ip-api.com/json"
    assert config.secondary_url == "https://ipwho.is"


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEONODE_REFRESH_INTERVAL", "300")
    monkeypatch.setenv("GEONODE_LOOKUP_TIMEOUT", "2.5")
    monkeypatch.setenv("GEONODE_DEBUG", "yes")
    monkeypatch.setenv("GEONODE_SECONDARY_URL", "https://geo.internal/")

    config = GeoNodeConfig.from_env()

    assert config.refresh_interval == 300
    assert config.refresh_enabled is True
    assert config.lookup_timeout == pytest.approx(2.5)
    assert config.debug is True
    assert config.secondary_url == "https://geo.internal"


def test_from_env_explicit_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEONODE_REFRESH_INTERVAL", "300")
    monkeypatch.setenv("GEONODE_DEBUG", "1")

    config = GeoNodeConfig.from_env(refresh_interval=0, debug=False)

    assert config.refresh_interval == 0
    assert config.debug is False


def test_from_env_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEONODE_LOOKUP_TIMEOUT", "soon")

    with pytest.raises(GeoConfigError, match="GEONODE_LOOKUP_TIMEOUT"):
        GeoNodeConfig.from_env()


@pytest.mark.parametrize(("field_name", "value"), [("refresh_interval", -1), ("lookup_timeout", 0)])
def test_invalid_values_rejected(field_name: str, value: float) -> None:
    with pytest.raises(GeoConfigError):
        GeoNodeConfig(**{field_name: value})


def test_overrides_are_not_copied() -> None:
    overrides: dict[str, object] = {}
    config = GeoNodeConfig(node_overrides=overrides)

    overrides["a"] = {"region": "london"}
    assert config.node_overrides["a"] == {"region": "london"}
