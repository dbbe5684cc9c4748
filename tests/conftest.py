from __future__ import annotations

import pytest
from _fakes import FakeGeoTransport

from pygeonode._background import BackgroundTasks
from pygeonode.cache import GeoCache
from pygeonode.config import GeoNodeConfig
from pygeonode.lookup import GeoLookupClient
from pygeonode.resolver import LocationResolver


@pytest.fixture
def transport() -> FakeGeoTransport:
    return FakeGeoTransport()


@pytest.fixture
def config() -> GeoNodeConfig:
    return GeoNodeConfig(debug=True)


@pytest.fixture
def resolver(config: GeoNodeConfig, transport: FakeGeoTransport) -> LocationResolver:
    return LocationResolver(config, GeoCache(), GeoLookupClient(config, transport), BackgroundTasks())
