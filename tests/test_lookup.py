from __future__ import annotations

import pytest
from _fakes import SELF, FakeGeoTransport, ip_api_ok, ipwhois_ok

from pygeonode._api._common import build_lookup_url, strip_port
from pygeonode.config import GeoNodeConfig
from pygeonode.exceptions import GeoTransportError
from pygeonode.lookup import GeoLookupClient
from pygeonode.models.coordinate import Coordinate


@pytest.mark.parametrize(
    ("host", "expected"),
    [
        ("node.example.com:2333", "node.example.com"),
        ("10.0.0.1", "10.0.0.1"),
        ("[2001:db8::1]:443", "2001:db8::1"),
        ("2001:db8::1", "2001:db8::1"),
    ],
)
def test_strip_port(host: str, expected: str) -> None:
    assert strip_port(host) == expected


def test_build_lookup_url_for_host_and_self() -> None:
    assert build_lookup_url("https://ipwho.is/", "1.2.3.4:80") == "https://ipwho.is/1.2.3.4"
    assert build_lookup_url("http://ip-api.com/json", None, "fields=lat") == "http://ip-api.com/json/?fields=lat"


@pytest.mark.asyncio
async def test_primary_provider_wins_when_it_succeeds() -> None:
    transport = FakeGeoTransport(
        primary={"1.2.3.4": ip_api_ok(10.0, 20.0)},
        secondary={"1.2.3.4": ipwhois_ok(-1.0, -1.0)},
    )
    client = GeoLookupClient(GeoNodeConfig(), transport)

    assert await client.lookup("1.2.3.4") == Coordinate(lat=10.0, lon=20.0)
    assert len(transport.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "primary_answer",
    [
        GeoTransportError("timed out"),
        GeoTransportError("HTTP 503", status_code=503),
        {"status": "fail", "message": "private range"},
        {"status": "success", "lat": "52.1", "lon": 4.3},
        {"status": "success", "lat": True, "lon": 4.3},
        {"status": "success"},
        ["not", "an", "object"],
    ],
)
async def test_primary_failure_falls_through_to_secondary(primary_answer: object) -> None:
    transport = FakeGeoTransport(
        primary={"node.example.com": primary_answer},
        secondary={"node.example.com": ipwhois_ok(52.1, 4.3)},
    )
    client = GeoLookupClient(GeoNodeConfig(), transport)

    assert await client.lookup("node.example.com:2333") == Coordinate(lat=52.1, lon=4.3)
    assert transport.hosts_looked_up() == ["node.example.com", "node.example.com"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "secondary_answer",
    [
        {"success": False, "message": "Reserved range"},
        {"success": "true", "latitude": 1.0, "longitude": 2.0},
        {"success": True, "latitude": None, "longitude": 2.0},
        GeoTransportError("connection refused"),
    ],
)
async def test_all_providers_failing_is_unresolved(secondary_answer: object) -> None:
    transport = FakeGeoTransport(
        primary={"10.0.0.1": {"status": "fail"}},
        secondary={"10.0.0.1": secondary_answer},
    )
    client = GeoLookupClient(GeoNodeConfig(), transport)

    assert await client.lookup("10.0.0.1") is None


@pytest.mark.asyncio
async def test_integer_coordinates_are_accepted() -> None:
    transport = FakeGeoTransport(primary={"h.example.com": ip_api_ok(0, 90)})
    client = GeoLookupClient(GeoNodeConfig(), transport)

    assert await client.lookup("h.example.com") == Coordinate(lat=0.0, lon=90.0)


@pytest.mark.asyncio
async def test_self_lookup_queries_without_host() -> None:
    transport = FakeGeoTransport(secondary={SELF: ipwhois_ok(48.86, 2.35)})
    client = GeoLookupClient(GeoNodeConfig(), transport)

    assert await client.lookup(None) == Coordinate(lat=48.86, lon=2.35)
    assert transport.calls[0].startswith("http://ip-api.com/json/?")
    assert transport.calls[1] == "https://ipwho.is/"


@pytest.mark.asyncio
async def test_unexpected_exception_is_contained_per_provider() -> None:
    transport = FakeGeoTransport(
        primary={"h.example.com": RuntimeError("boom")},
        secondary={"h.example.com": ipwhois_ok(5.0, 6.0)},
    )
    client = GeoLookupClient(GeoNodeConfig(), transport)

    assert await client.lookup("h.example.com") == Coordinate(lat=5.0, lon=6.0)
