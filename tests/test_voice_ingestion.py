from __future__ import annotations

import pytest

from pygeonode.ingestion.voice import extract_voice_hint, parse_endpoint_region


@pytest.mark.parametrize(
    ("endpoint", "expected"),
    [
        ("us-east123.discord.media:443", "us-east"),
        ("rotterdam4567.discord.media", "rotterdam"),
        ("Japan12.discord.gg:80", "japan"),
        ("c-ams12-abcd.discord.media", "c-ams12-abcd"),
        ("localhost", None),
        ("a.b", None),
        ("1234.discord.media", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_endpoint_region(endpoint: str | None, expected: str | None) -> None:
    assert parse_endpoint_region(endpoint) == expected


def test_extract_hint_from_direct_fields() -> None:
    hint = extract_voice_hint({"guild_id": "42", "endpoint": "frankfurt11.discord.media:443", "token": "t"})

    assert hint is not None
    assert hint.target_id == "42"
    assert hint.region == "frankfurt"


def test_extract_hint_from_gateway_dispatch() -> None:
    hint = extract_voice_hint(
        {
            "op": 0,
            "t": "VOICE_SERVER_UPDATE",
            "d": {"guild_id": 1234567890, "endpoint": "sydney3.discord.media:443", "token": "t"},
        }
    )

    assert hint is not None
    assert hint.target_id == "1234567890"
    assert hint.region == "sydney"


def test_extract_hint_ignores_other_dispatch_types() -> None:
    payload = {"t": "VOICE_STATE_UPDATE", "d": {"guild_id": "1", "endpoint": "japan1.discord.media"}}
    assert extract_voice_hint(payload) is None


def test_extract_hint_from_nested_event_uses_outer_id_when_missing() -> None:
    hint = extract_voice_hint(
        {"op": "voiceUpdate", "guildId": "99", "event": {"token": "t", "endpoint": "brazil7.discord.media:443"}}
    )

    assert hint is not None
    assert hint.target_id == "99"
    assert hint.region == "brazil"


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "VOICE_SERVER_UPDATE",
        {},
        {"guild_id": "1"},
        {"guild_id": "1", "endpoint": None},
        {"t": "VOICE_SERVER_UPDATE", "d": {"guild_id": "1", "endpoint": None}},
        {"event": "not-an-object"},
        {"event": {"endpoint": "japan1.discord.media"}},
    ],
)
def test_malformed_payloads_are_ignored(payload: object) -> None:
    assert extract_voice_hint(payload) is None
