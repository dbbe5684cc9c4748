"""Voice-session payload helpers.

This module turns raw voice-server updates from the host runtime into
region hints for the target cache.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from pygeonode._constants import VOICE_SERVER_UPDATE

_TRAILING_DIGITS = re.compile(r"\d+$")


class VoiceRegionHint(BaseModel):
    """A target id paired with the voice endpoint it was assigned."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    target_id: str = Field(validation_alias=AliasChoices("guild_id", "guildId", "target_id"))
    endpoint: str

    @property
    def region(self) -> str | None:
        return parse_endpoint_region(self.endpoint)


class _DispatchEnvelope(BaseModel):
    """Gateway dispatch: ``{"t": "VOICE_SERVER_UPDATE", "d": {...}}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    t: str
    d: VoiceRegionHint


class _EventEnvelope(BaseModel):
    """Node voice update: ``{"guildId": ..., "event": {...}}``.

    The outer id is used when the event object does not carry its own.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    target_id: str | None = Field(default=None, validation_alias=AliasChoices("guild_id", "guildId"))
    event: dict[str, Any]

    def hint(self) -> VoiceRegionHint:
        merged: dict[str, Any] = dict(self.event)
        if self.target_id is not None:
            merged.setdefault("target_id", self.target_id)
        return VoiceRegionHint.model_validate(merged)


def parse_endpoint_region(endpoint: str | None) -> str | None:
    """Extract the region code from a voice endpoint.

    ``"us-east123.discord.media:443"`` -> ``"us-east"``. The hostname must
    have at least three dot-separated labels; the first label minus its
    trailing digits is the region. Returns ``None`` when nothing is left.
    """
    if not endpoint:
        return None
    hostname = endpoint.strip().split(":", 1)[0]
    labels = hostname.split(".")
    if len(labels) < 3:
        return None
    region = _TRAILING_DIGITS.sub("", labels[0]).lower()
    return region or None


def extract_voice_hint(payload: Any) -> VoiceRegionHint | None:
    """Best-effort extraction of ``(target_id, endpoint)`` from *payload*.

    Three shapes are understood: the fields at the top level, a gateway
    dispatch with a ``d`` object, and a node voice update carrying an
    ``event`` object. Anything else (including a null endpoint, sent when
    a voice server goes away) yields ``None``.
    """
    if not isinstance(payload, dict):
        return None

    try:
        return VoiceRegionHint.model_validate(payload)
    except ValidationError:
        pass

    try:
        dispatch = _DispatchEnvelope.model_validate(payload)
    except ValidationError:
        pass
    else:
        if dispatch.t == VOICE_SERVER_UPDATE:
            return dispatch.d

    try:
        return _EventEnvelope.model_validate(payload).hint()
    except ValidationError:
        return None
