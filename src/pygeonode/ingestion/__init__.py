"""Ingestion helpers: raw host payloads -> normalized hints."""

from pygeonode.ingestion.voice import VoiceRegionHint, extract_voice_hint, parse_endpoint_region

__all__ = ["VoiceRegionHint", "extract_voice_hint", "parse_endpoint_region"]
