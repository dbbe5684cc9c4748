"""Internal constants shared across the library."""

USER_AGENT = "pygeonode/1.0"

#: Mean Earth radius used by the haversine distance.
EARTH_RADIUS_KM = 6371.0

#: Per-attempt provider timeout in seconds.
DEFAULT_LOOKUP_TIMEOUT = 4.5

PRIMARY_PROVIDER_URL = "http://ip-api.com/json"
SECONDARY_PROVIDER_URL = "https://ipwho.is"

#: Option key a caller uses to pin a node in ``create()``.
NODE_OPTION_KEY = "node"

#: Option keys carrying the target (guild) id in ``create()``.
TARGET_OPTION_KEYS: tuple[str, ...] = ("guildId", "guild_id")

VOICE_SERVER_UPDATE = "VOICE_SERVER_UPDATE"
