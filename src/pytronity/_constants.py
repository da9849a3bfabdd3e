"""Internal constants shared across the library."""

BASE_URL = "https://api.tronity.tech"
TOKEN_PATH = "/oauth/authentication"
USER_AGENT = "pytronity"

#: Default bulk cache lifetime in seconds (15 minutes).
DEFAULT_CACHE_TTL: float = 15 * 60

#: Default per-request timeout in seconds.
DEFAULT_REQUEST_TIMEOUT: float = 30.0

#: Tokens are treated as expired this many seconds before their real expiry.
TOKEN_EXPIRY_DELTA: float = 10.0

# ------------------------------------------------------------------
# REST endpoints
# ------------------------------------------------------------------

VEHICLES_ENDPOINT = "/v1/vehicles"


def bulk_endpoint(vehicle_id: str) -> str:
    return f"{VEHICLES_ENDPOINT}/{vehicle_id}/bulk"


def charge_start_endpoint(vehicle_id: str) -> str:
    return f"{VEHICLES_ENDPOINT}/{vehicle_id}/charge_start"


def charge_stop_endpoint(vehicle_id: str) -> str:
    return f"{VEHICLES_ENDPOINT}/{vehicle_id}/charge_stop"
