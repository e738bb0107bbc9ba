"""Internal constants shared across the library."""

BASE_URL = "https://ground-control.reaport.ru"
VEHICLE_TYPE = "charging"

#: Number of vehicles registered when the service starts.
DEFAULT_FLEET_SIZE = 3

#: Seconds to wait after a movement conflict before asking again.
CONFLICT_BACKOFF_SECONDS = 2.0

DEFAULT_MOVEMENT_SPEED = 20.0
DEFAULT_CONFLICT_RETRY_LIMIT = 15

# ------------------------------------------------------------------
# Ground control endpoints
# ------------------------------------------------------------------

REGISTER_VEHICLE_ENDPOINT = "/register-vehicle/{vehicle_type}"
ROUTE_ENDPOINT = "/route"
MOVE_ENDPOINT = "/move"
ARRIVED_ENDPOINT = "/arrived"

#: HTTP status ground control answers with when a segment is contested.
MOVE_CONFLICT_STATUS = 409
