"""Application constants."""

USER_AGENT = "geocode-batch/0.1 (+https://geocode.maps.co)"
SEARCH_ENDPOINT = "https://geocode.maps.co/search"
# Free tier allows 1 request/second; stay a little under it.
DEFAULT_DELAY_SECONDS = 1.2
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
OUTPUT_FIELDS = (
    "address",
    "place_id",
    "licence",
    "osm_type",
    "osm_id",
    "lat",
    "lon",
    "display_name",
    "class",
    "type",
    "importance",
)
JSON_LOG_FIELDS = (
    "timestamp",
    "level",
    "run_id",
    "event",
    "status",
    "attempt",
    "address",
    "query",
    "error_code",
    "rows_out",
    "duration_ms",
    "message",
)
DEFAULT_SETTINGS = {
    "provider": {
        "endpoint": SEARCH_ENDPOINT,
        "user_agent": USER_AGENT,
    },
    "http": {
        "timeout": {"connect": 20.0, "read": 60.0},
        "retry": {"max_attempts": 1, "multiplier": 1.0, "max_wait": 30.0},
    },
    "pacing": {
        "delay_seconds": DEFAULT_DELAY_SECONDS,
    },
}
