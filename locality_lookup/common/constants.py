"""Application constants."""

USER_AGENT = "locality-lookup/1.0 (+civic-complaints; contact: configured-email)"
DATASET_SOURCE_ENV = "LOCALITY_DATASET_SOURCE"
DATASET_SHAPES = ("auto", "pincode_map", "index_rows")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
ROLES = ("ward", "mla", "mp")
NOT_AVAILABLE = {
    "ward": "Ward information not available",
    "mla": "MLA information not available",
    "mp": "MP information not available",
}
GENERIC_NOT_AVAILABLE = "Information not available"
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 2
EXIT_NOT_FOUND = 3
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "level",
    "event",
    "status",
    "source",
    "pincode",
    "shape",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
