"""Domain errors and failure typing."""


class LocalityError(Exception):
    """Base class for locality lookup failures."""

    error_code = "LOCALITY_ERROR"


class ConfigError(LocalityError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class InvalidPincode(LocalityError):
    """Raised when a caller passes something other than a 6-digit pincode."""

    error_code = "INVALID_PINCODE"

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid pincode: {value!r} (expected 6 digits)")
        self.value = value


class DatasetUnavailable(LocalityError):
    """Raised when the locality dataset cannot be fetched or parsed."""

    error_code = "DATASET_UNAVAILABLE"
