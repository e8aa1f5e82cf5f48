"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from locality_lookup.common.constants import DATASET_SHAPES, LOG_LEVELS
from locality_lookup.common.errors import ConfigError


def _assert_mapping(obj: object, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    _assert_mapping(obj, ctx)
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive_number(value: object, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive number")


def validate_resolver_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"dataset", "http", "logging"}
    _assert_required_keys(cfg, top_required, "resolver config")
    _assert_no_unknown_keys(cfg, top_required, "resolver config", allow_unknown)

    dataset = cfg["dataset"]
    _assert_required_keys(dataset, {"source", "shape"}, "dataset")
    _assert_no_unknown_keys(dataset, {"source", "shape"}, "dataset", allow_unknown)
    if not isinstance(dataset["source"], str) or not dataset["source"].strip():
        raise ConfigError("dataset.source must be a non-empty string")
    if dataset["shape"] not in DATASET_SHAPES:
        raise ConfigError(f"dataset.shape must be one of: {', '.join(DATASET_SHAPES)}")

    http = cfg["http"]
    _assert_required_keys(http, {"timeout", "retry"}, "http")
    _assert_no_unknown_keys(http, {"timeout", "retry"}, "http", allow_unknown)
    timeout_keys = {"connect", "read"}
    _assert_required_keys(http["timeout"], timeout_keys, "http.timeout")
    _assert_no_unknown_keys(http["timeout"], timeout_keys, "http.timeout", allow_unknown)
    retry_keys = {"max_attempts", "multiplier", "max_wait"}
    _assert_required_keys(http["retry"], retry_keys, "http.retry")
    _assert_no_unknown_keys(http["retry"], retry_keys, "http.retry", allow_unknown)
    _assert_positive_number(http["timeout"]["connect"], "http.timeout.connect")
    _assert_positive_number(http["timeout"]["read"], "http.timeout.read")
    _assert_positive_number(http["retry"]["multiplier"], "http.retry.multiplier")
    _assert_positive_number(http["retry"]["max_wait"], "http.retry.max_wait")
    max_attempts = http["retry"]["max_attempts"]
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
        raise ConfigError("http.retry.max_attempts must be an integer >= 1")

    _assert_required_keys(cfg["logging"], {"level"}, "logging")
    _assert_no_unknown_keys(cfg["logging"], {"level"}, "logging", allow_unknown)
    if str(cfg["logging"]["level"]).upper() not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of: {', '.join(LOG_LEVELS)}")

    return cfg
