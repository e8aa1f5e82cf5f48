import copy

import pytest

from locality_lookup.common.errors import ConfigError
from locality_lookup.common.schema import validate_resolver_config

BASE_CONFIG = {
    "dataset": {"source": "data/x.json", "shape": "auto"},
    "http": {
        "timeout": {"connect": 10, "read": 60},
        "retry": {"max_attempts": 1, "multiplier": 1.0, "max_wait": 30.0},
    },
    "logging": {"level": "INFO"},
}


def _config(**changes):
    cfg = copy.deepcopy(BASE_CONFIG)
    for path, value in changes.items():
        node = cfg
        *parents, leaf = path.split("__")
        for key in parents:
            node = node[key]
        node[leaf] = value
    return cfg


def test_validate_resolver_config_accepts_valid_shape():
    validated = validate_resolver_config(_config())
    assert validated["dataset"]["shape"] == "auto"


def test_validate_resolver_config_rejects_unknown_key_by_default():
    bad = _config(unexpected=True)
    with pytest.raises(ConfigError):
        validate_resolver_config(bad)


def test_validate_resolver_config_allows_unknown_when_enabled():
    validate_resolver_config(_config(extra=1), allow_unknown=True)


def test_validate_resolver_config_rejects_missing_section():
    cfg = _config()
    del cfg["http"]
    with pytest.raises(ConfigError):
        validate_resolver_config(cfg)


@pytest.mark.parametrize(
    "changes",
    [
        {"dataset__shape": "csv"},
        {"dataset__source": "  "},
        {"http__retry__max_attempts": 0},
        {"http__retry__max_attempts": True},
        {"http__timeout__read": -1},
        {"logging__level": "LOUD"},
    ],
)
def test_validate_resolver_config_rejects_bad_values(changes):
    with pytest.raises(ConfigError):
        validate_resolver_config(_config(**changes))


def test_validate_resolver_config_rejects_non_mapping():
    with pytest.raises(ConfigError):
        validate_resolver_config(None)


@pytest.mark.parametrize(
    "changes",
    [
        {"http__retry__multiplier": "fast"},
        {"http__retry__multiplier": 0},
        {"http__retry__max_wait": None},
        {"http__retry__max_wait": -5},
    ],
)
def test_validate_resolver_config_rejects_bad_retry_backoff(changes):
    with pytest.raises(ConfigError):
        validate_resolver_config(_config(**changes))


@pytest.mark.parametrize(
    "changes",
    [
        {"http__proxy": "http://proxy.test"},
        {"http__timeout__typo": 3},
        {"http__retry__jitter": 1.0},
        {"logging__extra": 1},
    ],
)
def test_validate_resolver_config_rejects_unknown_nested_keys(changes):
    with pytest.raises(ConfigError):
        validate_resolver_config(_config(**changes))
    validate_resolver_config(_config(**changes), allow_unknown=True)
