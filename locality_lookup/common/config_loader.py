"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from locality_lookup.common.constants import DATASET_SOURCE_ENV
from locality_lookup.common.errors import ConfigError
from locality_lookup.common.fs import read_yaml
from locality_lookup.common.http import RetryConfig, TimeoutConfig
from locality_lookup.common.schema import validate_resolver_config

CONFIG_FILENAME = "resolver.yml"


@dataclass(frozen=True)
class ResolverSettings:
    source: str
    shape: str
    timeout: TimeoutConfig
    retry: RetryConfig
    log_level: str


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def _resolve_source(source: str, config_dir: Path) -> str:
    if "://" in source:
        return source
    path = Path(source)
    if path.is_absolute():
        return source
    # Relative paths are relative to the repo root, one level above config/.
    return str((config_dir.parent / path).resolve())


def load_settings(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ResolverSettings:
    environ = os.environ if environ is None else environ
    overlay_path = (overlay_config_dir / CONFIG_FILENAME) if overlay_config_dir is not None else None
    cfg = validate_resolver_config(
        _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path),
        allow_unknown=allow_unknown,
    )

    source = environ.get(DATASET_SOURCE_ENV) or _resolve_source(cfg["dataset"]["source"], config_dir)
    http = cfg["http"]
    return ResolverSettings(
        source=source,
        shape=cfg["dataset"]["shape"],
        timeout=TimeoutConfig(
            connect=float(http["timeout"]["connect"]),
            read=float(http["timeout"]["read"]),
        ),
        retry=RetryConfig(
            max_attempts=int(http["retry"]["max_attempts"]),
            multiplier=float(http["retry"]["multiplier"]),
            max_wait=float(http["retry"]["max_wait"]),
        ),
        log_level=str(cfg["logging"]["level"]).upper(),
    )
