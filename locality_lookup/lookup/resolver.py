"""Cached locality and representative lookups over the locality dataset."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any

from locality_lookup.common.config_loader import ResolverSettings
from locality_lookup.common.errors import DatasetUnavailable, LocalityError
from locality_lookup.common.http import HttpClient
from locality_lookup.common.logging import get_logger, log_event
from locality_lookup.common.models import Dataset, LocalityLookupResult, LocalityRecord, match_key
from locality_lookup.common.pincode import require_pincode
from locality_lookup.common.time_utils import elapsed_ms
from locality_lookup.lookup.adapters import build_dataset
from locality_lookup.lookup.formatting import format_representative_summary
from locality_lookup.lookup.sources import Fetcher, build_fetcher


class LocalityResolver:
    """Answers pincode → locality → representative queries.

    The parsed dataset is cached on the instance until :meth:`invalidate` or a
    forced reload. Concurrent cold-cache callers share one fetch; a failed
    fetch leaves any previously loaded snapshot in place.
    """

    def __init__(
        self,
        fetch: Fetcher,
        *,
        source: str = "<injected>",
        shape: str = "auto",
        logger: logging.Logger | None = None,
    ) -> None:
        self.fetch = fetch
        self.source = source
        self.shape = shape
        self.logger = logger or get_logger()
        self._dataset: Dataset | None = None
        self._load_lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._dataset is not None

    def invalidate(self) -> None:
        self._dataset = None
        log_event(self.logger, "dataset cache cleared", event="DATASET_INVALIDATE", status="ok", source=self.source)

    def load_dataset(self, force_reload: bool = False) -> Dataset:
        dataset = self._dataset
        if dataset is not None and not force_reload:
            return dataset

        with self._load_lock:
            dataset = self._dataset
            # Another caller finished the fetch while we waited.
            if dataset is not None and not force_reload:
                return dataset
            dataset = self._fetch_dataset()
            self._dataset = dataset
            return dataset

    def _fetch_dataset(self) -> Dataset:
        started = time.monotonic()
        try:
            payload: Any = self.fetch()
            dataset = build_dataset(payload, source=self.source, shape=self.shape)
        except DatasetUnavailable as exc:
            self._log_load_failure(exc, started)
            raise
        except (LocalityError, OSError, ValueError) as exc:
            self._log_load_failure(exc, started)
            raise DatasetUnavailable(f"Failed to load locality dataset from {self.source}: {exc}") from exc

        log_event(
            self.logger,
            "dataset loaded",
            event="DATASET_LOAD",
            status="ok",
            source=self.source,
            shape=dataset.shape,
            duration_ms=elapsed_ms(started),
            rows_in=dataset.record_count + dataset.skipped_rows,
            rows_out=dataset.record_count,
        )
        if dataset.skipped_rows:
            log_event(
                self.logger,
                f"skipped {dataset.skipped_rows} rows with malformed pincode or blank locality name",
                level=logging.WARNING,
                event="DATASET_ROWS_SKIPPED",
                status="warning",
                source=self.source,
            )
        if dataset.duplicate_names:
            log_event(
                self.logger,
                f"{dataset.duplicate_names} duplicate locality names within a pincode; first entry wins",
                level=logging.WARNING,
                event="DATASET_DUPLICATE_NAMES",
                status="warning",
                source=self.source,
            )
        return dataset

    def _log_load_failure(self, exc: Exception, started: float) -> None:
        log_event(
            self.logger,
            f"dataset load failed: {exc}",
            level=logging.ERROR,
            event="DATASET_LOAD",
            status="error",
            source=self.source,
            duration_ms=elapsed_ms(started),
            error_code=DatasetUnavailable.error_code,
        )

    def list_localities(self, pincode: str) -> list[str]:
        key = require_pincode(pincode)
        dataset = self.load_dataset()

        names: dict[str, str] = {}
        for record in dataset.entries_for(key):
            names.setdefault(record.match_key, record.locality_name)
        return sorted(names.values())

    def get_locality_details(self, pincode: str, locality_name: str) -> LocalityRecord | None:
        key = require_pincode(pincode)
        dataset = self.load_dataset()

        wanted = match_key(locality_name or "")
        for record in dataset.entries_for(key):
            if record.match_key == wanted:
                return record
        return None

    def lookup_localities(self, pincode: str) -> LocalityLookupResult:
        key = require_pincode(pincode)
        return LocalityLookupResult(pincode=key, localities=self.list_localities(key))

    def format_representative_summary(self, record: LocalityRecord | None, role: str) -> str:
        return format_representative_summary(record, role)


def build_resolver(
    settings: ResolverSettings,
    *,
    http_client: HttpClient | None = None,
    logger: logging.Logger | None = None,
) -> LocalityResolver:
    """Construct the process-wide resolver from loaded settings."""
    client = http_client or HttpClient(timeout=settings.timeout, retry=settings.retry)
    return LocalityResolver(
        build_fetcher(settings.source, client),
        source=settings.source,
        shape=settings.shape,
        logger=logger,
    )
