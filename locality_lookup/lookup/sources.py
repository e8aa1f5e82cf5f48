"""Fetch the raw locality dataset from a URL or a local file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from urllib.parse import urlparse

from locality_lookup.common.fs import read_json
from locality_lookup.common.http import HttpClient

Fetcher = Callable[[], Any]


def is_remote_source(source: str) -> bool:
    return urlparse(source).scheme in {"http", "https"}


def local_path(source: str) -> Path:
    parsed = urlparse(source)
    if parsed.scheme == "file":
        return Path(parsed.path)
    return Path(source)


def build_fetcher(source: str, http_client: HttpClient | None = None) -> Fetcher:
    """Return a zero-argument callable yielding the decoded JSON payload.

    Remote sources go through ``http_client`` and raise ``HttpRequestError``
    on failure; local sources raise ``OSError`` or ``ValueError``.
    """
    if is_remote_source(source):
        client = http_client or HttpClient()

        def fetch_remote() -> Any:
            return client.get_json(source)

        return fetch_remote

    path = local_path(source)

    def fetch_local() -> Any:
        return read_json(path)

    return fetch_local
