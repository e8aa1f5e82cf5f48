from __future__ import annotations

import json
from pathlib import Path

import pytest

from locality_lookup.common.config_loader import ResolverSettings
from locality_lookup.common.errors import DatasetUnavailable
from locality_lookup.common.http import HttpClient, HttpRequestError, RetryConfig, TimeoutConfig
from locality_lookup.lookup.resolver import build_resolver
from locality_lookup.lookup.sources import build_fetcher, is_remote_source, local_path


class FakeResponse:
    def __init__(self, status_code: int, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


def _settings(source: str, shape: str = "auto") -> ResolverSettings:
    return ResolverSettings(
        source=source,
        shape=shape,
        timeout=TimeoutConfig(),
        retry=RetryConfig(),
        log_level="INFO",
    )


def test_source_kind_detection():
    assert is_remote_source("https://cdn.test/final_database.json")
    assert not is_remote_source("data/final_database.json")
    assert local_path("file:///srv/data/l.json") == Path("/srv/data/l.json")


@pytest.mark.integration
def test_local_file_source_feeds_resolver(tmp_path: Path):
    dataset_path = tmp_path / "localities_index.json"
    dataset_path.write_text(
        json.dumps(
            [
                {"pincode": "560001", "locality_name": "Indiranagar", "ward_number": 12, "ward_name": "Ward 12", "councillor_name": "A. Kumar"},
                {"pincode": "560001", "locality_name": "Domlur"},
            ]
        ),
        encoding="utf-8",
    )
    resolver = build_resolver(_settings(str(dataset_path)))

    assert resolver.list_localities("560001") == ["Domlur", "Indiranagar"]
    assert resolver.load_dataset().shape == "index_rows"


@pytest.mark.integration
def test_local_file_with_invalid_json_is_unavailable(tmp_path: Path):
    dataset_path = tmp_path / "broken.json"
    dataset_path.write_text("{not json", encoding="utf-8")
    resolver = build_resolver(_settings(dataset_path.as_uri()))

    with pytest.raises(DatasetUnavailable):
        resolver.list_localities("560001")


@pytest.mark.integration
def test_http_source_goes_through_client(monkeypatch):
    client = HttpClient()
    calls = []

    def fake_request(**kwargs):
        calls.append(kwargs["url"])
        return FakeResponse(200, {"560001": [{"display_name": "Indiranagar"}]})

    monkeypatch.setattr(client.session, "request", fake_request)
    resolver = build_resolver(_settings("https://cdn.test/final_database.json"), http_client=client)

    assert resolver.list_localities("560001") == ["Indiranagar"]
    resolver.invalidate()
    resolver.list_localities("560001")
    assert calls == ["https://cdn.test/final_database.json"] * 2


@pytest.mark.integration
def test_http_non_success_status_is_unavailable(monkeypatch):
    client = HttpClient()
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(404))
    fetch = build_fetcher("https://cdn.test/final_database.json", client)
    resolver = build_resolver(_settings("https://cdn.test/final_database.json"), http_client=client)

    with pytest.raises(HttpRequestError):
        fetch()
    with pytest.raises(DatasetUnavailable):
        resolver.load_dataset()
