"""Ingest locality exports into the canonical dataset snapshot.

The canonical export is a JSON object keyed by pincode whose values are lists
of entries with ``display_name`` and nested ``ward`` / ``mla`` / ``mp``
objects. Two legacy exports are also accepted and folded into the same
records: the flat ``localities_index`` row array and the older
``grouped_by_pincode`` entries that use ``locality_name`` and prefixed
sub-record keys.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from locality_lookup.common.errors import DatasetUnavailable
from locality_lookup.common.models import Dataset, LocalityRecord, MlaInfo, MpInfo, WardInfo
from locality_lookup.common.pincode import normalise_pincode

SHAPE_PINCODE_MAP = "pincode_map"
SHAPE_INDEX_ROWS = "index_rows"


def clamp(value: float, *, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _confidence(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if score != score:  # NaN
        return None
    return clamp(score, minimum=0.0, maximum=1.0)


def _match_method(value: Any) -> str | None:
    method = _text(value)
    return method.lower() if method else None


def _pick(obj: dict, *keys: str) -> Any:
    for key in keys:
        if obj.get(key) is not None:
            return obj[key]
    return None


def _is_empty(info: object) -> bool:
    return all(getattr(info, name) is None for name in info.__dataclass_fields__)


def _ward_from_entry(entry: dict) -> WardInfo | None:
    raw = entry.get("ward")
    if not isinstance(raw, dict):
        return None
    ward = WardInfo(
        number=_int(_pick(raw, "number", "ward_number")),
        name=_text(_pick(raw, "name", "ward_name")),
        councillor=_text(_pick(raw, "councillor", "councillor_name")),
        party=_text(_pick(raw, "party", "party_affiliation")),
        reservation_status=_text(raw.get("reservation_status")),
        match_method=_match_method(_pick(raw, "match_method") or entry.get("ward_match_method")),
        confidence=_confidence(raw["confidence"] if "confidence" in raw else entry.get("ward_confidence")),
    )
    # Match metadata alone does not make a ward assignment.
    if ward.number is None and ward.name is None and ward.councillor is None:
        return None
    return ward


def _mla_from_entry(entry: dict) -> MlaInfo | None:
    raw = entry.get("mla")
    if not isinstance(raw, dict):
        return None
    mla = MlaInfo(
        constituency=_text(_pick(raw, "constituency", "ac_name")),
        name=_text(_pick(raw, "name", "mla_name")),
        party=_text(_pick(raw, "party", "party_name")),
        ac_number=_int(raw.get("ac_number")),
    )
    if _is_empty(mla):
        return None
    confidence = raw["confidence"] if "confidence" in raw else entry.get("mla_confidence")
    return replace(mla, confidence=_confidence(confidence))


def _mp_from_entry(entry: dict) -> MpInfo | None:
    raw = entry.get("mp")
    if not isinstance(raw, dict):
        return None
    mp = MpInfo(
        constituency=_text(_pick(raw, "constituency", "Constituency")),
        name=_text(_pick(raw, "name", "mp_name", "Name of Member")),
        party=_text(_pick(raw, "party", "Party")),
    )
    if _is_empty(mp):
        return None
    confidence = raw["confidence"] if "confidence" in raw else entry.get("mp_confidence")
    return replace(mp, confidence=_confidence(confidence))


def record_from_map_entry(pincode: str, entry: dict) -> LocalityRecord | None:
    name = _text(_pick(entry, "display_name", "locality_name"))
    if name is None:
        return None
    return LocalityRecord(
        pincode=pincode,
        locality_name=name,
        ward=_ward_from_entry(entry),
        mla=_mla_from_entry(entry),
        mp=_mp_from_entry(entry),
        data_source=_text(entry.get("data_source")),
        status=_text(entry.get("status")),
        note=_text(entry.get("note")),
    )


def record_from_index_row(row: dict) -> LocalityRecord | None:
    pincode = normalise_pincode(_text(row.get("pincode")))
    name = _text(row.get("locality_name"))
    if pincode is None or name is None:
        return None

    nested = {
        "ward": {
            "number": row.get("ward_number"),
            "name": row.get("ward_name"),
            "councillor": row.get("councillor_name"),
            "party": row.get("councillor_party"),
            "reservation_status": row.get("reservation_status"),
            "match_method": row.get("ward_match_method"),
            "confidence": row.get("ward_confidence"),
        },
        "mla": {
            "constituency": row.get("ac_name"),
            "name": row.get("mla_name"),
            "party": row.get("mla_party"),
            "ac_number": row.get("ac_number"),
            "confidence": row.get("mla_confidence"),
        },
        "mp": {
            "constituency": row.get("mp_constituency"),
            "name": row.get("mp_name"),
            "party": row.get("mp_party"),
            "confidence": row.get("mp_confidence"),
        },
    }
    return LocalityRecord(
        pincode=pincode,
        locality_name=name,
        ward=_ward_from_entry(nested),
        mla=_mla_from_entry(nested),
        mp=_mp_from_entry(nested),
        data_source=_text(row.get("data_source")),
        status=_text(row.get("status")),
        note=_text(row.get("note")),
    )


def detect_shape(payload: Any) -> str:
    if isinstance(payload, dict):
        return SHAPE_PINCODE_MAP
    if isinstance(payload, list):
        return SHAPE_INDEX_ROWS
    raise DatasetUnavailable(f"Unsupported dataset payload type: {type(payload).__name__}")


def _iter_map_records(payload: Any) -> tuple[list[LocalityRecord], int]:
    if not isinstance(payload, dict):
        raise DatasetUnavailable("Expected a JSON object keyed by pincode")

    records: list[LocalityRecord] = []
    skipped = 0
    for raw_pincode, entries in payload.items():
        if not isinstance(entries, list):
            raise DatasetUnavailable(f"Entries for pincode {raw_pincode!r} must be a list")
        pincode = normalise_pincode(raw_pincode)
        for entry in entries:
            if not isinstance(entry, dict):
                raise DatasetUnavailable(f"Entry under pincode {raw_pincode!r} must be an object")
            record = record_from_map_entry(pincode, entry) if pincode is not None else None
            if record is None:
                skipped += 1
                continue
            records.append(record)
    return records, skipped


def _iter_index_records(payload: Any) -> tuple[list[LocalityRecord], int]:
    if not isinstance(payload, list):
        raise DatasetUnavailable("Expected a JSON array of locality index rows")

    records: list[LocalityRecord] = []
    skipped = 0
    for idx, row in enumerate(payload):
        if not isinstance(row, dict):
            raise DatasetUnavailable(f"Index row {idx} must be an object")
        record = record_from_index_row(row)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    return records, skipped


def build_dataset(payload: Any, *, source: str, shape: str = "auto") -> Dataset:
    """Parse a raw JSON payload into a :class:`Dataset`.

    Rows with a malformed pincode or blank locality name are skipped and
    counted; structural problems raise :class:`DatasetUnavailable`.
    """
    resolved_shape = detect_shape(payload) if shape == "auto" else shape
    if resolved_shape == SHAPE_PINCODE_MAP:
        records, skipped = _iter_map_records(payload)
    elif resolved_shape == SHAPE_INDEX_ROWS:
        records, skipped = _iter_index_records(payload)
    else:
        raise DatasetUnavailable(f"Unknown dataset shape: {shape}")

    grouped: dict[str, list[LocalityRecord]] = defaultdict(list)
    seen: dict[str, set[str]] = defaultdict(set)
    duplicates = 0
    for record in records:
        key = record.match_key
        if key in seen[record.pincode]:
            duplicates += 1
        seen[record.pincode].add(key)
        grouped[record.pincode].append(record)

    return Dataset(
        by_pincode=MappingProxyType({pincode: tuple(rows) for pincode, rows in grouped.items()}),
        source=source,
        shape=resolved_shape,
        skipped_rows=skipped,
        duplicate_names=duplicates,
    )
