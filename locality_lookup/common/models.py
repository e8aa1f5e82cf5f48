"""Data models used across the locality lookup."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class WardInfo:
    number: int | None = None
    name: str | None = None
    councillor: str | None = None
    party: str | None = None
    reservation_status: str | None = None
    match_method: str | None = None
    confidence: float | None = None


@dataclass(frozen=True)
class MlaInfo:
    constituency: str | None = None
    name: str | None = None
    party: str | None = None
    ac_number: int | None = None
    confidence: float | None = None


@dataclass(frozen=True)
class MpInfo:
    constituency: str | None = None
    name: str | None = None
    party: str | None = None
    confidence: float | None = None


@dataclass(frozen=True)
class LocalityRecord:
    pincode: str
    locality_name: str
    ward: WardInfo | None = None
    mla: MlaInfo | None = None
    mp: MpInfo | None = None
    data_source: str | None = None
    status: str | None = None
    note: str | None = None

    @property
    def match_key(self) -> str:
        return match_key(self.locality_name)

    def to_dict(self) -> dict[str, Any]:
        """Canonical JSON form, the same shape the pincode-map dataset uses."""
        return {
            "pincode": self.pincode,
            "display_name": self.locality_name,
            "ward": asdict(self.ward) if self.ward is not None else None,
            "mla": asdict(self.mla) if self.mla is not None else None,
            "mp": asdict(self.mp) if self.mp is not None else None,
            "data_source": self.data_source,
            "status": self.status,
            "note": self.note,
        }


@dataclass(frozen=True)
class Dataset:
    """Immutable snapshot of the parsed locality dataset."""

    by_pincode: Mapping[str, tuple[LocalityRecord, ...]]
    source: str
    shape: str
    skipped_rows: int = 0
    duplicate_names: int = 0

    def entries_for(self, pincode: str) -> tuple[LocalityRecord, ...]:
        return self.by_pincode.get(pincode, ())

    def pincodes(self) -> list[str]:
        return sorted(self.by_pincode)

    @property
    def record_count(self) -> int:
        return sum(len(records) for records in self.by_pincode.values())


@dataclass(frozen=True)
class LocalityLookupResult:
    pincode: str
    localities: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.localities)

    def to_dict(self) -> dict[str, Any]:
        return {"pincode": self.pincode, "localities": list(self.localities), "found": self.found}


def match_key(name: str) -> str:
    return name.strip().casefold()
