"""Display strings for locality representatives."""

from __future__ import annotations

from typing import Any

from locality_lookup.common.constants import GENERIC_NOT_AVAILABLE, NOT_AVAILABLE, ROLES
from locality_lookup.common.models import LocalityRecord, MlaInfo, MpInfo, WardInfo

UNKNOWN = "Unknown"


def _part(value: object) -> str:
    return UNKNOWN if value is None else str(value)


def _format_ward(ward: WardInfo) -> str:
    return f"{_part(ward.name)} (Ward {_part(ward.number)}) - {_part(ward.councillor)}"


def _format_member(member: MlaInfo | MpInfo) -> str:
    return f"{_part(member.name)} ({_part(member.constituency)}) - {_part(member.party)}"


def format_representative_summary(record: LocalityRecord | None, role: str) -> str:
    """One-line summary of the ward, MLA or MP for ``record``.

    Absent sub-records (and unknown roles) yield a fixed "not available"
    sentinel; this function does not raise.
    """
    if role not in ROLES:
        return GENERIC_NOT_AVAILABLE
    info = getattr(record, role, None)
    if info is None:
        return NOT_AVAILABLE[role]
    if role == "ward":
        return _format_ward(info)
    return _format_member(info)


def representative_summaries(record: LocalityRecord) -> dict[str, str]:
    return {role: format_representative_summary(record, role) for role in ROLES}


def community_locality_payload(record: LocalityRecord) -> dict[str, Any]:
    """Fields stored alongside a community created from a picked locality."""
    return {
        "name": record.locality_name,
        "description": f"Community for {record.locality_name}",
        "location": f"{record.locality_name}, Pincode: {record.pincode}",
        "pincode": record.pincode,
        "locality_name": record.locality_name,
        "locality_data": representative_summaries(record),
    }
