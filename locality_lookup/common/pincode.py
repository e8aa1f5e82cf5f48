"""Indian postal pincode normalisation and validation."""

from __future__ import annotations

import re

from locality_lookup.common.errors import InvalidPincode

PINCODE_RE = re.compile(r"[0-9]{6}")


def is_valid_pincode(value: str) -> bool:
    return isinstance(value, str) and PINCODE_RE.fullmatch(value) is not None


def normalise_pincode(raw: object) -> str | None:
    if not isinstance(raw, str):
        return None

    cleaned = raw.strip()
    if not is_valid_pincode(cleaned):
        return None
    return cleaned


def require_pincode(raw: object) -> str:
    pincode = normalise_pincode(raw)
    if pincode is None:
        raise InvalidPincode(raw)
    return pincode
