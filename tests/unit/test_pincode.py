import pytest

from locality_lookup.common.errors import InvalidPincode
from locality_lookup.common.pincode import is_valid_pincode, normalise_pincode, require_pincode


def test_normalise_happy_path():
    assert normalise_pincode("560001") == "560001"


def test_normalise_strips_surrounding_whitespace():
    assert normalise_pincode(" 560001\n") == "560001"


def test_normalise_rejects_empty_none_and_non_strings():
    assert normalise_pincode(None) is None
    assert normalise_pincode("   ") is None
    assert normalise_pincode(560001) is None


def test_normalise_rejects_wrong_length_and_letters():
    assert normalise_pincode("12345") is None
    assert normalise_pincode("1234567") is None
    assert normalise_pincode("abcdef") is None
    assert normalise_pincode("560 001") is None


def test_validator_rejects_non_ascii_digits():
    assert not is_valid_pincode("５６０００１")
    assert is_valid_pincode("110016")


@pytest.mark.parametrize("raw", ["12345", "abcdef", "", None])
def test_require_pincode_raises_with_offending_value(raw):
    with pytest.raises(InvalidPincode) as excinfo:
        require_pincode(raw)
    assert excinfo.value.value == raw
    assert excinfo.value.error_code == "INVALID_PINCODE"


def test_validator_rejects_trailing_newline():
    assert not is_valid_pincode("560001\n")
    assert normalise_pincode("560001\n") == "560001"
