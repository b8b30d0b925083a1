"""
Tests for utility functions.
"""
import pytest

from intentstatus.utils import (
    ZERO_ADDRESS, addresses_equal, normalize_address, normalize_data, normalize_hash, normalize_optional_address,
    redact, to_hex
)


def test_to_hex():
    assert to_hex(b"\xab\xcd") == "0xabcd"
    assert to_hex(bytearray(b"\x01")) == "0x01"
    assert to_hex("ABCD") == "0xabcd"
    assert to_hex("0XABCD") == "0xabcd"
    assert to_hex("0x") == "0x"


def test_to_hex_rejects_other_types():
    with pytest.raises(TypeError):
        to_hex(123)


def test_checksummed_and_lowercase_addresses_are_equal():
    checksummed = "0x000000000000000000000000000000000000dEaD"

    assert normalize_address(checksummed) == "0x000000000000000000000000000000000000dead"
    assert addresses_equal(checksummed, checksummed.lower())
    assert not addresses_equal(checksummed, ZERO_ADDRESS)


def test_optional_addresses():
    assert normalize_optional_address(None) is None
    assert addresses_equal(None, None)
    assert not addresses_equal(None, ZERO_ADDRESS)


def test_normalize_hash_and_data():
    assert normalize_hash("0x" + "AB" * 32) == "0x" + "ab" * 32
    assert normalize_data(None) == "0x"
    assert normalize_data(b"") == "0x"
    assert normalize_data("0xA9059CBB") == "0xa9059cbb"


def test_redact():
    assert redact("0x1234") == "[REDACTED - 6 chars]"
    assert redact(None) == "None"
