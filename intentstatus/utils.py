"""
Utility functions for the intentstatus SDK.

Addresses, hashes and call data arrive from several sources (stored records,
RPC responses, client input) in mixed case and with or without a ``0x``
prefix. Everything is compared in the canonical form produced here.
"""
from typing import Optional, Union

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

HexLike = Union[str, bytes, bytearray]


def to_hex(value: HexLike) -> str:
    """
    Convert bytes or a hex string to a lowercase ``0x``-prefixed hex string.

    Args:
        value: Raw bytes or hex string (with or without 0x prefix)

    Returns:
        Lowercase hex string with 0x prefix

    Raises:
        TypeError: If value is neither bytes nor str
    """
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if not isinstance(value, str):
        raise TypeError(f"Expected bytes or hex string, got {type(value).__name__}")

    stripped = value[2:] if value[:2].lower() == "0x" else value
    return "0x" + stripped.lower()


def normalize_address(address: HexLike) -> str:
    """
    Canonical form of an Ethereum address: lowercase hex with 0x prefix.

    Checksummed and lowercase spellings of the same address compare equal
    after normalization.
    """
    return to_hex(address)


def normalize_optional_address(address: Optional[HexLike]) -> Optional[str]:
    """Normalize an address, passing None through."""
    return None if address is None else normalize_address(address)


def normalize_hash(tx_hash: HexLike) -> str:
    """Canonical form of a transaction hash."""
    return to_hex(tx_hash)


def normalize_data(data: Optional[HexLike]) -> str:
    """
    Canonical form of call data. Empty or missing data becomes ``0x``.
    """
    if data is None:
        return "0x"
    return to_hex(data)


def addresses_equal(first: Optional[HexLike], second: Optional[HexLike]) -> bool:
    """Compare two optional addresses case-insensitively."""
    return normalize_optional_address(first) == normalize_optional_address(second)


def redact(value: Optional[str]) -> str:
    """
    Redact a sensitive value (e.g. a signature) for logging.

    Args:
        value: Value to redact

    Returns:
        Placeholder that only reveals the value length
    """
    if value is None:
        return "None"
    return f"[REDACTED - {len(value)} chars]"
