"""
Module 01 - Hashing Utilities
Keccak-256 hashing and hex helpers for allow-list commitments.

Owner: Protocol/Crypto Engineer
Module ID: M01

This module provides:
- Keccak-256 hashing for raw bytes (EVM-compatible, not NIST SHA3-256)
- Sorted-pair hashing used for Merkle parents
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Sorted-pair hashing compares the two digests bytewise, which for
  fixed-width digests is the same as comparing them as big-endian integers
"""
from __future__ import annotations

from eth_utils import keccak


HASH_SIZE = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two sibling digests in canonical order.

    The smaller value goes first, so the result does not depend on which
    side of the pair either digest came from:
    parent = keccak256(min(a, b) + max(a, b))
    """
    if a <= b:
        return keccak256(a + b)
    return keccak256(b + a)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not isinstance(hex_string, str) or not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {str(hex_string)[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def from_hex32(hex_string: str) -> bytes:
    """Decode a 0x-prefixed hex string that must hold exactly one 32-byte hash."""
    data = from_hex(hex_string)
    if len(data) != HASH_SIZE:
        raise ValueError(f"Expected {HASH_SIZE} bytes, got {len(data)}")
    return data


__all__ = [
    "HASH_SIZE",
    "keccak256",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
    "from_hex32",
]
