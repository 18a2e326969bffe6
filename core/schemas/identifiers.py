"""
Module 02 - Schemas
File: identifiers.py

Purpose: Canonical encoding of participant identifiers (account addresses).

Internally every identifier is the 20 raw address bytes; that is also the
byte string hashed into an allow-list leaf. Externally identifiers are
rendered as EIP-55 checksum strings.
"""

from typing import Any, Union

from eth_utils import is_hex_address, to_canonical_address, to_checksum_address

from .errors import InvalidIdentifierException


IDENTIFIER_SIZE = 20

IdentifierLike = Union[str, bytes, bytearray]


def normalize_identifier(value: Any) -> bytes:
    """
    Normalize an address to its 20-byte canonical form.

    Accepts raw 20-byte values or 0x-prefixed 40-digit hex strings in any
    letter case. Surrounding whitespace is ignored.

    Raises:
        InvalidIdentifierException: If the value is not an address
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != IDENTIFIER_SIZE:
            raise InvalidIdentifierException(
                f"Identifier must be {IDENTIFIER_SIZE} bytes, got {len(value)}",
                value=value,
            )
        return bytes(value)

    if isinstance(value, str):
        candidate = value.strip()
        if candidate.startswith("0x") and is_hex_address(candidate):
            return to_canonical_address(candidate)
        raise InvalidIdentifierException(
            f"Not a 0x-prefixed 20-byte hex address: {candidate[:48]!r}",
            value=value,
        )

    raise InvalidIdentifierException(
        f"Unsupported identifier type: {type(value).__name__}",
        value=value,
    )


def display_identifier(value: IdentifierLike) -> str:
    """Render an identifier as an EIP-55 checksum address."""
    return to_checksum_address(normalize_identifier(value))


def is_identifier(value: Any) -> bool:
    """Check whether a value can be normalized to an identifier."""
    try:
        normalize_identifier(value)
    except InvalidIdentifierException:
        return False
    return True


__all__ = [
    "IDENTIFIER_SIZE",
    "IdentifierLike",
    "normalize_identifier",
    "display_identifier",
    "is_identifier",
]
