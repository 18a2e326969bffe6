"""
Core cryptographic utilities.

Keccak-256 hashing and hex codecs used by the allow-list commitments.
"""
from .hashing import (
    HASH_SIZE,
    keccak256,
    hash_sorted_pair,
    to_hex,
    from_hex,
    from_hex32,
)

__all__ = [
    "HASH_SIZE",
    "keccak256",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
    "from_hex32",
]
