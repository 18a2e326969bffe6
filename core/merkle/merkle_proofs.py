"""
Module 03 - Allow-list Proof Service
Hex-facing wrappers around the Merkle tree for front-end consumption.

Owner: Protocol/Crypto Engineer
Module ID: M03

This module provides class-based interfaces:
- AllowListProver: Build the commitment once, serve roots and proofs
- AllowListVerifier: Verify hex-encoded proofs
- load_allowlist: Read an allow-list file

Proofs leave this module as lists of 0x-prefixed 32-byte hex strings,
the form a wallet front-end submits with a whitelist mint.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Sequence

from core.crypto.hashing import from_hex32, to_hex
from core.merkle.merkle_tree import (
    MerkleTree,
    build_tree,
    hash_leaf,
    prove_inclusion,
    verify_inclusion,
)
from core.schemas.identifiers import display_identifier, normalize_identifier


logger = logging.getLogger(__name__)


# Allow-list shipped with the original deployment scripts
DEFAULT_ALLOWLIST: tuple[str, ...] = (
    "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
    "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC",
    "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
    "0x8D8F7397258DdbcEf53DbE9b5e5cF73c684187e2",
    "0xE4C0423981B6bFA27fa2874a00084FC94ae0ED80",
    "0xb9297a861040026b7a488238A26ee13e1056b6B1",
)


def load_allowlist(path: str | Path) -> list[str]:
    """
    Load allow-listed addresses from a file.

    Supported formats:
    - JSON: an array of address strings
    - Text: one address per line; blank lines and '#' comments ignored

    Every entry is validated and returned in checksum form, in file order.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidIdentifierException: If an entry is not an address
        ValueError: If a JSON file is not an array
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Allow-list file not found: {path}")

    text = path.read_text(encoding="utf-8")

    if path.suffix.lower() == ".json":
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError(f"Allow-list JSON must be an array of addresses: {path}")
        entries = [str(item) for item in data]
    else:
        entries = []
        for line in text.splitlines():
            line = line.split("#", 1)[0].strip()
            if line:
                entries.append(line)

    addresses = [display_identifier(entry) for entry in entries]
    logger.info(f"Loaded {len(addresses)} allow-list entries from {path}")
    return addresses


class AllowListProver:
    """
    Commitment builder and proof server for one allow-list.

    The tree is built once at construction; every proof comes from that
    tree, so all proofs are consistent with root_hex.

    Example:
        >>> prover = AllowListProver(DEFAULT_ALLOWLIST)
        >>> proof = prover.proof_hex(DEFAULT_ALLOWLIST[2])
        >>> AllowListVerifier.verify_hex(prover.root_hex, DEFAULT_ALLOWLIST[2], proof)
        True
    """

    def __init__(self, addresses: Iterable[str | bytes]) -> None:
        self._members = sorted({normalize_identifier(a) for a in addresses})
        self.tree: MerkleTree = build_tree(self._members)
        logger.debug(
            f"Built allow-list tree: {len(self.tree)} leaves, "
            f"depth {self.tree.depth}, root {self.root_hex}"
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "AllowListProver":
        return cls(load_allowlist(path))

    @property
    def root(self) -> bytes:
        return self.tree.root

    @property
    def root_hex(self) -> str:
        return to_hex(self.tree.root)

    @property
    def leaf_count(self) -> int:
        return len(self.tree)

    @property
    def depth(self) -> int:
        return self.tree.depth

    @property
    def members(self) -> list[str]:
        """Checksum addresses of all members, deduplicated."""
        return [display_identifier(m) for m in self._members]

    def contains(self, address: str | bytes) -> bool:
        return self.tree.contains(address)

    def leaf_hex(self, address: str | bytes) -> str:
        return to_hex(hash_leaf(address))

    def proof_hex(self, address: str | bytes) -> list[str]:
        """
        Generate the hex-encoded proof for a member.

        Raises:
            NotAMemberException: If the address is not on the list
        """
        return prove_inclusion(self.tree, address).to_hex()


class AllowListVerifier:
    """
    Verification of hex-encoded proofs.

    Mirrors the on-chain check: anything that fails to decode is simply
    not a valid proof.
    """

    @staticmethod
    def verify(root: bytes, address: str | bytes, proof: Sequence[bytes]) -> bool:
        return verify_inclusion(root, address, proof)

    @staticmethod
    def verify_hex(root_hex: str, address: str | bytes, proof_hex: Sequence[str]) -> bool:
        try:
            root = from_hex32(root_hex)
            siblings = [from_hex32(p) for p in proof_hex]
        except (TypeError, ValueError):
            return False
        return verify_inclusion(root, address, siblings)


__all__ = [
    "DEFAULT_ALLOWLIST",
    "load_allowlist",
    "AllowListProver",
    "AllowListVerifier",
]
