"""
Module 03 - Merkle Tree Implementation
Allow-list commitment: tree construction, proof generation, verification.

Owner: Protocol/Crypto Engineer
Module ID: M03

This module provides:
- Deterministic Merkle tree construction over a set of identifiers
- Inclusion proof generation for any member
- Inclusion proof verification against a root

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(identifier_bytes), the 20 raw address
   bytes, matching keccak256(abi.encodePacked(address)) on-chain
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
3. Odd node: carried up to the next layer unchanged (no duplication)
4. Leaves are deduplicated and sorted ascending before building

Determinism Notes:
- The root depends only on the identifier set, never on input order
- Sorted-pair hashing means a proof carries no left/right flags; the
  sibling hashes alone reconstruct the root
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from core.crypto.hashing import HASH_SIZE, hash_sorted_pair, keccak256, to_hex
from core.schemas.errors import InvalidIdentifierException, NotAMemberException
from core.schemas.identifiers import (
    IdentifierLike,
    display_identifier,
    normalize_identifier,
)


# No layer count can exceed this for any realistic allow-list (2**256 leaves)
MAX_PROOF_LENGTH = 256


@dataclass(frozen=True)
class InclusionProof:
    """
    Inclusion proof for a single identifier.

    Attributes:
        leaf: The leaf hash being proven
        siblings: Sibling hashes from bottom to top of tree
    """
    leaf: bytes
    siblings: tuple[bytes, ...]

    def __len__(self) -> int:
        return len(self.siblings)

    def to_hex(self) -> list[str]:
        """Render the siblings as 0x-prefixed hex strings, bottom-up."""
        return [to_hex(s) for s in self.siblings]


@dataclass(frozen=True)
class MerkleTree:
    """
    Immutable Merkle tree over a set of identifier leaves.

    Attributes:
        layers: All layers, leaves first, the single-element root layer last
    """
    layers: tuple[tuple[bytes, ...], ...]

    @property
    def root(self) -> bytes:
        return self.layers[-1][0]

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.layers[0]

    @property
    def depth(self) -> int:
        return len(self.layers)

    def __len__(self) -> int:
        return len(self.layers[0])

    def index_of(self, leaf: bytes) -> int | None:
        """Return the position of a leaf, or None if absent."""
        try:
            return self.leaves.index(leaf)
        except ValueError:
            return None

    def contains(self, identifier: IdentifierLike) -> bool:
        return self.index_of(hash_leaf(identifier)) is not None


def hash_leaf(identifier: IdentifierLike) -> bytes:
    """
    Compute the leaf hash for an identifier.

    Raises:
        InvalidIdentifierException: If the identifier is not an address
    """
    return keccak256(normalize_identifier(identifier))


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Order-independent: merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_sorted_pair(left, right)


def _next_layer(layer: Sequence[bytes]) -> tuple[bytes, ...]:
    parents: list[bytes] = []
    for i in range(0, len(layer) - 1, 2):
        parents.append(merkle_parent(layer[i], layer[i + 1]))
    if len(layer) % 2 == 1:
        parents.append(layer[-1])
    return tuple(parents)


def build_tree(identifiers: Iterable[IdentifierLike]) -> MerkleTree:
    """
    Build a Merkle tree from a set of identifiers.

    Algorithm:
    1. Hash each identifier to a leaf
    2. Deduplicate and sort the leaves ascending
    3. Pair adjacent nodes with sorted-pair hashing; an odd last node
       moves up unchanged
    4. Repeat until one node remains

    Example: [a, b, c] -> [parent(a,b), c] -> [parent(parent(a,b), c)]

    Raises:
        ValueError: If identifiers is empty
        InvalidIdentifierException: If any identifier is not an address
    """
    leaves = sorted({hash_leaf(identifier) for identifier in identifiers})
    if not leaves:
        raise ValueError("Cannot build a Merkle tree from an empty identifier set")

    layers: list[tuple[bytes, ...]] = [tuple(leaves)]
    while len(layers[-1]) > 1:
        layers.append(_next_layer(layers[-1]))

    return MerkleTree(layers=tuple(layers))


def prove_inclusion(tree: MerkleTree, identifier: IdentifierLike) -> InclusionProof:
    """
    Generate an inclusion proof for an identifier.

    At each layer the sibling (index XOR 1) is recorded when it exists;
    a node carried up unpaired contributes nothing.

    Raises:
        NotAMemberException: If the identifier's leaf is not in the tree
        InvalidIdentifierException: If the identifier is not an address
    """
    leaf = hash_leaf(identifier)
    index = tree.index_of(leaf)
    if index is None:
        raise NotAMemberException(display_identifier(identifier))

    siblings: list[bytes] = []
    for layer in tree.layers[:-1]:
        sibling_index = index ^ 1
        if sibling_index < len(layer):
            siblings.append(layer[sibling_index])
        index //= 2

    return InclusionProof(leaf=leaf, siblings=tuple(siblings))


def verify_inclusion(
    root: bytes,
    identifier: Any,
    proof: InclusionProof | Sequence[bytes],
) -> bool:
    """
    Verify an inclusion proof for an identifier against a root.

    The leaf is always recomputed from the identifier; the leaf carried by
    an InclusionProof is ignored, so a proof only vouches for the account
    it is checked against.

    Malformed input (wrong hash widths, non-bytes elements, an oversized
    proof, an unreadable identifier) is a verification failure, not an
    error.

    Returns:
        True if the reconstructed root equals root, False otherwise
    """
    siblings = proof.siblings if isinstance(proof, InclusionProof) else proof

    if not isinstance(root, (bytes, bytearray)) or len(root) != HASH_SIZE:
        return False
    if isinstance(siblings, (bytes, bytearray, str)):
        return False
    try:
        siblings = list(siblings)
    except TypeError:
        return False
    if len(siblings) > MAX_PROOF_LENGTH:
        return False

    try:
        current = hash_leaf(identifier)
    except InvalidIdentifierException:
        return False

    for sibling in siblings:
        if not isinstance(sibling, (bytes, bytearray)) or len(sibling) != HASH_SIZE:
            return False
        current = merkle_parent(current, bytes(sibling))

    return current == bytes(root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of layers of a tree with the given leaf count.

    A single leaf has depth 1, two leaves have depth 2, three or four
    leaves have depth 3, and so on. Zero leaves has depth 0.
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MAX_PROOF_LENGTH",
    "InclusionProof",
    "MerkleTree",
    "hash_leaf",
    "merkle_parent",
    "build_tree",
    "prove_inclusion",
    "verify_inclusion",
    "compute_tree_depth",
]
