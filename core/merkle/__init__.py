"""
Module 03 - Merkle Commitments
Allow-list commitment: sorted-pair Keccak Merkle tree, proofs, verification.

Canonical Commitment Rules:
1. Leaf hashing: keccak256(20-byte address)
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Odd node: carried up unchanged
4. Leaves deduplicated and sorted before building

Usage:
    from core.merkle import build_tree, prove_inclusion, verify_inclusion

    tree = build_tree(addresses)
    proof = prove_inclusion(tree, addresses[2])
    assert verify_inclusion(tree.root, addresses[2], proof)
"""
from .merkle_tree import (
    MAX_PROOF_LENGTH,
    InclusionProof,
    MerkleTree,
    hash_leaf,
    merkle_parent,
    build_tree,
    prove_inclusion,
    verify_inclusion,
    compute_tree_depth,
)

from .merkle_proofs import (
    DEFAULT_ALLOWLIST,
    AllowListProver,
    AllowListVerifier,
    load_allowlist,
)


__all__ = [
    # Core types
    "InclusionProof",
    "MerkleTree",
    "MAX_PROOF_LENGTH",
    # Core functions
    "hash_leaf",
    "merkle_parent",
    "build_tree",
    "prove_inclusion",
    "verify_inclusion",
    "compute_tree_depth",
    # Proof service
    "DEFAULT_ALLOWLIST",
    "AllowListProver",
    "AllowListVerifier",
    "load_allowlist",
]
