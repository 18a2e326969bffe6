"""
Module 03 - Allow-list Proof Service Tests
Tests for core/merkle/merkle_proofs.py

Tests:
- load_allowlist for text and JSON files
- AllowListProver roots and hex proofs
- AllowListVerifier hex verification and decoding failures
"""
import json

import pytest

from core.merkle import (
    DEFAULT_ALLOWLIST,
    AllowListProver,
    AllowListVerifier,
    build_tree,
    load_allowlist,
)
from core.crypto.hashing import to_hex
from core.schemas.errors import InvalidIdentifierException, NotAMemberException
from core.schemas.identifiers import display_identifier

from fixtures.common import OUTSIDER


CHECKSUMMED = [display_identifier(a) for a in DEFAULT_ALLOWLIST]


class TestLoadAllowlist:
    """Tests for load_allowlist()."""

    def test_text_file(self, tmp_path):
        """One address per line; blanks and comments skipped."""
        path = tmp_path / "allowlist.txt"
        path.write_text(
            "# deployment allow-list\n"
            f"{DEFAULT_ALLOWLIST[0].lower()}\n"
            "\n"
            f"{DEFAULT_ALLOWLIST[1]}  # second\n"
        )

        assert load_allowlist(path) == CHECKSUMMED[:2]

    def test_json_file(self, tmp_path):
        path = tmp_path / "allowlist.json"
        path.write_text(json.dumps(list(DEFAULT_ALLOWLIST)))

        assert load_allowlist(path) == CHECKSUMMED

    def test_json_must_be_array(self, tmp_path):
        path = tmp_path / "allowlist.json"
        path.write_text(json.dumps({"addresses": list(DEFAULT_ALLOWLIST)}))

        with pytest.raises(ValueError, match="array"):
            load_allowlist(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_allowlist(tmp_path / "missing.txt")

    def test_invalid_entry(self, tmp_path):
        path = tmp_path / "allowlist.txt"
        path.write_text("0xnotanaddress\n")

        with pytest.raises(InvalidIdentifierException):
            load_allowlist(path)


class TestAllowListProver:
    """Tests for AllowListProver."""

    def test_root_matches_build_tree(self, prover):
        assert prover.root == build_tree(DEFAULT_ALLOWLIST).root
        assert prover.root_hex == to_hex(prover.root)

    def test_shape(self, prover):
        assert prover.leaf_count == 6
        assert prover.depth == 4

    def test_members_deduplicated(self):
        prover = AllowListProver(list(DEFAULT_ALLOWLIST) + [DEFAULT_ALLOWLIST[0].lower()])

        assert prover.leaf_count == 6
        assert sorted(prover.members) == sorted(CHECKSUMMED)

    def test_contains(self, prover):
        assert prover.contains(DEFAULT_ALLOWLIST[3])
        assert not prover.contains(OUTSIDER)

    def test_proof_hex_format(self, prover):
        proof = prover.proof_hex(DEFAULT_ALLOWLIST[2])

        assert proof
        for sibling in proof:
            assert sibling.startswith("0x")
            assert len(sibling) == 66

    def test_proof_hex_non_member(self, prover):
        with pytest.raises(NotAMemberException):
            prover.proof_hex(OUTSIDER)

    def test_from_file(self, tmp_path, prover):
        path = tmp_path / "allowlist.txt"
        path.write_text("\n".join(DEFAULT_ALLOWLIST))

        assert AllowListProver.from_file(path).root == prover.root


class TestAllowListVerifier:
    """Tests for AllowListVerifier."""

    def test_every_member_verifies(self, prover):
        for address in DEFAULT_ALLOWLIST:
            proof = prover.proof_hex(address)
            assert AllowListVerifier.verify_hex(prover.root_hex, address, proof)

    def test_other_identity_rejected(self, prover):
        proof = prover.proof_hex(DEFAULT_ALLOWLIST[2])

        assert not AllowListVerifier.verify_hex(prover.root_hex, DEFAULT_ALLOWLIST[4], proof)

    def test_bytes_verify(self, prover):
        proof = prover.proof_hex(DEFAULT_ALLOWLIST[1])
        siblings = [bytes.fromhex(p[2:]) for p in proof]

        assert AllowListVerifier.verify(prover.root, DEFAULT_ALLOWLIST[1], siblings)

    @pytest.mark.parametrize(
        "root_hex",
        ["", "0x", "deadbeef", "0x" + "ab" * 20, "0x" + "zz" * 32],
    )
    def test_undecodable_root(self, prover, root_hex):
        proof = prover.proof_hex(DEFAULT_ALLOWLIST[0])

        assert not AllowListVerifier.verify_hex(root_hex, DEFAULT_ALLOWLIST[0], proof)

    def test_undecodable_sibling(self, prover):
        proof = prover.proof_hex(DEFAULT_ALLOWLIST[0])
        proof[0] = proof[0][2:]

        assert not AllowListVerifier.verify_hex(prover.root_hex, DEFAULT_ALLOWLIST[0], proof)
