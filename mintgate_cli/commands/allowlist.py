"""
Module 05 - CLI Allow-list Commands

Offline tooling for the allow-list commitment:
- root: Build the commitment root for an allow-list
- proof: Produce a member's inclusion proof for the mint front-end
- verify: Check a proof against a root, the way the sale contract does

Usage:
    mintgate root [--allowlist PATH] [--json]
    mintgate proof <address> [--allowlist PATH] [--json]
    mintgate verify --root ROOT --address ADDRESS [--proof HASH ...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.merkle import DEFAULT_ALLOWLIST, AllowListProver, AllowListVerifier
from core.schemas.errors import InvalidIdentifierException, NotAMemberException
from core.schemas.identifiers import display_identifier


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class RootSummary:
    """Commitment summary for CLI output."""
    source: str = ""
    root: str = ""
    leaf_count: int = 0
    depth: int = 0
    members: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["members"]:
            del d["members"]
        return d


@dataclass
class ProofSummary:
    """Inclusion proof for CLI output."""
    source: str = ""
    root: str = ""
    address: str = ""
    leaf: str = ""
    member: bool = False
    proof: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class VerifyProofSummary:
    """Proof check result for CLI output."""
    root: str = ""
    address: str = ""
    proof: list[str] = field(default_factory=list)
    valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _print_json(summary: RootSummary | ProofSummary | VerifyProofSummary) -> None:
    print(json.dumps(summary.to_dict(), indent=2))


def _output_json(args: Namespace) -> bool:
    if args.json:
        return True
    config = getattr(args, "cli_config", None)
    return config is not None and config.default_output_format == "json"


def load_prover(args: Namespace) -> tuple[AllowListProver, str]:
    """
    Build the prover for the allow-list a command should use.

    Resolution order: --allowlist, then the configured allowlist_path,
    then the built-in deployment list.
    """
    path = getattr(args, "allowlist", None)
    if path is None:
        config = getattr(args, "cli_config", None)
        path = config.allowlist_path if config is not None else None

    if path is None:
        logger.info("No allow-list file given; using the built-in list")
        return AllowListProver(DEFAULT_ALLOWLIST), "(built-in)"

    return AllowListProver.from_file(path), str(path)


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    try:
        prover, source = load_prover(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading allow-list: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = RootSummary(
        source=source,
        root=prover.root_hex,
        leaf_count=prover.leaf_count,
        depth=prover.depth,
        members=prover.members if args.members else [],
    )

    if _output_json(args):
        _print_json(summary)
    else:
        print(f"allowlist: {summary.source}")
        print(f"root: {summary.root}")
        print(f"leaves: {summary.leaf_count}")
        print(f"depth: {summary.depth}")
        if summary.members:
            print(f"\nmembers ({len(summary.members)}):")
            for member in summary.members:
                print(f"  {member}")

    return EXIT_SUCCESS


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Exits with EXIT_VERIFICATION_FAILED when the address is not on the list.
    """
    try:
        address = display_identifier(args.address)
    except InvalidIdentifierException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        prover, source = load_prover(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading allow-list: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = ProofSummary(
        source=source,
        root=prover.root_hex,
        address=address,
        leaf=prover.leaf_hex(address),
    )
    try:
        summary.proof = prover.proof_hex(address)
        summary.member = True
    except NotAMemberException:
        logger.warning(f"{address} is not on the allow-list")

    if _output_json(args):
        _print_json(summary)
    else:
        print(f"allowlist: {summary.source}")
        print(f"root: {summary.root}")
        print(f"address: {summary.address}")
        print(f"leaf: {summary.leaf}")
        if summary.member:
            print(f"\nproof ({len(summary.proof)}):")
            for sibling in summary.proof:
                print(f"  {sibling}")
        else:
            print("\n✗ not a member")

    return EXIT_SUCCESS if summary.member else EXIT_VERIFICATION_FAILED


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Exits with EXIT_VERIFICATION_FAILED when the proof does not hold.
    """
    proof = list(args.proof or [])
    summary = VerifyProofSummary(root=args.root, address=args.address, proof=proof)
    summary.valid = AllowListVerifier.verify_hex(args.root, args.address, proof)

    if _output_json(args):
        _print_json(summary)
    else:
        status = "✓ valid" if summary.valid else "✗ invalid"
        print(f"root: {summary.root}")
        print(f"address: {summary.address}")
        print(f"proof length: {len(summary.proof)}")
        print(status)

    return EXIT_SUCCESS if summary.valid else EXIT_VERIFICATION_FAILED
