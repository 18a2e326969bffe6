"""
Allow-list Routes

Proof service for front-ends: build a commitment root, serve a member's
proof, check a proof. Stateless; nothing here touches the sale.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.models.requests import AllowListRequest, ProofRequest, VerifyProofRequest
from api.models.responses import ProofResponse, RootResponse, VerifyProofResponse
from core.merkle.merkle_proofs import AllowListProver, AllowListVerifier
from core.schemas.identifiers import display_identifier


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/allowlist", tags=["allowlist"])


@router.post("/root", response_model=RootResponse)
def build_root(request: AllowListRequest) -> RootResponse:
    """Build the commitment root for an allow-list."""
    prover = AllowListProver(request.addresses)
    return RootResponse(
        root=prover.root_hex,
        leaf_count=prover.leaf_count,
        depth=prover.depth,
    )


@router.post("/proof", response_model=ProofResponse)
def build_proof(request: ProofRequest) -> ProofResponse:
    """
    Build the inclusion proof for one member.

    Responds 404 NOT_A_MEMBER when the address is not on the list.
    """
    prover = AllowListProver(request.addresses)
    proof = prover.proof_hex(request.address)
    return ProofResponse(
        root=prover.root_hex,
        address=display_identifier(request.address),
        leaf=prover.leaf_hex(request.address),
        proof=proof,
    )


@router.post("/verify", response_model=VerifyProofResponse)
def verify_proof(request: VerifyProofRequest) -> VerifyProofResponse:
    """Check a proof for an address against a root."""
    valid = AllowListVerifier.verify_hex(request.root, request.address, request.proof)
    return VerifyProofResponse(valid=valid)
