"""
Sale Routes

HTTP surface of the mint state machine: mints, withdrawal, admin setters
and state queries. Sale errors propagate to the MintGateException handler
registered on the app.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_state_machine
from api.errors import InvalidRequestError
from api.models.requests import (
    CallerRequest,
    FlagRequest,
    PublicMintRequest,
    RootRequest,
    UriRequest,
    WhitelistMintRequest,
)
from api.models.responses import (
    CommitmentRootResponse,
    MintResponse,
    StateResponse,
    WithdrawResponse,
)
from core.crypto.hashing import from_hex32, to_hex
from core.mint.state_machine import MintStateMachine
from core.schemas.errors import MintGateException


router = APIRouter(prefix="/sale", tags=["sale"])


def _decode_proof(proof: list[str]) -> list[bytes | str]:
    """
    Decode proof hashes, leaving undecodable elements as the raw string.

    verify_inclusion rejects any element that is not a 32-byte hash, so a
    malformed proof surfaces as NOT_WHITELISTED after the sale-state,
    supply, quota and payment checks rather than as an input error.
    """
    decoded: list[bytes | str] = []
    for element in proof:
        try:
            decoded.append(from_hex32(element))
        except ValueError:
            decoded.append(element)
    return decoded


@router.get("/state", response_model=StateResponse)
def get_state(machine: MintStateMachine = Depends(get_state_machine)) -> StateResponse:
    return StateResponse(state=machine.snapshot())


@router.get("/root", response_model=CommitmentRootResponse)
def get_commitment_root(
    machine: MintStateMachine = Depends(get_state_machine),
) -> CommitmentRootResponse:
    root = machine.get_commitment_root()
    return CommitmentRootResponse(root=to_hex(root) if root else None)


# =============================================================================
# Mints & Funds
# =============================================================================

@router.post("/mint/public", response_model=MintResponse)
def public_mint(
    request: PublicMintRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> MintResponse:
    receipt = machine.public_mint(request.caller, request.quantity, request.payment)
    return MintResponse(receipt=receipt)


@router.post("/mint/whitelist", response_model=MintResponse)
def whitelist_mint(
    request: WhitelistMintRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> MintResponse:
    proof = _decode_proof(request.proof)
    receipt = machine.whitelist_mint(request.caller, request.quantity, request.payment, proof)
    return MintResponse(receipt=receipt)


@router.post("/mint/team", response_model=MintResponse)
def team_mint(
    request: CallerRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> MintResponse:
    return MintResponse(receipt=machine.team_mint(request.caller))


@router.post("/withdraw", response_model=WithdrawResponse)
def withdraw(
    request: CallerRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> WithdrawResponse:
    return WithdrawResponse(receipt=machine.withdraw(request.caller))


# =============================================================================
# Admin Setters
# =============================================================================

@router.post("/admin/public-sale", response_model=StateResponse)
def set_public_sale(
    request: FlagRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> StateResponse:
    machine.set_public_sale_active(request.caller, request.value)
    return StateResponse(state=machine.snapshot())


@router.post("/admin/whitelist-sale", response_model=StateResponse)
def set_whitelist_sale(
    request: FlagRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> StateResponse:
    machine.set_whitelist_sale_active(request.caller, request.value)
    return StateResponse(state=machine.snapshot())


@router.post("/admin/paused", response_model=StateResponse)
def set_paused(
    request: FlagRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> StateResponse:
    machine.set_paused(request.caller, request.value)
    return StateResponse(state=machine.snapshot())


@router.post("/admin/revealed", response_model=StateResponse)
def set_revealed(
    request: FlagRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> StateResponse:
    machine.set_revealed(request.caller, request.value)
    return StateResponse(state=machine.snapshot())


@router.post("/admin/root", response_model=StateResponse)
def set_commitment_root(
    request: RootRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> StateResponse:
    try:
        machine.set_commitment_root(request.caller, request.root)
    except MintGateException:
        raise
    except ValueError as e:
        raise InvalidRequestError(f"Malformed commitment root: {e}")
    return StateResponse(state=machine.snapshot())


@router.post("/admin/base-uri", response_model=StateResponse)
def set_base_uri(
    request: UriRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> StateResponse:
    machine.set_base_uri(request.caller, request.uri)
    return StateResponse(state=machine.snapshot())


@router.post("/admin/placeholder-uri", response_model=StateResponse)
def set_placeholder_uri(
    request: UriRequest,
    machine: MintStateMachine = Depends(get_state_machine),
) -> StateResponse:
    machine.set_placeholder_uri(request.caller, request.uri)
    return StateResponse(state=machine.snapshot())
