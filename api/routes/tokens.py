"""
Token Routes

Metadata URI lookup for issued tokens.
"""

from fastapi import APIRouter, Depends

from api.deps import get_state_machine
from api.models.responses import TokenUriResponse
from core.mint.state_machine import MintStateMachine


router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.get("/{token_id}/uri", response_model=TokenUriResponse)
def token_uri(
    token_id: int,
    machine: MintStateMachine = Depends(get_state_machine),
) -> TokenUriResponse:
    """
    Resolve a token's metadata URI.

    Placeholder until reveal; 404 UNKNOWN_TOKEN for ids never issued.
    """
    return TokenUriResponse(token_id=token_id, uri=machine.resolve_uri(token_id))
