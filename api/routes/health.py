"""
Health Check Routes

Liveness (GET /health, GET /) and readiness (GET /health/ready) probes.
"""

from fastapi import APIRouter, Depends

from api import __version__
from api.deps import get_state_machine
from api.models.responses import HealthResponse, ReadinessResponse
from core.mint.state_machine import MintStateMachine


router = APIRouter(tags=["health"])


def _health() -> HealthResponse:
    return HealthResponse(ok=True, service="mintgate-api", version=__version__)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return _health()


@router.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    return _health()


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness(machine: MintStateMachine = Depends(get_state_machine)) -> ReadinessResponse:
    """
    Readiness probe.

    Builds the sale on first call; reports whether an allow-list root is
    installed, since whitelist mints are rejected until one is.
    """
    return ReadinessResponse(
        ok=True,
        commitment_root_installed=machine.get_commitment_root() is not None,
        total_issued=machine.total_issued,
    )
