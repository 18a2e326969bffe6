"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.sale import MintReceipt, MintStateSnapshot, WithdrawalReceipt


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "mintgate-api"
    version: str = "0.1.0"


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready."""

    ok: bool = True
    commitment_root_installed: bool
    total_issued: int


class RootResponse(BaseModel):
    """Response for POST /allowlist/root."""

    ok: bool = True
    root: str = Field(..., description="Commitment root (0x-prefixed)")
    leaf_count: int = Field(..., description="Distinct members committed")
    depth: int = Field(..., description="Number of tree layers")


class ProofResponse(BaseModel):
    """Response for POST /allowlist/proof."""

    ok: bool = True
    root: str
    address: str = Field(..., description="Member, checksum form")
    leaf: str = Field(..., description="Member's leaf hash")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, bottom-up")


class VerifyProofResponse(BaseModel):
    """Response for POST /allowlist/verify."""

    ok: bool = True
    valid: bool


class MintResponse(BaseModel):
    """Response for the mint endpoints."""

    ok: bool = True
    receipt: MintReceipt


class WithdrawResponse(BaseModel):
    """Response for POST /sale/withdraw."""

    ok: bool = True
    receipt: WithdrawalReceipt


class StateResponse(BaseModel):
    """Response for GET /sale/state and the admin setters."""

    ok: bool = True
    state: MintStateSnapshot


class CommitmentRootResponse(BaseModel):
    """Response for GET /sale/root."""

    ok: bool = True
    root: str | None = Field(default=None, description="Installed root, None if unset")


class TokenUriResponse(BaseModel):
    """Response for GET /tokens/{token_id}/uri."""

    ok: bool = True
    token_id: int
    uri: str


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
