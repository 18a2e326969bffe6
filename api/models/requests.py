"""
API Request Models

Pydantic models for API request validation.

Caller identity travels in the request body; the service trusts it the
way a chain trusts msg.sender, so it belongs behind an authenticating
gateway in any shared deployment.
"""

from pydantic import BaseModel, Field


class AllowListRequest(BaseModel):
    """Request body for POST /allowlist/root."""

    addresses: list[str] = Field(
        ...,
        min_length=1,
        description="Allow-listed account addresses (0x-prefixed)",
    )


class ProofRequest(BaseModel):
    """Request body for POST /allowlist/proof."""

    addresses: list[str] = Field(
        ...,
        min_length=1,
        description="Allow-listed account addresses the tree is built from",
    )
    address: str = Field(..., description="Member to prove")


class VerifyProofRequest(BaseModel):
    """Request body for POST /allowlist/verify."""

    root: str = Field(..., description="Commitment root (0x-prefixed, 32 bytes)")
    address: str = Field(..., description="Account the proof is checked for")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling hashes, bottom-up (0x-prefixed, 32 bytes each)",
    )


class CallerRequest(BaseModel):
    """Request body for operations that only need a caller."""

    caller: str = Field(..., description="Calling account")


class PublicMintRequest(CallerRequest):
    """Request body for POST /sale/mint/public."""

    quantity: int = Field(..., ge=1, description="Number of tokens to mint")
    payment: int = Field(..., ge=0, description="Amount sent with the mint (wei)")


class WhitelistMintRequest(PublicMintRequest):
    """Request body for POST /sale/mint/whitelist."""

    proof: list[str] = Field(
        default_factory=list,
        description="Caller's inclusion proof (0x-prefixed hashes, bottom-up)",
    )


class FlagRequest(CallerRequest):
    """Request body for the boolean admin setters."""

    value: bool = Field(..., description="New flag value")


class RootRequest(CallerRequest):
    """Request body for POST /sale/admin/root."""

    root: str = Field(..., description="New commitment root (0x-prefixed, 32 bytes)")


class UriRequest(CallerRequest):
    """Request body for the metadata URI setters."""

    uri: str = Field(..., description="New URI")
