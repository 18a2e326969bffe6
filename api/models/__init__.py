"""API request and response models."""

from api.models.requests import (
    AllowListRequest,
    CallerRequest,
    FlagRequest,
    ProofRequest,
    PublicMintRequest,
    RootRequest,
    UriRequest,
    VerifyProofRequest,
    WhitelistMintRequest,
)
from api.models.responses import (
    CommitmentRootResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    MintResponse,
    ProofResponse,
    ReadinessResponse,
    RootResponse,
    StateResponse,
    TokenUriResponse,
    VerifyProofResponse,
    WithdrawResponse,
)

__all__ = [
    "AllowListRequest",
    "CallerRequest",
    "FlagRequest",
    "ProofRequest",
    "PublicMintRequest",
    "RootRequest",
    "UriRequest",
    "VerifyProofRequest",
    "WhitelistMintRequest",
    "CommitmentRootResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "MintResponse",
    "ProofResponse",
    "ReadinessResponse",
    "RootResponse",
    "StateResponse",
    "TokenUriResponse",
    "VerifyProofResponse",
    "WithdrawResponse",
]
