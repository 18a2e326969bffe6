"""
Module 02 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    AlreadyMintedException,
    ErrorCodes,
    InsufficientPaymentException,
    InvalidIdentifierException,
    InvalidMintRequestException,
    MintGateError,
    MintGateException,
    NotAMemberException,
    NotWhitelistedException,
    SaleNotActiveException,
    SupplyExceededException,
    TransferFailedException,
    UnauthorizedException,
    UnknownTokenException,
    WalletQuotaExceededException,
)

# Identifiers
from .identifiers import (
    IDENTIFIER_SIZE,
    IdentifierLike,
    display_identifier,
    is_identifier,
    normalize_identifier,
)

# Sale schemas
from .sale import (
    MintOperation,
    MintReceipt,
    MintStateSnapshot,
    SaleConfiguration,
    WithdrawalReceipt,
)

__all__ = [
    # Errors
    "AlreadyMintedException",
    "ErrorCodes",
    "InsufficientPaymentException",
    "InvalidIdentifierException",
    "InvalidMintRequestException",
    "MintGateError",
    "MintGateException",
    "NotAMemberException",
    "NotWhitelistedException",
    "SaleNotActiveException",
    "SupplyExceededException",
    "TransferFailedException",
    "UnauthorizedException",
    "UnknownTokenException",
    "WalletQuotaExceededException",
    # Identifiers
    "IDENTIFIER_SIZE",
    "IdentifierLike",
    "display_identifier",
    "is_identifier",
    "normalize_identifier",
    # Sale
    "MintOperation",
    "MintReceipt",
    "MintStateSnapshot",
    "SaleConfiguration",
    "WithdrawalReceipt",
]
