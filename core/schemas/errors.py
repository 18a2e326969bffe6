"""
Module 02 - Schemas
File: errors.py

Purpose: Standard error taxonomy for the sale. Defines a Pydantic model
for structured error communication (API, CLI JSON output) and Python
exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input Errors
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_MINT_REQUEST = "INVALID_MINT_REQUEST"

    # Sale Gating Errors
    SALE_NOT_ACTIVE = "SALE_NOT_ACTIVE"
    SUPPLY_EXCEEDED = "SUPPLY_EXCEEDED"
    WALLET_QUOTA_EXCEEDED = "WALLET_QUOTA_EXCEEDED"
    INSUFFICIENT_PAYMENT = "INSUFFICIENT_PAYMENT"
    ALREADY_MINTED = "ALREADY_MINTED"

    # Allow-list & Commitment Errors
    NOT_WHITELISTED = "NOT_WHITELISTED"
    NOT_A_MEMBER = "NOT_A_MEMBER"

    # Authorization Errors
    UNAUTHORIZED = "UNAUTHORIZED"

    # Token & Funds Errors
    UNKNOWN_TOKEN = "UNKNOWN_TOKEN"
    TRANSFER_FAILED = "TRANSFER_FAILED"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MintGateError(BaseModel):
    """
    Error model for structured error communication.

    Used when an error has to cross a process boundary (HTTP responses,
    CLI JSON output) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.SALE_NOT_ACTIVE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MintGateException":
        """Convert this error model to a raisable exception."""
        return MintGateException(
            message=self.message,
            code=self.code,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MintGateException(Exception):
    """
    Base exception for all sale errors.

    Carries structured error information and can be converted to/from
    MintGateError models.
    """

    code_default = "MINTGATE_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code or self.code_default
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MintGateError:
        """Convert this exception to a MintGateError model."""
        return MintGateError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidIdentifierException(MintGateException, ValueError):
    """Raised when a value cannot be read as a participant address."""

    code_default = ErrorCodes.INVALID_IDENTIFIER

    def __init__(self, message: str, value: Any = None) -> None:
        details = {}
        if value is not None:
            details["value"] = repr(value)[:80]
        super().__init__(message=message, details=details)


class InvalidMintRequestException(MintGateException, ValueError):
    """Raised when a mint request carries a malformed quantity or payment."""

    code_default = ErrorCodes.INVALID_MINT_REQUEST

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, details=details)


class SaleNotActiveException(MintGateException):
    """Raised when the requested sale phase is closed."""

    code_default = ErrorCodes.SALE_NOT_ACTIVE

    def __init__(self, phase: str) -> None:
        super().__init__(
            message=f"The {phase} sale is not active",
            details={"phase": phase},
        )


class SupplyExceededException(MintGateException):
    """Raised when a mint would push the total issued past the supply ceiling."""

    code_default = ErrorCodes.SUPPLY_EXCEEDED

    def __init__(self, requested: int, total_issued: int, max_supply: int) -> None:
        super().__init__(
            message=(
                f"Minting {requested} would exceed max supply "
                f"({total_issued}/{max_supply} issued)"
            ),
            details={
                "requested": requested,
                "total_issued": total_issued,
                "max_supply": max_supply,
            },
        )


class WalletQuotaExceededException(MintGateException):
    """Raised when a mint would push a wallet past its per-phase quota."""

    code_default = ErrorCodes.WALLET_QUOTA_EXCEEDED

    def __init__(self, phase: str, requested: int, minted: int, quota: int) -> None:
        super().__init__(
            message=(
                f"Minting {requested} would exceed the {phase} wallet quota "
                f"({minted}/{quota} minted)"
            ),
            details={
                "phase": phase,
                "requested": requested,
                "minted": minted,
                "quota": quota,
            },
        )


class InsufficientPaymentException(MintGateException):
    """Raised when the payment does not cover price x quantity."""

    code_default = ErrorCodes.INSUFFICIENT_PAYMENT

    def __init__(self, required: int, received: int) -> None:
        super().__init__(
            message=f"Insufficient payment: required {required} wei, received {received} wei",
            details={"required": required, "received": received},
        )


class NotWhitelistedException(MintGateException):
    """Raised when the caller's inclusion proof does not match the installed root."""

    code_default = ErrorCodes.NOT_WHITELISTED

    def __init__(self, caller: str) -> None:
        super().__init__(
            message=f"Account {caller} is not on the allow-list",
            details={"caller": caller},
        )


class NotAMemberException(MintGateException):
    """Raised when a proof is requested for an identifier outside the tree."""

    code_default = ErrorCodes.NOT_A_MEMBER

    def __init__(self, identifier: str) -> None:
        super().__init__(
            message=f"Account {identifier} is not a member of this allow-list",
            details={"identifier": identifier},
        )


class AlreadyMintedException(MintGateException):
    """Raised when the one-shot team allocation has already been issued."""

    code_default = ErrorCodes.ALREADY_MINTED

    def __init__(self) -> None:
        super().__init__(message="Team allocation has already been minted")


class UnauthorizedException(MintGateException):
    """Raised when a non-privileged caller invokes a privileged operation."""

    code_default = ErrorCodes.UNAUTHORIZED

    def __init__(self, caller: str, operation: str) -> None:
        super().__init__(
            message=f"Caller {caller} is not authorized to {operation}",
            details={"caller": caller, "operation": operation},
        )


class UnknownTokenException(MintGateException):
    """Raised when a token id has never been issued."""

    code_default = ErrorCodes.UNKNOWN_TOKEN

    def __init__(self, token_id: int) -> None:
        super().__init__(
            message=f"Token {token_id} does not exist",
            details={"token_id": token_id},
        )


class TransferFailedException(MintGateException):
    """Raised when the payment channel rejects a transfer."""

    code_default = ErrorCodes.TRANSFER_FAILED

    def __init__(
        self,
        message: str,
        amount: int,
        destination: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"amount": amount}
        if destination:
            details["destination"] = destination
        super().__init__(message=message, details=details)

