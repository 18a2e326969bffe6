"""
Module 04 - Sale Collaborators

Interfaces the mint state machine consumes, with in-memory implementations:
- TokenLedger: token issuance and ownership
- AuthorizationRole: the privileged single-owner role
- PaymentChannel: accepting payments and paying out funds

The state machine only ever calls these while holding its own lock, so
the in-memory implementations need no locking of their own.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Protocol, runtime_checkable

from core.schemas.errors import UnauthorizedException, UnknownTokenException
from core.schemas.identifiers import (
    IdentifierLike,
    display_identifier,
    normalize_identifier,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Token Ledger
# =============================================================================

@runtime_checkable
class TokenLedger(Protocol):
    """Protocol for the token ownership ledger."""

    def issue(self, owner: bytes, quantity: int) -> range:
        """Issue quantity new tokens to owner and return their id range."""
        ...

    def owner_of(self, token_id: int) -> bytes:
        ...

    def balance_of(self, owner: bytes) -> int:
        ...

    def exists(self, token_id: int) -> bool:
        ...

    def total_supply(self) -> int:
        ...


class InMemoryTokenLedger:
    """
    Sequential-id ledger.

    Token ids start at 0 and increase by one per issued token; ids are
    never reused.
    """

    def __init__(self) -> None:
        self._owners: list[bytes] = []
        self._balances: dict[bytes, int] = defaultdict(int)

    def issue(self, owner: bytes, quantity: int) -> range:
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")
        owner = normalize_identifier(owner)
        start = len(self._owners)
        self._owners.extend([owner] * quantity)
        self._balances[owner] += quantity
        return range(start, start + quantity)

    def owner_of(self, token_id: int) -> bytes:
        if not self.exists(token_id):
            raise UnknownTokenException(token_id)
        return self._owners[token_id]

    def balance_of(self, owner: IdentifierLike) -> int:
        return self._balances.get(normalize_identifier(owner), 0)

    def exists(self, token_id: int) -> bool:
        return isinstance(token_id, int) and 0 <= token_id < len(self._owners)

    def total_supply(self) -> int:
        return len(self._owners)

    def tokens_of(self, owner: IdentifierLike) -> list[int]:
        owner = normalize_identifier(owner)
        return [i for i, o in enumerate(self._owners) if o == owner]


# =============================================================================
# Authorization Role
# =============================================================================

@runtime_checkable
class AuthorizationRole(Protocol):
    """Protocol for the privileged role check."""

    @property
    def holder(self) -> bytes:
        """Current holder; also the payout destination for withdrawals."""
        ...

    def is_privileged(self, caller: bytes) -> bool:
        ...


class SingleOwnerRole:
    """One owner, transferable only by the current owner."""

    def __init__(self, owner: IdentifierLike) -> None:
        self._owner = normalize_identifier(owner)

    @property
    def holder(self) -> bytes:
        return self._owner

    def is_privileged(self, caller: IdentifierLike) -> bool:
        return normalize_identifier(caller) == self._owner

    def transfer_ownership(self, caller: IdentifierLike, new_owner: IdentifierLike) -> None:
        """
        Hand the role to new_owner.

        Raises:
            UnauthorizedException: If caller is not the current owner
        """
        if not self.is_privileged(caller):
            raise UnauthorizedException(display_identifier(caller), "transfer ownership")
        previous = self._owner
        self._owner = normalize_identifier(new_owner)
        logger.info(
            f"Ownership transferred from {display_identifier(previous)} "
            f"to {display_identifier(self._owner)}"
        )


# =============================================================================
# Payment Channel
# =============================================================================

@runtime_checkable
class PaymentChannel(Protocol):
    """Protocol for the payment rail."""

    def accept(self, payer: bytes, amount: int) -> bool:
        """Take amount from payer. Returns False if the payment is rejected."""
        ...

    def transfer_out(self, destination: bytes, amount: int) -> bool:
        """Send amount to destination. Returns False if the transfer is rejected."""
        ...


class InMemoryPaymentChannel:
    """
    Payment rail that records every movement.

    Set reject_transfers (or reject_payments) to simulate a rail that
    refuses the next operations.
    """

    def __init__(self) -> None:
        self.received: dict[bytes, int] = defaultdict(int)
        self.paid_out: dict[bytes, int] = defaultdict(int)
        self.reject_transfers = False
        self.reject_payments = False

    def accept(self, payer: bytes, amount: int) -> bool:
        if self.reject_payments:
            return False
        self.received[normalize_identifier(payer)] += amount
        return True

    def transfer_out(self, destination: bytes, amount: int) -> bool:
        if self.reject_transfers:
            return False
        self.paid_out[normalize_identifier(destination)] += amount
        return True

    @property
    def total_received(self) -> int:
        return sum(self.received.values())

    @property
    def total_paid_out(self) -> int:
        return sum(self.paid_out.values())


__all__ = [
    "TokenLedger",
    "InMemoryTokenLedger",
    "AuthorizationRole",
    "SingleOwnerRole",
    "PaymentChannel",
    "InMemoryPaymentChannel",
]
