"""
Module 04 - Mint State Machine

Gated, atomic sale operations over shared issuance state, and the
collaborator interfaces they consume.

Usage:
    from core.mint import MintStateMachine
    from core.schemas import SaleConfiguration

    machine = MintStateMachine.create(sale, owner=OWNER)
    machine.set_commitment_root(OWNER, prover.root)
    machine.set_whitelist_sale_active(OWNER, True)
    machine.whitelist_mint(buyer, 1, sale.whitelist_price, proof)
"""
from .collaborators import (
    AuthorizationRole,
    InMemoryPaymentChannel,
    InMemoryTokenLedger,
    PaymentChannel,
    SingleOwnerRole,
    TokenLedger,
)
from .state_machine import (
    MintState,
    MintStateMachine,
    ProofLike,
)

__all__ = [
    # Collaborators
    "AuthorizationRole",
    "InMemoryPaymentChannel",
    "InMemoryTokenLedger",
    "PaymentChannel",
    "SingleOwnerRole",
    "TokenLedger",
    # State machine
    "MintState",
    "MintStateMachine",
    "ProofLike",
]
