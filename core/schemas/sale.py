"""
Module 02 - Schemas
File: sale.py

Purpose: Sale configuration and the records returned by sale operations.
SaleConfiguration is fixed at start-up; receipts and snapshots are
read-only views produced by the mint state machine.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


MintOperation = Literal["public", "whitelist", "team"]


class SaleConfiguration(BaseModel):
    """
    Immutable numeric constants of a sale.

    Prices are integer wei.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_supply: int = Field(
        ...,
        ge=0,
        description="Hard ceiling on the number of tokens issued",
    )
    max_public_per_wallet: int = Field(
        ...,
        ge=0,
        description="Maximum tokens one account may mint in the public sale",
    )
    max_whitelist_per_wallet: int = Field(
        ...,
        ge=0,
        description="Maximum tokens one account may mint in the allow-list sale",
    )
    public_price: int = Field(
        ...,
        ge=0,
        description="Price per token in the public sale (wei)",
    )
    whitelist_price: int = Field(
        ...,
        ge=0,
        description="Price per token in the allow-list sale (wei)",
    )
    team_mint_quantity: int = Field(
        default=10,
        ge=1,
        description="Tokens issued by the one-shot team mint",
    )
    enforce_supply_on_team_mint: bool = Field(
        default=False,
        description="Reject a team mint that would overrun max_supply. "
        "Off by default: the team allocation is issued on top of the ceiling.",
    )

    @model_validator(mode="after")
    def validate_quotas(self) -> "SaleConfiguration":
        """Per-wallet quotas above the supply ceiling can never be reached."""
        for name in ("max_public_per_wallet", "max_whitelist_per_wallet"):
            if getattr(self, name) > self.max_supply:
                raise ValueError(f"{name} must not exceed max_supply")
        return self


class MintReceipt(BaseModel):
    """Record of one accepted mint."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    operation: MintOperation = Field(..., description="Which mint path issued the tokens")
    caller: str = Field(..., description="Checksum address that received the tokens")
    quantity: int = Field(..., ge=1)
    first_token_id: int = Field(..., ge=0)
    last_token_id: int = Field(..., ge=0)
    amount_paid: int = Field(default=0, ge=0, description="Payment retained (wei)")
    amount_required: int = Field(default=0, ge=0, description="price x quantity (wei)")
    excess_payment: int = Field(
        default=0,
        ge=0,
        description="Amount paid above the required price. Retained, not refunded.",
    )
    total_issued: int = Field(..., ge=0, description="Total issued after this mint")

    @property
    def token_ids(self) -> list[int]:
        return list(range(self.first_token_id, self.last_token_id + 1))


class WithdrawalReceipt(BaseModel):
    """Record of one accepted withdrawal."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    destination: str = Field(..., description="Checksum address that received the funds")
    amount: int = Field(..., ge=0, description="Amount transferred (wei)")


class MintStateSnapshot(BaseModel):
    """Point-in-time view of the sale state."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_issued: int
    max_supply: int
    public_sale_active: bool
    whitelist_sale_active: bool
    paused: bool
    revealed: bool
    team_minted: bool
    commitment_root: str | None = Field(
        default=None,
        description="Installed allow-list root (0x-prefixed), None if unset",
    )
    accumulated_funds: int
    base_uri: str
    placeholder_uri: str
    owner: str

    @property
    def remaining_supply(self) -> int:
        return max(self.max_supply - self.total_issued, 0)


__all__ = [
    "MintOperation",
    "SaleConfiguration",
    "MintReceipt",
    "WithdrawalReceipt",
    "MintStateSnapshot",
]
