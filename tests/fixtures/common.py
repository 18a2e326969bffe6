"""
Common test fixtures shared by all modules.

Provides well-known accounts and factory functions for:
- SaleConfiguration
- MintStateMachine (in-memory collaborators)
"""

from typing import Any

from core.mint import MintStateMachine
from core.schemas.sale import SaleConfiguration


OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# Hardhat default accounts #1-#9; none is the owner
ACCOUNTS = [
    "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
    "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC",
    "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
    "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65",
    "0x9965507D1a55bcC2695C58ba16FB37d819B0A4dc",
    "0x976EA74026E726554dB657fA54763abd0C3a0aa9",
    "0x14dC79964da2C08b23698B3D3cc7Ca32193d9955",
    "0x23618e81E3f5cdF7f54C3d65f7FBc0aBf5B21E8f",
    "0xa0Ee7A142d267C1f36714E4a8F75612F20a79720",
]

# Not on the deployment allow-list
OUTSIDER = ACCOUNTS[8]

PUBLIC_PRICE = 20_000_000_000_000_000  # 0.02 ether
WHITELIST_PRICE = 10_000_000_000_000_000  # 0.01 ether

BASE_URI = "ipfs://tokenUri/"
PLACEHOLDER_URI = "ipfs://placeholderTokenUri"


def make_sale(**overrides: Any) -> SaleConfiguration:
    """Build a SaleConfiguration with test defaults."""
    values: dict[str, Any] = dict(
        max_supply=100,
        max_public_per_wallet=10,
        max_whitelist_per_wallet=3,
        public_price=PUBLIC_PRICE,
        whitelist_price=WHITELIST_PRICE,
        team_mint_quantity=10,
    )
    values.update(overrides)
    return SaleConfiguration(**values)


def make_machine(sale: SaleConfiguration | None = None, **kwargs: Any) -> MintStateMachine:
    """Build a machine with in-memory collaborators and test URIs, all flags off."""
    kwargs.setdefault("base_uri", BASE_URI)
    kwargs.setdefault("placeholder_uri", PLACEHOLDER_URI)
    return MintStateMachine.create(sale or make_sale(), OWNER, **kwargs)
