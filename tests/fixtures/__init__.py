"""
Test fixtures package for MintGate tests.

This package provides factory functions and well-known accounts:
- common.py: accounts, prices and SaleConfiguration / machine factories

Usage:
    from fixtures.common import OWNER, ACCOUNTS, make_sale
"""
