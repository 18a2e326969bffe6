"""
Module 05 - MintGate CLI

Command-line interface for the allow-list commitment.

Usage:
    python -m mintgate_cli root --allowlist allowlist.txt
    python -m mintgate_cli proof 0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC
    python -m mintgate_cli verify --root 0x... --address 0x... --proof 0x... 0x...
    python -m mintgate_cli config --init
"""

__version__ = "0.1.0"
