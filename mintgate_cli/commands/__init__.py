"""
CLI command modules.
"""

from mintgate_cli.commands import allowlist

__all__ = ["allowlist"]
