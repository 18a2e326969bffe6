"""API route handlers."""

from api.routes import allowlist, health, sale, tokens

__all__ = ["allowlist", "health", "sale", "tokens"]
