"""
Minimal API (FastAPI)

HTTP API for a MintGate sale:
- /allowlist/* - Proof service (root, proof, verify)
- /sale/* - Mints, withdrawal, admin setters, state
- /tokens/{token_id}/uri - Metadata URIs
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
