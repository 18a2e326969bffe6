"""
Pytest configuration and shared fixtures for MintGate tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

OWNER = _common.OWNER
ACCOUNTS = _common.ACCOUNTS
make_sale = _common.make_sale
make_machine = _common.make_machine

from core.merkle import DEFAULT_ALLOWLIST, AllowListProver


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def owner():
    """The privileged account."""
    return OWNER


@pytest.fixture
def buyer():
    """A non-privileged account."""
    return ACCOUNTS[0]


@pytest.fixture
def sale():
    """Provide a default SaleConfiguration for tests."""
    return make_sale()


@pytest.fixture
def machine(sale):
    """A fresh state machine with in-memory collaborators, all flags off."""
    return make_machine(sale)


@pytest.fixture
def prover():
    """Prover over the six-address deployment allow-list."""
    return AllowListProver(DEFAULT_ALLOWLIST)


@pytest.fixture
def whitelist_machine(machine, prover):
    """A machine with the deployment allow-list root installed and the allow-list sale open."""
    machine.set_commitment_root(OWNER, prover.root)
    machine.set_whitelist_sale_active(OWNER, True)
    return machine


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
