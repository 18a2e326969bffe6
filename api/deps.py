"""
API Dependencies

Dependency injection for the API.
Provides the process-wide mint state machine, built from runtime config.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from core.config.runtime import RuntimeConfig
from core.merkle.merkle_proofs import AllowListProver
from core.mint.state_machine import MintStateMachine

logger = logging.getLogger(__name__)


_machine: Optional[MintStateMachine] = None
_machine_lock = threading.Lock()


def load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./mintgate.json, ./mintgate.yaml
      2. ./.mintgate.json
      3. ~/.config/mintgate/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "mintgate.json",
        Path.cwd() / "mintgate.yaml",
        Path.cwd() / ".mintgate.json",
        Path.home() / ".config" / "mintgate" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            config = RuntimeConfig.from_file(path)
            logger.info(f"Loaded config from {path}")
            break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def build_state_machine(config: RuntimeConfig) -> MintStateMachine:
    """
    Create a MintStateMachine for a configuration.

    The commitment root comes from config.commitment_root, or is computed
    from config.allowlist_path when only the list is given.
    """
    root = config.commitment_root
    if not root and config.allowlist_path:
        prover = AllowListProver.from_file(config.allowlist_path)
        root = prover.root_hex
        logger.info(f"Computed commitment root {root} from {config.allowlist_path}")

    return MintStateMachine.create(
        config.sale,
        owner=config.owner,
        commitment_root=root,
        base_uri=config.metadata.base_uri,
        placeholder_uri=config.metadata.placeholder_uri,
        uri_suffix=config.metadata.uri_suffix,
    )


def get_state_machine() -> MintStateMachine:
    """Return the shared state machine, creating it on first use."""
    global _machine
    with _machine_lock:
        if _machine is None:
            _machine = build_state_machine(load_runtime_config())
        return _machine


def set_state_machine(machine: MintStateMachine | None) -> None:
    """Replace (or with None, reset) the shared state machine."""
    global _machine
    with _machine_lock:
        _machine = machine
