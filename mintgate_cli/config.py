"""
CLI Configuration

Settings for the MintGate CLI, read from a JSON file and MINTGATE_*
environment variables. Environment variables win over the file.

Search order when --config is not given:
1. ./mintgate.json
2. ./.mintgate.json
3. ~/.config/mintgate/config.json
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path

from core.config.runtime import ENV_PREFIX


# CLIConfig field -> environment variable suffix
ENV_VARS = {
    "allowlist_path": "ALLOWLIST",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "default_output_format": "OUTPUT_FORMAT",
}


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Allow-list used when a command gets no --allowlist
    allowlist_path: str | None = None

    log_level: str = "INFO"
    log_file: str | None = None

    default_output_format: str = "human"  # "human" or "json"


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "mintgate.json",
        Path.cwd() / ".mintgate.json",
        Path.home() / ".config" / "mintgate" / "config.json",
    ]


def load_config_from_file(path: Path) -> CLIConfig:
    """
    Read a JSON config file.

    Keys that are not CLIConfig fields are ignored, so the same file can
    carry the sale and metadata sections used by the service.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = json.loads(path.read_text())
    known = {f.name for f in fields(CLIConfig)}
    return CLIConfig(**{key: value for key, value in data.items() if key in known})


def apply_env_overrides(config: CLIConfig) -> CLIConfig:
    """Overwrite fields whose MINTGATE_* variable is set and non-empty."""
    for name, suffix in ENV_VARS.items():
        value = os.getenv(f"{ENV_PREFIX}{suffix}")
        if value:
            setattr(config, name, value)
    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Explicit config file. When None the default paths
            are searched and the first existing one is used.

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        if config_path.exists():
            config = load_config_from_file(config_path)
    else:
        existing = next((p for p in default_config_paths() if p.exists()), None)
        if existing is not None:
            config = load_config_from_file(existing)

    return apply_env_overrides(config)


def get_default_config_template() -> str:
    """Config file written by `mintgate config --init`."""
    template = {
        "allowlist_path": "allowlist.txt",
        "log_level": "INFO",
        "log_file": None,
        "default_output_format": "human",
        "owner": "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
        "commitment_root": None,
        "sale": {
            "max_supply": 1000,
            "max_public_per_wallet": 5,
            "max_whitelist_per_wallet": 3,
            "public_price": "0.02",
            "whitelist_price": "0.01",
            "team_mint_quantity": 10,
            "enforce_supply_on_team_mint": False,
        },
        "metadata": {
            "base_uri": "ipfs://tokenUri/",
            "placeholder_uri": "ipfs://placeholderTokenUri",
            "uri_suffix": ".json",
        },
    }
    return json.dumps(template, indent=2) + "\n"
