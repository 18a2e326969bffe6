"""
Runtime Configuration

Central configuration for a sale deployment: sale constants, metadata
URIs, the owner account and the allow-list commitment.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from eth_utils import to_wei

from core.schemas.sale import SaleConfiguration

load_dotenv()


ENV_PREFIX = "MINTGATE_"

# Hardhat's first default account
DEFAULT_OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


def parse_price(value: Any) -> int:
    """
    Parse a price into wei.

    Integers are taken as wei. Strings and floats are taken as ether
    ("0.02" -> 20000000000000000), unless the string carries an explicit
    unit ("150 gwei", "20000 wei").

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid price: {value!r}")
    if isinstance(value, int):
        return value

    text = str(value).strip()
    unit = "ether"
    parts = text.split()
    if len(parts) == 2:
        text, unit = parts[0], parts[1].lower()
    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Invalid price: {value!r}") from e
    return int(to_wei(amount, unit))


def default_sale() -> SaleConfiguration:
    return SaleConfiguration(
        max_supply=1000,
        max_public_per_wallet=5,
        max_whitelist_per_wallet=3,
        public_price=parse_price("0.02"),
        whitelist_price=parse_price("0.01"),
        team_mint_quantity=10,
    )


def _sale_from_dict(data: dict[str, Any], base: SaleConfiguration | None = None) -> SaleConfiguration:
    values = (base or default_sale()).model_dump()
    for key, value in data.items():
        if key in ("public_price", "whitelist_price"):
            value = parse_price(value)
        values[key] = value
    return SaleConfiguration(**values)


@dataclass
class MetadataConfig:
    """Token metadata URIs."""
    base_uri: str = ""
    placeholder_uri: str = ""
    uri_suffix: str = ".json"


@dataclass
class ServerConfig:
    """Configuration for the HTTP API."""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for a sale.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    sale: SaleConfiguration = field(default_factory=default_sale)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    owner: str = DEFAULT_OWNER
    commitment_root: Optional[str] = None
    allowlist_path: Optional[str] = None
    log_level: str = "INFO"

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - MINTGATE_OWNER: Owner (privileged) account
        - MINTGATE_COMMITMENT_ROOT: Allow-list root (0x-prefixed)
        - MINTGATE_ALLOWLIST: Path to the allow-list file
        - MINTGATE_BASE_URI / MINTGATE_PLACEHOLDER_URI: Metadata URIs
        - MINTGATE_MAX_SUPPLY, MINTGATE_MAX_PUBLIC_PER_WALLET,
          MINTGATE_MAX_WHITELIST_PER_WALLET, MINTGATE_TEAM_MINT_QUANTITY
        - MINTGATE_PUBLIC_PRICE / MINTGATE_WHITELIST_PRICE: Prices (ether unless a unit is given)
        - MINTGATE_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        for key in (
            "max_supply",
            "max_public_per_wallet",
            "max_whitelist_per_wallet",
            "team_mint_quantity",
        ):
            raw = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if raw:
                overrides.setdefault("sale", {})[key] = int(raw)
        for key in ("public_price", "whitelist_price"):
            raw = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if raw:
                overrides.setdefault("sale", {})[key] = raw

        if os.getenv(f"{ENV_PREFIX}BASE_URI"):
            overrides.setdefault("metadata", {})["base_uri"] = os.getenv(f"{ENV_PREFIX}BASE_URI")
        if os.getenv(f"{ENV_PREFIX}PLACEHOLDER_URI"):
            overrides.setdefault("metadata", {})["placeholder_uri"] = os.getenv(
                f"{ENV_PREFIX}PLACEHOLDER_URI"
            )

        if os.getenv(f"{ENV_PREFIX}OWNER"):
            overrides["owner"] = os.getenv(f"{ENV_PREFIX}OWNER")
        if os.getenv(f"{ENV_PREFIX}COMMITMENT_ROOT"):
            overrides["commitment_root"] = os.getenv(f"{ENV_PREFIX}COMMITMENT_ROOT")
        if os.getenv(f"{ENV_PREFIX}ALLOWLIST"):
            overrides["allowlist_path"] = os.getenv(f"{ENV_PREFIX}ALLOWLIST")
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON or YAML file, chosen by extension."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        sale_data = data.get("sale", {})
        metadata_data = data.get("metadata", {})
        server_data = data.get("server", {})

        sale = _sale_from_dict(sale_data) if sale_data else default_sale()
        metadata = MetadataConfig(**metadata_data) if metadata_data else MetadataConfig()
        server = ServerConfig(**server_data) if server_data else ServerConfig()

        return cls(
            sale=sale,
            metadata=metadata,
            server=server,
            owner=data.get("owner") or DEFAULT_OWNER,
            commitment_root=data.get("commitment_root"),
            allowlist_path=data.get("allowlist_path"),
            log_level=data.get("log_level", "INFO"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "sale" in overrides:
            new_config.sale = _sale_from_dict(overrides["sale"], base=self.sale)

        if "metadata" in overrides:
            for key, value in overrides["metadata"].items():
                setattr(new_config.metadata, key, value)

        for key in ("owner", "commitment_root", "allowlist_path", "log_level"):
            if key in overrides:
                setattr(new_config, key, overrides[key])

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "sale": self.sale.model_dump(),
            "metadata": {
                "base_uri": self.metadata.base_uri,
                "placeholder_uri": self.metadata.placeholder_uri,
                "uri_suffix": self.metadata.uri_suffix,
            },
            "server": {
                "host": self.server.host,
                "port": self.server.port,
            },
            "owner": self.owner,
            "commitment_root": self.commitment_root,
            "allowlist_path": self.allowlist_path,
            "log_level": self.log_level,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
