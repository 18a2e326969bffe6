"""
Module 06 - Runtime Configuration Tests
Tests for core/config/runtime.py

Tests:
- parse_price units
- from_dict partial data and validation
- YAML / JSON files
- Environment overrides
"""
import json

import pytest
from pydantic import ValidationError

from core.config import (
    DEFAULT_OWNER,
    RuntimeConfig,
    get_default_config,
    parse_price,
    set_default_config,
)


class TestParsePrice:
    """Tests for parse_price()."""

    def test_int_is_wei(self):
        assert parse_price(12345) == 12345

    def test_string_is_ether(self):
        assert parse_price("0.02") == 20_000_000_000_000_000

    def test_float_is_ether(self):
        assert parse_price(1.5) == 1_500_000_000_000_000_000

    def test_explicit_unit(self):
        assert parse_price("150 gwei") == 150_000_000_000
        assert parse_price("20000 wei") == 20000

    @pytest.mark.parametrize("value", ["abc", True, "1 2 3"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_price(value)


class TestFromDict:
    """Tests for RuntimeConfig.from_dict()."""

    def test_defaults(self):
        config = RuntimeConfig.from_dict({})

        assert config.sale.max_supply == 1000
        assert config.sale.public_price == parse_price("0.02")
        assert config.sale.whitelist_price == parse_price("0.01")
        assert config.sale.team_mint_quantity == 10
        assert config.owner == DEFAULT_OWNER
        assert config.commitment_root is None
        assert config.metadata.uri_suffix == ".json"

    def test_partial_sale(self):
        config = RuntimeConfig.from_dict({"sale": {"max_supply": 50, "public_price": "0.1"}})

        assert config.sale.max_supply == 50
        assert config.sale.public_price == parse_price("0.1")
        assert config.sale.max_public_per_wallet == 5

    def test_quota_above_supply_rejected(self):
        with pytest.raises(ValidationError):
            RuntimeConfig.from_dict({"sale": {"max_supply": 2}})

    def test_unknown_sale_key_rejected(self):
        with pytest.raises(ValidationError):
            RuntimeConfig.from_dict({"sale": {"max_suply": 10}})

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({
            "sale": {"max_supply": 500},
            "metadata": {"base_uri": "ipfs://x/", "placeholder_uri": "ipfs://p"},
            "commitment_root": "0x" + "ab" * 32,
        })

        again = RuntimeConfig.from_dict(config.to_dict())

        assert again.to_dict() == config.to_dict()


class TestFromFile:
    """Tests for YAML and JSON loading."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "mintgate.yaml"
        path.write_text(
            "sale:\n"
            "  max_supply: 200\n"
            "  whitelist_price: '5 gwei'\n"
            "metadata:\n"
            "  base_uri: ipfs://tokens/\n"
            "server:\n"
            "  port: 9000\n"
        )

        config = RuntimeConfig.from_file(path)

        assert config.sale.max_supply == 200
        assert config.sale.whitelist_price == 5_000_000_000
        assert config.metadata.base_uri == "ipfs://tokens/"
        assert config.server.port == 9000

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "mintgate.yml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path).sale.max_supply == 1000

    def test_json(self, tmp_path):
        path = tmp_path / "mintgate.json"
        path.write_text(json.dumps({"owner": "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"}))

        config = RuntimeConfig.from_file(path)

        assert config.owner == "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_file(tmp_path / "nope.json")
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_file(tmp_path / "nope.yaml")


class TestEnvOverrides:
    """Tests for environment variable handling."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MINTGATE_MAX_SUPPLY", "300")
        monkeypatch.setenv("MINTGATE_PUBLIC_PRICE", "0.05")
        monkeypatch.setenv("MINTGATE_BASE_URI", "ipfs://env/")

        config = RuntimeConfig.from_env()

        assert config.sale.max_supply == 300
        assert config.sale.public_price == parse_price("0.05")
        assert config.metadata.base_uri == "ipfs://env/"

    def test_env_overrides_file_values(self, monkeypatch):
        base = RuntimeConfig.from_dict({"sale": {"max_supply": 200}, "log_level": "INFO"})
        monkeypatch.setenv("MINTGATE_MAX_PUBLIC_PER_WALLET", "7")
        monkeypatch.setenv("MINTGATE_LOG_LEVEL", "DEBUG")

        config = base.with_env_overrides()

        assert config.sale.max_supply == 200
        assert config.sale.max_public_per_wallet == 7
        assert config.log_level == "DEBUG"
        # Original untouched
        assert base.sale.max_public_per_wallet == 5
        assert base.log_level == "INFO"

    def test_default_config_cached(self):
        set_default_config(None)
        try:
            first = get_default_config()
            assert get_default_config() is first
        finally:
            set_default_config(None)
