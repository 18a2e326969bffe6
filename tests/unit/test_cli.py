"""
Module 05 - CLI Tests
Tests for mintgate_cli

Tests:
- root / proof / verify commands, human and JSON output
- Exit codes: 0 success, 1 runtime error, 2 verification failed
- Allow-list resolution: flag, config, built-in list
- config --init / --show
"""
import json

import pytest

from core.merkle import DEFAULT_ALLOWLIST, AllowListProver
from mintgate_cli.config import CLIConfig, load_config
from mintgate_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    main,
)

from fixtures.common import ACCOUNTS, OUTSIDER


MEMBER = DEFAULT_ALLOWLIST[2]


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every CLI test in an empty directory with no MINTGATE_* env."""
    monkeypatch.chdir(tmp_path)
    for var in ("MINTGATE_ALLOWLIST", "MINTGATE_LOG_LEVEL", "MINTGATE_LOG_FILE", "MINTGATE_OUTPUT_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def allowlist_file(tmp_path):
    path = tmp_path / "allowlist.txt"
    path.write_text("\n".join(ACCOUNTS[:5]) + "\n")
    return path


class TestRootCommand:
    """Tests for `mintgate root`."""

    def test_builtin_list(self, capsys):
        exit_code = main(["root", "--json"])

        assert exit_code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["root"] == AllowListProver(DEFAULT_ALLOWLIST).root_hex
        assert data["leaf_count"] == 6
        assert data["source"] == "(built-in)"

    def test_file(self, allowlist_file, capsys):
        exit_code = main(["root", "--allowlist", str(allowlist_file), "--json", "--members"])

        assert exit_code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["root"] == AllowListProver(ACCOUNTS[:5]).root_hex
        assert len(data["members"]) == 5

    def test_human_output(self, allowlist_file, capsys):
        exit_code = main(["root", "-a", str(allowlist_file)])

        assert exit_code == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert f"root: {AllowListProver(ACCOUNTS[:5]).root_hex}" in out
        assert "leaves: 5" in out

    def test_missing_file(self, tmp_path, capsys):
        exit_code = main(["root", "-a", str(tmp_path / "missing.txt")])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "Error loading allow-list" in capsys.readouterr().err

    def test_allowlist_from_env(self, allowlist_file, monkeypatch, capsys):
        monkeypatch.setenv("MINTGATE_ALLOWLIST", str(allowlist_file))

        exit_code = main(["root", "--json"])

        assert exit_code == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["source"] == str(allowlist_file)


class TestProofCommand:
    """Tests for `mintgate proof`."""

    def test_member(self, capsys):
        exit_code = main(["proof", MEMBER, "--json"])

        assert exit_code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["member"] is True
        assert data["proof"] == AllowListProver(DEFAULT_ALLOWLIST).proof_hex(MEMBER)

    def test_non_member(self, capsys):
        exit_code = main(["proof", OUTSIDER])

        assert exit_code == EXIT_VERIFICATION_FAILED
        assert "not a member" in capsys.readouterr().out

    def test_invalid_address(self, capsys):
        exit_code = main(["proof", "0xabc"])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "Error" in capsys.readouterr().err


class TestVerifyCommand:
    """Tests for `mintgate verify`."""

    def test_valid(self, capsys):
        prover = AllowListProver(DEFAULT_ALLOWLIST)
        proof = prover.proof_hex(MEMBER)

        exit_code = main(["verify", "--root", prover.root_hex, "--address", MEMBER, "--proof", *proof])

        assert exit_code == EXIT_SUCCESS
        assert "✓ valid" in capsys.readouterr().out

    def test_wrong_address(self, capsys):
        prover = AllowListProver(DEFAULT_ALLOWLIST)
        proof = prover.proof_hex(MEMBER)

        exit_code = main([
            "verify", "--root", prover.root_hex, "--address", DEFAULT_ALLOWLIST[4],
            "--proof", *proof, "--json",
        ])

        assert exit_code == EXIT_VERIFICATION_FAILED
        assert json.loads(capsys.readouterr().out)["valid"] is False

    def test_malformed_root(self, capsys):
        exit_code = main(["verify", "--root", "0x1234", "--address", MEMBER])

        assert exit_code == EXIT_VERIFICATION_FAILED


class TestConfigCommand:
    """Tests for `mintgate config` and config loading."""

    def test_init_creates_file(self, isolated_cwd, capsys):
        path = isolated_cwd / "mintgate.json"

        exit_code = main(["config", "--init", "--path", str(path)])

        assert exit_code == EXIT_SUCCESS
        data = json.loads(path.read_text())
        assert data["log_level"] == "INFO"
        assert data["sale"]["max_supply"] == 1000

    def test_init_refuses_overwrite(self, isolated_cwd, capsys):
        path = isolated_cwd / "mintgate.json"
        path.write_text("{}")

        exit_code = main(["config", "--init", "--path", str(path)])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert path.read_text() == "{}"

    def test_show(self, isolated_cwd, capsys):
        config_path = isolated_cwd / "cli.json"
        config_path.write_text(json.dumps({"allowlist_path": "list.txt", "default_output_format": "json"}))

        exit_code = main(["--config", str(config_path), "config", "--show"])

        assert exit_code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["allowlist_path"] == "list.txt"
        assert data["default_output_format"] == "json"

    def test_env_overrides_file(self, isolated_cwd, monkeypatch):
        config_path = isolated_cwd / "cli.json"
        config_path.write_text(json.dumps({"log_level": "WARNING"}))
        monkeypatch.setenv("MINTGATE_LOG_LEVEL", "DEBUG")

        config = load_config(config_path)

        assert config.log_level == "DEBUG"

    def test_defaults(self):
        assert load_config() == CLIConfig()

    def test_json_output_from_config(self, isolated_cwd, capsys):
        (isolated_cwd / "mintgate.json").write_text(json.dumps({"default_output_format": "json"}))

        exit_code = main(["root"])

        assert exit_code == EXIT_SUCCESS
        assert "root" in json.loads(capsys.readouterr().out)

    def test_template_loads_back(self, isolated_cwd):
        path = isolated_cwd / "mintgate.json"
        main(["config", "--init", "--path", str(path)])

        config = load_config(path)

        assert config.allowlist_path == "allowlist.txt"
        assert config.default_output_format == "human"


class TestMain:
    """Tests for main() dispatch."""

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
