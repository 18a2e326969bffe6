"""
Module 05 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    mintgate root [--allowlist PATH] [--members] [--json]
    mintgate proof <address> [--allowlist PATH] [--json]
    mintgate verify --root ROOT --address ADDRESS [--proof HASH ...] [--json]
    mintgate config (--init [--path PATH] | --show)

Environment Variables:
    MINTGATE_ALLOWLIST          Allow-list file used when --allowlist is omitted
    MINTGATE_LOG_LEVEL          Log level (default: INFO)
    MINTGATE_LOG_FILE           Also write logs to this file
    MINTGATE_OUTPUT_FORMAT      human or json (default: human)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from mintgate_cli import __version__
from mintgate_cli.commands import allowlist
from mintgate_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Send log records to stderr, and to log_file when one is configured."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_allowlist_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--allowlist", "-a",
        metavar="FILE",
        help="Allow-list file, a JSON array or one address per line "
             "(default: config allowlist_path, then the built-in list)",
    )


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Print a JSON summary")
    parser.add_argument("--debug", action="store_true", help="Print tracebacks on errors")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mintgate",
        description="Build allow-list commitment roots and produce or check inclusion proofs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file (default: first of ./mintgate.json, ./.mintgate.json, "
             "~/.config/mintgate/config.json)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    root_parser = subparsers.add_parser("root", help="Print the commitment root of an allow-list")
    _add_allowlist_arg(root_parser)
    root_parser.add_argument("--members", action="store_true", help="Also list the deduplicated members")
    _add_output_flags(root_parser)
    root_parser.set_defaults(func=allowlist.root_cmd)

    proof_parser = subparsers.add_parser(
        "proof", help="Print the inclusion proof a member submits with a whitelist mint",
    )
    proof_parser.add_argument("address", help="0x-prefixed address to prove")
    _add_allowlist_arg(proof_parser)
    _add_output_flags(proof_parser)
    proof_parser.set_defaults(func=allowlist.proof_cmd)

    verify_parser = subparsers.add_parser("verify", help="Check an inclusion proof against a root")
    verify_parser.add_argument("--root", "-r", required=True, help="Commitment root, 0x + 64 hex")
    verify_parser.add_argument("--address", required=True, help="Address being proven")
    verify_parser.add_argument(
        "--proof", "-p", nargs="*", default=[], metavar="HASH", help="Sibling hashes, leaf level first",
    )
    _add_output_flags(verify_parser)
    verify_parser.set_defaults(func=allowlist.verify_cmd)

    config_parser = subparsers.add_parser("config", help="Write a config template or show the loaded config")
    action = config_parser.add_mutually_exclusive_group(required=True)
    action.add_argument("--init", action="store_true", help="Write a template to --path")
    action.add_argument("--show", action="store_true", help="Print the effective configuration")
    config_parser.add_argument("--path", default="mintgate.json", help="Template destination (default: mintgate.json)")
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(asdict(args.cli_config), indent=2))
        return EXIT_SUCCESS

    config_path = Path(args.path)
    if config_path.exists():
        print(f"Error: {config_path} already exists", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    config_path.write_text(get_default_config_template())
    print(f"Wrote {config_path}. MINTGATE_* environment variables override its values.")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
