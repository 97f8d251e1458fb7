"""CLI entry point: python -m gamerelay [config.yaml]"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.logging import RichHandler

from gamerelay.config import load_config, validate_config
from gamerelay.core.errors import ConfigError
from gamerelay.server import RelayServer


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="gamerelay",
        description="Relay and referee for two-player games over WebSockets",
    )
    parser.add_argument(
        "config",
        type=Path,
        nargs="?",
        default=None,
        help="Path to server YAML config file (optional)",
    )
    parser.add_argument("--host", default=None, help="Interface to bind")
    parser.add_argument("-p", "--port", type=int, default=None, help="Port to listen on")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    args = parser.parse_args()

    load_dotenv()

    if args.config is not None and not args.config.exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    try:
        config = load_config(args.config)
        if args.host:
            config.host = args.host
        if args.port is not None:
            config.port = args.port
        if args.log_level:
            config.log_level = args.log_level
        validate_config(config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    _configure_logging(config.log_level)
    logging.getLogger(__name__).info("Server starting on port %d...", config.port)

    try:
        asyncio.run(RelayServer(config).serve())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
