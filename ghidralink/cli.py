"""Command-line front door for ghidralink.

Serves a workspace directory, or acts as a one-shot link encoder/sender.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .link_codec import encode
from .runtime import run_bridge
from .runtime import config as bridge_config
from .sender import send_link

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def _port(value: str) -> int:
    """argparse type for TCP port numbers (``0`` picks a free port)."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from exc
    if not 0 <= parsed <= 65535:
        raise argparse.ArgumentTypeError("port must be between 0 and 65535")
    return parsed


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Open ghidra:// links sent from other tools in a local workspace."
    )
    parser.add_argument("root", nargs="?", default=None, help="Workspace directory. Defaults to current directory.")
    parser.add_argument("--port", type=_port, default=None, help="Listener port (default from config, else 24437).")
    parser.add_argument("--host", default=None, help="Listener host (default 127.0.0.1). Non-loopback hosts accept links from the network.")
    parser.add_argument("--rows", type=_positive_int, default=None, help="Hex view rows around the cursor.")
    parser.add_argument("--style", default=None, help="Pygments style name for the hex view.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored hex view output.")
    parser.add_argument("--hidden", action="store_true", help="Include dot files and dot directories.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--encode", nargs=2, metavar=("NAME", "ADDRESS"), help="Print the link for NAME at ADDRESS and exit.")
    parser.add_argument("--send", metavar="LINK", help="Send LINK to a running listener and exit.")
    parser.add_argument("--save-config", action="store_true", help="Persist port/host/rows/style options and exit.")
    return parser


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise SystemExit(f"Unknown log level: {level_name}")
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def main(default_root: Path | None = None) -> None:
    """Parse arguments and run the selected mode.

    ``default_root`` is primarily for tests; when omitted the current working
    directory is served.
    """
    args = build_parser().parse_args()
    _configure_logging(args.log_level)

    if args.encode is not None:
        if args.send is not None:
            raise SystemExit("Cannot combine --encode with --send.")
        name, address = args.encode
        sys.stdout.write(encode(name, address) + "\n")
        return

    config = bridge_config.load_bridge_config()
    overrides = {
        key: value
        for key, value in (
            ("port", args.port),
            ("host", args.host),
            ("hexview_rows", args.rows),
            ("style", args.style),
        )
        if value is not None
    }
    config = replace(config, **overrides)

    if args.save_config:
        bridge_config.save_config(
            {
                "port": config.port,
                "host": config.host,
                "hexview_rows": config.hexview_rows,
                "style": config.style,
            }
        )
        sys.stdout.write(f"{bridge_config.CONFIG_PATH}\n")
        return

    if args.send is not None:
        try:
            send_link(args.send, host=config.host, port=config.port)
        except OSError as exc:
            raise SystemExit(f"Cannot reach listener on {config.host}:{config.port}: {exc}") from exc
        return

    if default_root is None:
        default_root = Path.cwd()
    root = Path(args.root or default_root)
    if not root.is_dir():
        raise SystemExit(f"Workspace directory not found: {root}")

    exit_code = run_bridge(root, config, no_color=args.no_color, show_hidden=args.hidden)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
