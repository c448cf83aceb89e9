"""Command-line interface for cmsedit."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass

from app import RESTART, CmsEditTUI
from backend import HttpBackend
from config import ClientConfig, ConfigError, load_client_config, setup_logging
from model import NEW_DOCUMENT_ID

CMSEDIT_VERSION = "0.3.0"

log = logging.getLogger(__name__)


@dataclass
class ParsedArgs:
    """Parsed command-line arguments."""

    config: ClientConfig
    start_path: str


def print_error_box(title: str, *lines: str) -> None:
    """Print a formatted error box to stderr.

    Args:
        title: The error title (will be prefixed with "Error: ")
        *lines: Additional lines to print in the box
    """
    print("=" * 60, file=sys.stderr)
    print(f"Error: {title}", file=sys.stderr)
    print("", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


class CmsEditHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that shows our structured help."""

    def format_help(self) -> str:
        lines = [
            "cmsedit - A terminal editor for CMS layouts and site configuration.",
            f"Version: {CMSEDIT_VERSION}",
            "",
            "Usage:",
            "  cmsedit                               Open the layout list",
            "  cmsedit --layout <id>                 Open a layout for editing",
            "  cmsedit --new-layout                  Start a new layout",
            "  cmsedit --settings                    Open the configuration editor",
            "",
            "Connection:",
            "  cmsedit --api <url>                   Admin API base URL",
            "                                        (env CMSEDIT_API_URL)",
            "  cmsedit --timeout <seconds>           Request timeout (env CMSEDIT_TIMEOUT)",
            "  cmsedit --token <token>               Bearer token (env CMSEDIT_TOKEN)",
            "",
            "Other:",
            "  cmsedit --version                     Print the version and exit",
            "",
            "Logs are written to $XDG_STATE_HOME/cmsedit/cmsedit.log",
        ]
        return "\n".join(lines) + "\n"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the cmsedit CLI."""
    parser = argparse.ArgumentParser(
        prog="cmsedit",
        formatter_class=CmsEditHelpFormatter,
        add_help=True,
    )

    # Connection
    parser.add_argument("--api", metavar="URL", help=argparse.SUPPRESS)
    parser.add_argument("--timeout", metavar="SECONDS", help=argparse.SUPPRESS)
    parser.add_argument("--token", metavar="TOKEN", help=argparse.SUPPRESS)

    # Start location (mutually exclusive)
    start = parser.add_mutually_exclusive_group()
    start.add_argument("--layout", metavar="ID", help=argparse.SUPPRESS)
    start.add_argument("--new-layout", action="store_true", help=argparse.SUPPRESS)
    start.add_argument("--settings", action="store_true", help=argparse.SUPPRESS)

    parser.add_argument("--version", action="store_true", help=argparse.SUPPRESS)

    return parser


def parse_args(argv: list[str] | None = None, environ: dict[str, str] | None = None) -> ParsedArgs:
    """Parse command line arguments.

    Returns:
        ParsedArgs with the client configuration and the start location.
    """
    parser = create_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.version:
        print(f"cmsedit {CMSEDIT_VERSION}")
        sys.exit(0)

    try:
        config = load_client_config(environ, api_url=args.api, timeout=args.timeout, token=args.token)
    except ConfigError as e:
        print_error_box("Invalid configuration", str(e))
        sys.exit(1)

    if args.layout:
        start_path = f"/layouts/{args.layout}"
    elif args.new_layout:
        start_path = f"/layouts/{NEW_DOCUMENT_ID}"
    elif args.settings:
        start_path = "/settings"
    else:
        start_path = "/layouts"

    return ParsedArgs(config=config, start_path=start_path)


async def run_app(config: ClientConfig, start_path: str) -> object:
    """Run the TUI once with a fresh HTTP client; returns the app's exit result."""
    async with HttpBackend(config.api_url, timeout=config.timeout, token=config.token) as client:
        app = CmsEditTUI(client, start_path=start_path, api_url=config.api_url, version=CMSEDIT_VERSION)
        return await app.run_async()


def main() -> None:
    """Main entry point."""
    args = parse_args()
    setup_logging(args.config.log_level)
    log.info(f"Starting cmsedit {CMSEDIT_VERSION} against {args.config.api_url}")

    start_path = args.start_path
    while asyncio.run(run_app(args.config, start_path)) == RESTART:
        # A restart reloads the configuration from a clean state
        log.info("Restarting cmsedit")
        start_path = "/settings"


if __name__ == "__main__":
    main()
