"""
todotui - browse Todoist projects in the terminal.

Usage:
    todotui                     Use the token from the environment or config file
    todotui --token TOKEN       Use an explicit API token
    todotui --log-level DEBUG   Write diagnostics to the log file

Keys: PageDown / PageUp move through the projects, Esc or Ctrl-C quits.
"""
import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .app import TuiApp
from .client import TodoistClient
from .config import load_settings, require_token
from .errors import ConfigError, TerminalInitError
from .logger import get_logger, setup_logging
from .scheduler import Ticker
from .terminal import BlessedBackend, TerminalBackend

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todotui",
        description="Browse Todoist projects in the terminal.",
    )
    parser.add_argument("--token", help="Todoist API token (default: $TODOIST_TOKEN or the config file)")
    parser.add_argument("--config", metavar="PATH", help="JSON config file (default: ~/.todoist.config.json)")
    parser.add_argument("--base-url", help="Todoist API base URL")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds for the initial sync")
    parser.add_argument("--fps", type=float, help="redraw rate (default: 60)")
    parser.add_argument("--log-file", metavar="PATH", help="log file (default: ~/.todotui.log)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="log level (default: ERROR)")
    return parser


def main(argv: Optional[List[str]] = None, term: Optional[TerminalBackend] = None) -> int:
    args = build_parser().parse_args(argv)
    err = Console(stderr=True, highlight=False)

    try:
        settings = load_settings(
            args.config,
            token=args.token,
            base_url=args.base_url,
            request_timeout=args.timeout,
            fps=args.fps,
            log_file=args.log_file,
            log_level=args.log_level,
        )
        token = require_token(settings)
    except ConfigError as e:
        err.print(f"[red]error:[/red] {escape(str(e))}")
        return 1

    setup_logging(settings.log_level, settings.log_file)
    client = TodoistClient(token, base_url=settings.base_url, timeout=settings.request_timeout)
    app = TuiApp(client, term or BlessedBackend(), ticker=Ticker(settings.fps))

    try:
        state = app.run()
    except TerminalInitError as e:
        err.print(f"[red]cannot start the terminal UI:[/red] {escape(str(e))}")
        return 1

    # the error itself was already printed once the terminal was restored
    return 1 if state.error_message else 0


if __name__ == "__main__":
    sys.exit(main())
