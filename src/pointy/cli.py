"""pointy command-line interface."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .config import setup_logging, store_path
from .errors import PointyError

logger = logging.getLogger(__name__)


def cmd_path(args: argparse.Namespace) -> None:
    print(os.path.abspath(args.file))


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="pointy",
        description="Earn points by solving tasks, spend them on rewards.",
        epilog="The ledger lives in $POINTY_FILE or ~/.config/pointy/config.json.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd")

    s_path = sub.add_parser("path", help="Show the absolute path to the ledger file")
    s_path.set_defaults(func=cmd_path)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Launches the TUI if no subcommand is given."""
    parser = build_parser()
    args = parser.parse_args(argv)
    args.file = store_path()

    if args.cmd is not None:
        args.func(args)
        return

    setup_logging()
    from .tui import main as tui_main

    try:
        tui_main(args.file)
    except (PointyError, OSError) as exc:
        logger.exception("Fatal error")
        sys.exit(f"pointy: {exc}")
    except Exception:
        logger.exception("Unexpected error")
        raise


if __name__ == "__main__":
    main()
