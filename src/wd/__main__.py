"""Entry point: wd [--db PATH] [-d] {complete,forget} ...

- complete INPUT: print the best matching directory (or N with --list)
- forget [INPUT]: drop a directory (default: cwd) from history

Exit status is 0 on success, 1 when complete found nothing, 2 on error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from wd import __version__
from wd.config import load_config
from wd.core import Completer
from wd.errors import WdError

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="wd", description="Jump to frequently used directories")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--db", dest="db_path", default=None, help="History file location")
    p.add_argument("--config", default=None, help="Path to wd.toml")
    p.add_argument("-d", "--debug", action="store_true", default=False,
                   help="Show confidences and debug logging")

    sub = p.add_subparsers(dest="action", required=True)

    complete = sub.add_parser("complete", help="Resolve INPUT to a directory")
    complete.add_argument("input")
    complete.add_argument("-c", "--confidence", type=float, default=None,
                          help="Minimum confidence (default: 0.4)")
    complete.add_argument("-l", "--list", dest="list_count", type=_positive_int, default=None,
                          metavar="N", help="List up to N matches without recording a visit")

    forget = sub.add_parser("forget", help="Remove a directory from history")
    forget.add_argument("input", nargs="?", default=None)
    return p


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = load_config(Path(args.config) if args.config else None)
    except WdError as e:
        print(f"wd: error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.db_path:
        config.db_path = Path(args.db_path).expanduser()
    _setup_logging("DEBUG" if args.debug else config.log_level)

    completer = Completer(config)
    try:
        if args.action == "complete":
            results = completer.complete(args.input, args.confidence, args.list_count)
            for r in results:
                if args.debug:
                    print(f"[{r.confidence:.2f}] {r.path}")
                else:
                    print(r.path)
            return EXIT_OK if results else EXIT_NO_MATCH

        completer.forget(args.input)
        return EXIT_OK
    except WdError as e:
        print(f"wd: error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
