"""Dotview CLI — dotview [dotFile] [--display].

Entry point for the ``dotview`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys

DEFAULT_DOT_FILE = "docs/sample.dot"


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the dotview CLI."""
    parser = argparse.ArgumentParser(
        prog="dotview",
        description="Live-updating Graphviz DOT previewer.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "dot_file",
        nargs="?",
        default=DEFAULT_DOT_FILE,
        metavar="dotFile",
        help=f"Path to the DOT file (default: {DEFAULT_DOT_FILE})",
    )
    parser.add_argument(
        "-d", "--display",
        action="store_true",
        help="Print the contents of the DOT file and exit",
    )
    parser.add_argument("--host", default=None, help="Bind address (default: 127.0.0.1)")
    parser.add_argument(
        "--port", type=int, default=None, help="Bind port (default: 0, chosen by the OS)",
    )
    return parser


def _get_version() -> str:
    """Get the package version."""
    from dotview import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    from dotview._errors import DotviewError, TargetNotFoundError
    from dotview.app import display, preview

    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.display:
            display(args.dot_file)
        else:
            preview(args.dot_file, host=args.host, port=args.port)
    except TargetNotFoundError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
    except DotviewError as exc:
        print(f"dotview: {exc}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
