"""Argument parsing functionality for pydepsync."""

import argparse
from typing import List, Optional, Tuple


def remap_pair(value: str) -> Tuple[str, str]:
    """Parse a ``KEY=VALUE`` remap argument."""
    key, sep, mapped = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError("Invalid key-value pair format. Use 'key=value'")
    if not key:
        raise argparse.ArgumentTypeError("Key cannot be empty")
    return key, mapped


def parse_args(argv: Optional[List[str]] = None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="pydepsync",
        description=(
            "pydepsync - detect imported third-party packages and add them to pyproject.toml"
        ),
        add_help=True,
    )

    parser.add_argument("path",
                        help="Source tree to scan (default: current directory)",
                        nargs="?",
                        default=".")
    parser.add_argument("--pyproject",
                        dest="PYPROJECT",
                        help="Path to pyproject.toml (default: <path>/pyproject.toml)",
                        action="store",
                        type=str)
    parser.add_argument("--exclude-dirs",
                        dest="EXCLUDE_DIRS",
                        help="Directory name to ignore; venv, .venv, .git and target are always ignored. Repeatable.",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--extra-indexes",
                        dest="EXTRA_INDEXES",
                        help="Extra package index to check after https://pypi.org/simple. Repeatable.",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--preferred-index",
                        dest="PREFERRED_INDEX",
                        help="Index to check first when resolving packages",
                        action="store",
                        type=str)
    parser.add_argument("-r", "--remap",
                        dest="REMAP",
                        metavar="KEY=VALUE",
                        help="Map an import name to its distribution name. Repeatable.",
                        action="append",
                        type=remap_pair,
                        default=[])
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (TOML, YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Print detected dependencies instead of updating pyproject.toml",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: $PYDEPSYNC_LOG_LEVEL, else INFO)",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
