#!/usr/bin/env python3
"""
Command-line tool: parse arguments against a catalog file and print the result.

Usage:
    cmdopts [--prog NAME] [--verbose] CATALOG [ARGS...]

Useful to check what a catalog accepts and how a given command line is read.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from .options import load_catalog
from .parser import OptionParser, parse_or_exit


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdopts",
        description="Parse ARGS against the options declared in a YAML or JSON catalog file.",
    )
    parser.add_argument(
        "--prog",
        type=str,
        default="",
        metavar="NAME",
        help="Program name used in usage and error messages (default: catalog file name without extension)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log how each argument is resolved",
    )
    parser.add_argument(
        "catalog", metavar="CATALOG", help="Path to the catalog file (YAML or JSON)"
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        metavar="ARGS",
        help="Arguments to parse against the catalog",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    arg_parser = build_arg_parser()
    ns = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(ns.catalog)
    except (FileNotFoundError, ValueError) as e:
        arg_parser.error(str(e))

    prog = ns.prog or os.path.splitext(os.path.basename(ns.catalog))[0]
    option_parser = OptionParser(catalog, prog=prog)
    parse_or_exit(option_parser, [prog, *ns.args])

    output = option_parser.dump()
    if output:
        print(output)


if __name__ == "__main__":
    main(sys.argv[1:])
