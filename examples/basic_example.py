#!/usr/bin/env python3
"""
Example script demonstrating the usage of OptionParser.

This script declares a handful of options with different argument arities,
parses the command line and prints what was found.

Try:
    python basic_example.py --help
    python basic_example.py -v --output=out.txt --tags red green -n 3
"""

from cmdopts import Arity, OptionDescriptor, OptionParser, parse_or_exit

OPTIONS = [
    OptionDescriptor("-?", "--help", description="Print this help message"),
    OptionDescriptor("-v", "--verbose", description="Enable verbose output"),
    OptionDescriptor(
        "-o", "--output", "file", Arity.REQUIRED, "Path of the output file"
    ),
    OptionDescriptor(
        "-n", "--count", "number", Arity.OPTIONAL, "Number of items to process"
    ),
    OptionDescriptor("-t", "--tags", "tag", Arity.LIST, "Tags to apply to each item"),
]


def main() -> None:
    """Main function demonstrating the parser."""
    parser = OptionParser(OPTIONS, prog="basic_example")
    parse_or_exit(parser)

    print("OptionParser Example")
    print("=" * 50)
    print()
    print(f"Verbose: {parser.has('verbose')}")
    print(f"Output: {parser.get('output') or '(none)'}")
    print(f"Count: {parser.get('count') or '(none)'}")
    print(f"Tags: {', '.join(parser.get_all('tags')) or '(none)'}")


if __name__ == "__main__":
    main()
