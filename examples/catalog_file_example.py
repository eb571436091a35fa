#!/usr/bin/env python3
"""
Example loading the option catalog from a YAML file.

The catalog in catalog.yaml declares the same options as basic_example.py.

Try:
    python catalog_file_example.py -o out.txt --tags a b -v
"""

import os

from cmdopts import OptionParser, load_catalog, parse_or_exit

CATALOG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "catalog.yaml")


if __name__ == "__main__":
    parser = OptionParser(load_catalog(CATALOG_PATH), prog="catalog_file_example")
    parse_or_exit(parser)

    # safe_parse never exits; errors come back as an Err value
    result = OptionParser(parser.catalog).safe_parse(["prog", "--bogus"])
    print(f"Parsing '--bogus' gives: {result}")
    print()
    print("Recorded options:")
    print(parser.dump())
