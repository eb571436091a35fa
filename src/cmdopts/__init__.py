"""
cmdopts - A command-line option parser driven by a declarative option catalog.

This package validates each token of a command line against a list of declared
options (short form, long form, argument arity, description), collects the
values supplied for each option in a table keyed by the option's canonical
name, and renders a usage message from the same list. Catalogs can also be
loaded from YAML or JSON files.
"""

from .errors import (
    AmbiguousOptionFormError,
    CommandLineExit,
    HelpRequested,
    MissingListArgumentError,
    OptionExistsError,
    OptionParseError,
    UnknownOptionError,
)
from .options import Arity, OptionCatalog, OptionDescriptor, load_catalog
from .parser import ListMode, ListState, OptionParser, parse_or_exit

__version__ = "1.0.0"
__all__ = [
    "AmbiguousOptionFormError",
    "Arity",
    "CommandLineExit",
    "HelpRequested",
    "ListMode",
    "ListState",
    "MissingListArgumentError",
    "OptionCatalog",
    "OptionDescriptor",
    "OptionExistsError",
    "OptionParseError",
    "OptionParser",
    "UnknownOptionError",
    "load_catalog",
    "parse_or_exit",
]
