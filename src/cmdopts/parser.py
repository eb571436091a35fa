"""
OptionParser - parses a command line against an option catalog.

The parser resolves every token of an argument vector against the catalog,
extracts attached values and records them in a table keyed by the canonical
option key (the long form without its dashes, or the short form when there is
no long form). It also renders the usage message for the catalog.
"""

import dataclasses
import enum
import logging
import os
import sys
import types
from typing import IO, Iterable, Mapping, Optional, Union

from result import Err, Ok, Result

from .errors import (
    AmbiguousOptionFormError,
    CommandLineExit,
    HelpRequested,
    MissingListArgumentError,
    UnknownOptionError,
)
from .options import Arity, OptionCatalog, OptionDescriptor

logger = logging.getLogger(__name__)

# Width of the '=<name>' placeholder in usage text, terminator included.
ARGUMENT_NAME_LENGTH = 32

HELP_LONG_OPTION = "--help"
HELP_SHORT_OPTION = "-?"


class ListMode(enum.Enum):
    IDLE = "idle"
    COLLECTING = "collecting"


@dataclasses.dataclass(frozen=True)
class ListState:
    """
    Whether the parser is collecting values for a list option.

    While collecting, every token that is not a recognised option is appended
    under `key`.
    """

    mode: ListMode = ListMode.IDLE
    key: str = ""

    @classmethod
    def idle(cls) -> "ListState":
        return cls()

    @classmethod
    def collecting(cls, key: str) -> "ListState":
        return cls(ListMode.COLLECTING, key)

    @property
    def active(self) -> bool:
        return self.mode is ListMode.COLLECTING


Table = dict[str, list[str]]


class OptionParser:
    """
    A command-line option parser driven by a declarative option catalog.

    Example:
        parser = OptionParser([
            OptionDescriptor("-v", "--verbose", description="Verbose output"),
            OptionDescriptor("-o", "--output", "file", Arity.REQUIRED, "Output file"),
        ])
        parser.parse(["prog", "-v", "--output=out.txt"])
        parser.has("verbose")   # True
        parser.get("output")    # "out.txt"
    """

    def __init__(
        self,
        options: Union[OptionCatalog, Iterable[OptionDescriptor]],
        prog: Optional[str] = None,
        argument_name_length: int = ARGUMENT_NAME_LENGTH,
    ) -> None:
        """
        Args:
            options: The catalog, or the descriptors to build one from.
            prog: Program name used in usage and error messages. Defaults to
                the basename of sys.argv[0].
            argument_name_length: Width of the '=<name>' placeholder in usage
                text; longer placeholders are truncated.
        """
        if isinstance(options, OptionCatalog):
            self.catalog = options
        else:
            self.catalog = OptionCatalog(options)
        if prog is None:
            prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
        self.prog: str = prog
        if argument_name_length < 1:
            raise ValueError("argument_name_length must be at least 1")
        self.argument_name_length = argument_name_length
        self._table: Table = {}

    @property
    def table(self) -> Mapping[str, list[str]]:
        """Read-only view of the key -> values table."""
        return types.MappingProxyType(self._table)

    # Parsing

    def parse(self, argv: Optional[list[str]] = None) -> "OptionParser":
        """
        Parse an argument vector and record every option found.

        Args:
            argv: The full argument vector, program name first. If None, uses
                sys.argv. Element 0 is skipped.

        Returns:
            OptionParser: self, so the call can be chained with queries.

        Raises:
            HelpRequested: If a '--help' or '-?' flag is given.
            OptionParseError: If a token cannot be parsed. Nothing from this
                call is recorded in that case.
        """
        if argv is None:
            argv = sys.argv
        args = list(argv[1:])
        logger.debug("Parsing %d argument(s): %r", len(args), args)

        table: Table = {}
        state = ListState.idle()
        i = 0
        while i < len(args):
            token = args[i]
            state, absorbed = self.list_transition(state, token)
            if absorbed:
                self._append(table, state.key, token)
                i += 1
                continue

            data = self.find_option(token)
            if data is None:
                raise UnknownOptionError(token)
            i, state = self._parse_argument(table, data, args, i)
            i += 1

        for key, values in table.items():
            self._table.setdefault(key, []).extend(values)
        logger.debug("Parsed options: %r", table)
        return self

    def safe_parse(
        self, argv: Optional[list[str]] = None
    ) -> Result["OptionParser", CommandLineExit]:
        """
        Parse an argument vector without raising.

        Returns:
            Result[OptionParser, CommandLineExit]:
                - Ok with the parser when the whole vector was parsed,
                - Err with the HelpRequested or OptionParseError that stopped it.
        """
        try:
            return Ok(self.parse(argv))
        except CommandLineExit as e:
            return Err(e)

    def list_transition(self, state: ListState, token: str) -> tuple[ListState, bool]:
        """
        Apply one token to the list collection state.

        Returns:
            A (new_state, absorbed) pair. `absorbed` is True when the token is
            a value for the list option being collected; otherwise the token
            must be parsed as an option. A recognised option ends collection.
        """
        if not state.active:
            return state, False
        if self.is_option(token):
            logger.debug("List collection for '%s' ended at '%s'", state.key, token)
            return ListState.idle(), False
        return state, True

    def _parse_argument(
        self, table: Table, data: OptionDescriptor, args: list[str], i: int
    ) -> tuple[int, ListState]:
        """
        Record the value(s) for the option at args[i] according to its arity.

        Returns:
            The index of the last token consumed and the list state to carry on with.
        """
        token = args[i]
        logger.debug("Resolved '%s' to %s (%s)", token, data.key, data.arity.value)

        if data.arity is Arity.NONE:
            self._check_help(data)
            self._append(table, data.key, "")
            return i, ListState.idle()

        if data.arity is Arity.LIST:
            if i + 1 >= len(args):
                raise MissingListArgumentError(token)
            if self._is_long_form(data, token) and "=" in token:
                self._append(table, data.key, self.extract_value(token))
            logger.debug("Collecting list values for '%s'", data.key)
            return i, ListState.collecting(data.key)

        # Required and optional arguments are handled alike.
        if self._is_long_form(data, token):
            value = self.extract_value(token)
        elif self._is_short_form(data, token):
            value, i = self._parse_short_argument(args, i)
        else:
            raise AmbiguousOptionFormError(token)

        self._append(table, data.key, value)
        return i, ListState.idle()

    def _parse_short_argument(self, args: list[str], i: int) -> tuple[str, int]:
        """The value for a short option is the next token, unless that is an option itself."""
        if i + 1 < len(args) and not self.is_option(args[i + 1]):
            return args[i + 1], i + 1
        return "", i

    def _check_help(self, data: OptionDescriptor) -> None:
        if data.long == HELP_LONG_OPTION or data.short == HELP_SHORT_OPTION:
            raise HelpRequested(self.format_usage())

    @staticmethod
    def _append(table: Table, key: str, value: str) -> None:
        table.setdefault(key, []).append(value)
        logger.debug("Recorded %s = %r", key, value)

    # Table queries

    def set(self, option: str, value: str) -> bool:
        """
        Append a value for an option.

        Args:
            option: Any spelling of the option ('--output', '-o', 'output', ...).
            value: The value to append.

        Returns:
            bool: True on success, False if the option is not in the catalog
            (the table is left unchanged).
        """
        key = self.to_key(option)
        if not key:
            return False
        self._append(self._table, key, value)
        return True

    def get(self, option: str) -> str:
        """Return the first value recorded for an option, or '' if there is none."""
        values = self._table.get(self.to_key(option))
        return values[0] if values else ""

    def get_all(self, option: str) -> list[str]:
        """Return a copy of every value recorded for an option, in command-line order."""
        return list(self._table.get(self.to_key(option), []))

    def has(self, option: str) -> bool:
        """Check whether an option was given on the command line."""
        return bool(self._table.get(self.to_key(option)))

    def dump(self) -> str:
        """Render the table as 'key: value, value' lines, to check what was parsed."""
        return "\n".join(
            f"{key}: {', '.join(values)}" for key, values in self._table.items()
        )

    # Spelling helpers

    def find_option(self, option: str) -> Optional[OptionDescriptor]:
        return self.catalog.find(option)

    def to_key(self, option: str) -> str:
        """
        Convert any spelling of an option to its table key.

        '--long-option' becomes 'long-option'; when the option has no long
        form, '-s' becomes 's'. A spelling without leading dashes is tried as
        a long option first, then as a short option.

        Returns:
            str: The key, or '' if the spelling matches no option.
        """
        if not option:
            return ""
        if option.startswith("-"):
            data = self.find_option(option)
        else:
            data = self.find_option("--" + option) or self.find_option("-" + option)
        return data.key if data is not None else ""

    def to_short_option(self, option: str) -> str:
        data = self.find_option(option)
        return data.short if data is not None else ""

    def to_long_option(self, option: str) -> str:
        data = self.find_option(option)
        return data.long if data is not None else ""

    def is_option(self, option: str) -> bool:
        return self.find_option(option) is not None

    def is_short_option(self, option: str) -> bool:
        data = self.find_option(option)
        return data is not None and self._is_short_form(data, option)

    def is_long_option(self, option: str) -> bool:
        data = self.find_option(option)
        return data is not None and self._is_long_form(data, option)

    @staticmethod
    def _is_short_form(data: OptionDescriptor, option: str) -> bool:
        return bool(data.short) and option == data.short

    @classmethod
    def _is_long_form(cls, data: OptionDescriptor, option: str) -> bool:
        return bool(data.long) and (
            option == data.long or cls.extract_option(option) == data.long
        )

    @staticmethod
    def extract_option(option: str) -> str:
        """'--long-option=value' -> '--long-option'. Tokens without '=' are returned as is."""
        return option.split("=", 1)[0]

    @staticmethod
    def extract_value(option: str) -> str:
        """'--long-option=value' -> 'value'. Tokens without '=' give ''."""
        _, sep, value = option.partition("=")
        return value if sep else ""

    # Usage

    def format_usage(self) -> str:
        """
        Render the usage message: one paragraph per option, in catalog order.
        """
        lines = [f"Usage: {self.prog} [option]...", "", "Options:"]
        for data in self.catalog:
            arg = ""
            if data.name:
                arg = f"=<{data.name}>"[: self.argument_name_length - 1]
            lines.append(f"    {', '.join(data.spellings)}{arg}")
            lines.append(f"        {data.description}")
            lines.append("")
        return "\n".join(lines)

    def print_usage(self, file: Optional[IO[str]] = None) -> None:
        """Print the usage message to `file` (stdout by default)."""
        if file is None:
            file = sys.stdout
        file.write(self.format_usage())
        file.flush()


def parse_or_exit(
    parser: OptionParser, argv: Optional[list[str]] = None
) -> OptionParser:
    """
    Parse a command line for a program's entry point.

    Prints the usage message and exits with status 0 when help is requested;
    prints '<prog>: <message>' to stderr and exits with status 1 on a parse error.

    Returns:
        OptionParser: The parser, when the command line was parsed successfully.
    """
    result = parser.safe_parse(argv)
    if isinstance(result, Ok):
        return result.ok_value

    error = result.err_value
    if isinstance(error, HelpRequested):
        sys.stdout.write(error.message)
        sys.stdout.flush()
    else:
        sys.stdout.flush()
        sys.stderr.write(f"{parser.prog}: {error.message}\n")
        sys.stderr.flush()
    sys.exit(error.exit_code)
