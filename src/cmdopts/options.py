"""
Option descriptors and the catalog that holds them.

A catalog is the declarative list of everything a program accepts on its
command line. It can be built in code from OptionDescriptor instances or
loaded from a YAML or JSON file.
"""

import dataclasses
import enum
import json
import os
from typing import Any, Iterable, Iterator, Optional, Union

import yaml

from .errors import OptionExistsError


class Arity(enum.Enum):
    """How many argument tokens an option consumes."""

    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"
    LIST = "list"

    @classmethod
    def from_string(cls, value: str) -> "Arity":
        """
        Look up an arity by name, ignoring case.

        Accepts the enum values ("none", "required", ...) as well as the
        "<value>_argument" spellings, e.g. "list_argument" or "no_argument".

        Raises:
            ValueError: If the name does not denote an arity.
        """
        name = value.strip().lower()
        if name.endswith("_argument"):
            name = name[: -len("_argument")]
        if name == "no":
            name = "none"
        for arity in cls:
            if arity.value == name:
                return arity
        choices = ", ".join(a.value for a in cls)
        raise ValueError(f"Invalid arity: '{value}'. Must be one of: {choices}")

    @property
    def takes_value(self) -> bool:
        return self is not Arity.NONE


@dataclasses.dataclass(frozen=True)
class OptionDescriptor:
    """
    One declared command-line option.

    Example:
        OptionDescriptor("-o", "--output", "file", Arity.REQUIRED, "Output file")
    """

    short: str = ""
    long: str = ""
    name: str = ""
    arity: Arity = Arity.NONE
    description: str = ""

    def __post_init__(self) -> None:
        if not self.short and not self.long:
            raise ValueError("An option needs a short form, a long form, or both")
        if self.short and (
            not self.short.startswith("-") or self.short.startswith("--")
        ):
            raise ValueError(f"Invalid short option format: '{self.short}'")
        if self.short == "-":
            raise ValueError(f"Invalid short option format: '{self.short}'")
        if self.long and (not self.long.startswith("--") or self.long == "--"):
            raise ValueError(f"Invalid long option format: '{self.long}'")
        if "=" in self.long:
            raise ValueError(f"Long option may not contain '=': '{self.long}'")

    @property
    def key(self) -> str:
        """The canonical table key: the long form without '--', else the short form without '-'."""
        if self.long:
            return self.long[2:]
        return self.short[1:]

    @property
    def spellings(self) -> tuple[str, ...]:
        return tuple(s for s in (self.short, self.long) if s)


class OptionCatalog:
    """
    Ordered, immutable collection of OptionDescriptor entries.

    Keeps a lookup table for short and long spellings so that resolving a
    token does not scan the whole catalog.
    """

    def __init__(self, options: Iterable[OptionDescriptor] = ()) -> None:
        self._options: tuple[OptionDescriptor, ...] = tuple(options)
        self._by_short: dict[str, OptionDescriptor] = {}
        self._by_long: dict[str, OptionDescriptor] = {}

        for option in self._options:
            if not isinstance(option, OptionDescriptor):
                raise TypeError(
                    f"Catalog entries must be OptionDescriptor, got {type(option).__name__}"
                )
            if option.short:
                if option.short in self._by_short:
                    raise OptionExistsError(option.short)
                self._by_short[option.short] = option
            if option.long:
                if option.long in self._by_long:
                    raise OptionExistsError(option.long)
                self._by_long[option.long] = option

    def __iter__(self) -> Iterator[OptionDescriptor]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __getitem__(self, index: int) -> OptionDescriptor:
        return self._options[index]

    def __repr__(self) -> str:
        return f"OptionCatalog({list(self._options)!r})"

    def find(self, token: str) -> Optional[OptionDescriptor]:
        """
        Find the descriptor denoted by a token.

        The token matches a descriptor when it equals the short form, equals
        the long form, or equals the long form once an '=value' suffix has been
        stripped.

        Returns:
            The matching descriptor, or None if no entry matches.
        """
        found = self._by_short.get(token) or self._by_long.get(token)
        if found is not None:
            return found
        if "=" in token:
            return self._by_long.get(token.split("=", 1)[0])
        return None

    @classmethod
    def from_file(cls, path: str) -> "OptionCatalog":
        """Load a catalog from a YAML or JSON file. See load_catalog."""
        return load_catalog(path)


def _read_catalog_file(path: str) -> Any:
    """
    Read the raw data of a catalog file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file format is not supported or invalid.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Catalog file not found: {path}")

    file_ext = os.path.splitext(path)[1].lower()

    with open(path, "r") as f:
        if file_ext in [".yaml", ".yml"]:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML file: {e}")
        elif file_ext == ".json":
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON file: {e}")
        else:
            raise ValueError(
                f"Unsupported file format: {file_ext}. "
                "Supported formats are: .yaml, .yml, .json"
            )


_ENTRY_FIELDS = ("short", "long", "name", "arity", "description")


def _descriptor_from_entry(entry: Any, index: int) -> OptionDescriptor:
    if not isinstance(entry, dict):
        raise ValueError(f"Option entry {index} must be a mapping, got {entry!r}")

    unknown = sorted(set(entry) - set(_ENTRY_FIELDS))
    if unknown:
        raise ValueError(
            f"Option entry {index} has unknown field(s): {', '.join(unknown)}"
        )

    arity: Union[str, Arity] = entry.get("arity") or Arity.NONE
    if not isinstance(arity, Arity):
        arity = Arity.from_string(str(arity))

    values = {k: entry.get(k) or "" for k in ("short", "long", "name", "description")}
    for field_name, value in values.items():
        if not isinstance(value, str):
            raise ValueError(
                f"Option entry {index}: field '{field_name}' must be a string, got {value!r}"
            )

    try:
        return OptionDescriptor(arity=arity, **values)
    except ValueError as e:
        raise ValueError(f"Option entry {index}: {e}")


def load_catalog(path: str) -> OptionCatalog:
    """
    Load an option catalog from a YAML or JSON file.

    The file holds either a list of option mappings, or a mapping with an
    'options' key containing that list. Each option mapping may have the keys
    'short', 'long', 'name', 'arity' and 'description'.

    Example (YAML):
        options:
          - short: -o
            long: --output
            name: file
            arity: required
            description: Output file

    Args:
        path (str): Path to the catalog file.

    Returns:
        OptionCatalog: The catalog, in file order.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist.
        ValueError: If the file is malformed or declares an invalid option.
    """
    data = _read_catalog_file(path)

    if isinstance(data, dict):
        data = data.get("options")
    if not isinstance(data, list):
        raise ValueError(
            f"Catalog file {path} must contain a list of options "
            "or a mapping with an 'options' list"
        )

    return OptionCatalog(
        _descriptor_from_entry(entry, index) for index, entry in enumerate(data)
    )
