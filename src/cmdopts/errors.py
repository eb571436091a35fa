"""
Exceptions raised while building an option catalog or parsing a command line.

The parser never terminates the process itself. Everything that would end a
program run (a help request or a malformed command line) is raised as a
subclass of CommandLineExit carrying the exit code the entry point should use.
"""


class OptionExistsError(ValueError):
    """Raised when two catalog entries share the same short or long spelling."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"Option '{option}' already exists")


class CommandLineExit(Exception):
    """Base class for outcomes that end command-line processing."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class HelpRequested(CommandLineExit):
    """Raised when '--help' or '-?' is seen. The message is the usage text."""

    exit_code = 0


class OptionParseError(CommandLineExit):
    """A token on the command line could not be parsed."""

    def __init__(self, token: str, message: str) -> None:
        self.token = token
        super().__init__(message)


class UnknownOptionError(OptionParseError):
    def __init__(self, token: str) -> None:
        super().__init__(token, f"Invalid option '{token}'")


class MissingListArgumentError(OptionParseError):
    def __init__(self, token: str) -> None:
        super().__init__(
            token, f"No argument after option '{token}' with list argument type."
        )


class AmbiguousOptionFormError(OptionParseError):
    def __init__(self, token: str) -> None:
        super().__init__(
            token, f"Unable to determine if '{token}' is a long or short option."
        )
