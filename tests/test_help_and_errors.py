"""
Tests for usage output, the help shortcut and the entry-point exit behaviour.
"""

from io import StringIO

import pytest

from cmdopts import (
    AmbiguousOptionFormError,
    Arity,
    CommandLineExit,
    HelpRequested,
    MissingListArgumentError,
    OptionDescriptor,
    OptionParseError,
    OptionParser,
    UnknownOptionError,
    parse_or_exit,
)

OPTIONS = [
    OptionDescriptor("-?", "--help", description="Print this help message"),
    OptionDescriptor("-v", "--verbose", description="Enable verbose output"),
    OptionDescriptor("-o", "--output", "file", Arity.REQUIRED, "Output file"),
    OptionDescriptor(long="--tags", name="tag", arity=Arity.LIST, description="Tags"),
]

EXPECTED_USAGE = (
    "Usage: prog [option]...\n"
    "\n"
    "Options:\n"
    "    -?, --help\n"
    "        Print this help message\n"
    "\n"
    "    -v, --verbose\n"
    "        Enable verbose output\n"
    "\n"
    "    -o, --output=<file>\n"
    "        Output file\n"
    "\n"
    "    --tags=<tag>\n"
    "        Tags\n"
)


@pytest.fixture
def parser():
    return OptionParser(OPTIONS, prog="prog")


class TestUsage:
    """Test suite for usage rendering."""

    def test_format_usage(self, parser):
        assert parser.format_usage() == EXPECTED_USAGE

    def test_print_usage_defaults_to_stdout(self, parser, capsys):
        parser.print_usage()
        captured = capsys.readouterr()
        assert captured.out == EXPECTED_USAGE
        assert captured.err == ""

    def test_print_usage_to_file(self, parser):
        out = StringIO()
        parser.print_usage(out)
        assert out.getvalue() == EXPECTED_USAGE

    def test_short_only_option(self):
        parser = OptionParser(
            [OptionDescriptor("-x", description="Short only")], prog="p"
        )
        assert "    -x\n        Short only\n" in parser.format_usage()

    def test_long_argument_name_is_truncated(self):
        name = "n" * 40
        parser = OptionParser(
            [OptionDescriptor("-o", "--output", name, Arity.REQUIRED)], prog="p"
        )
        line = parser.format_usage().splitlines()[3]
        placeholder = line[len("    -o, --output") :]
        assert len(placeholder) == 31
        assert placeholder == ("=<" + name)[:31]

    def test_custom_argument_name_length(self):
        parser = OptionParser(
            [OptionDescriptor("-o", "--output", "file", Arity.REQUIRED)],
            prog="p",
            argument_name_length=5,
        )
        assert "    -o, --output=<fi\n" in parser.format_usage()

    def test_invalid_argument_name_length(self):
        with pytest.raises(ValueError):
            OptionParser(OPTIONS, argument_name_length=0)


class TestHelpShortcut:
    """Test suite for '--help' and '-?'."""

    @pytest.mark.parametrize("token", ["--help", "-?"])
    def test_help_raises_with_usage(self, parser, token):
        with pytest.raises(HelpRequested) as exc_info:
            parser.parse(["prog", token])
        assert exc_info.value.exit_code == 0
        assert exc_info.value.message == EXPECTED_USAGE

    def test_help_is_not_recorded(self, parser):
        with pytest.raises(HelpRequested):
            parser.parse(["prog", "-v", "--help"])
        assert not parser.has("help")
        assert not parser.has("verbose")

    def test_help_stops_before_later_errors(self, parser):
        with pytest.raises(HelpRequested):
            parser.parse(["prog", "--help", "--bogus"])

    def test_help_only_for_flags(self):
        parser = OptionParser(
            [OptionDescriptor("-h", "--help", "topic", Arity.REQUIRED, "Help on a topic")]
        )
        parser.parse(["prog", "--help=colors"])
        assert parser.get("help") == "colors"

    def test_help_short_form_alone(self):
        parser = OptionParser([OptionDescriptor("-?", description="Help")], prog="p")
        with pytest.raises(HelpRequested):
            parser.parse(["p", "-?"])

    def test_safe_parse_returns_help(self, parser):
        result = parser.safe_parse(["prog", "-?"])
        assert result.is_err()
        assert isinstance(result.err_value, HelpRequested)


class TestErrors:
    """Test suite for the error taxonomy."""

    def test_hierarchy(self):
        assert issubclass(HelpRequested, CommandLineExit)
        assert issubclass(UnknownOptionError, OptionParseError)
        assert issubclass(MissingListArgumentError, OptionParseError)
        assert issubclass(AmbiguousOptionFormError, OptionParseError)
        assert issubclass(OptionParseError, CommandLineExit)

    def test_ambiguous_form_message(self):
        error = AmbiguousOptionFormError("-q")
        assert error.token == "-q"
        assert error.exit_code == 1
        assert str(error) == "Unable to determine if '-q' is a long or short option."

    def test_ambiguous_form_raised_for_mismatched_descriptor(self, parser):
        descriptor = OptionDescriptor("-q", "--quiet", "level", Arity.REQUIRED)
        with pytest.raises(AmbiguousOptionFormError):
            parser._parse_argument({}, descriptor, ["-o", "x"], 0)


class TestParseOrExit:
    """Test suite for the entry-point helper."""

    def test_success_returns_parser(self, parser, capsys):
        assert parse_or_exit(parser, ["prog", "-v"]) is parser
        assert parser.has("verbose")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_help_exits_zero(self, parser, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_or_exit(parser, ["prog", "--help"])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert captured.out == EXPECTED_USAGE
        assert captured.err == ""

    def test_unknown_option_exits_nonzero(self, parser, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_or_exit(parser, ["prog", "--bogus"])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "prog: Invalid option '--bogus'\n"
        assert dict(parser.table) == {}

    def test_missing_list_argument_exits_nonzero(self, parser, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_or_exit(parser, ["prog", "--tags"])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.err == (
            "prog: No argument after option '--tags' with list argument type.\n"
        )

    def test_defaults_to_sys_argv(self, parser, monkeypatch):
        monkeypatch.setattr("sys.argv", ["prog", "--output=x"])
        parse_or_exit(parser)
        assert parser.get("output") == "x"
