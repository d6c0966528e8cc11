from __future__ import annotations

import io

import pytest

from argsparser import ArgsParser, HelpShown, UnknownArgumentError


def _tool_parser(**kwargs) -> ArgsParser:
    parser = ArgsParser(
        description="Tool desc.",
        epilogue="Bye.",
        program_name="tool",
        exit_on_help=False,
        **kwargs,
    )
    parser.add_option(["-o", "--output"], 1, "<file>", "Output file.")
    parser.add_option("--quiet")
    parser.add_positional("input", "Input file.")
    return parser


def test_format_help_layout() -> None:
    expected = (
        "Tool desc.\n\n"
        "Usage:\n"
        "    tool OPTIONS \\\n"
        "         input\n"
        "\nPOSITIONAL ARGUMENTS: 1\n"
        "input\nInput file.\n\n"
        "\nOPTIONS:\n"
        "-h, /h, \\h, --help, /help, \\help \n    Shows this help.\n\n"
        "-o, --output <file>\nOutput file.\n\n"
        "\nBye.\n"
    )
    assert _tool_parser().format_help() == expected


def test_usage_with_margin_and_no_options() -> None:
    parser = ArgsParser(show_help=False, program_name="p", margin_size=2)
    parser.add_positional("a")
    parser.add_positional("b")
    assert parser.format_usage() == "Usage:\n  p \\\n    a \\\n    b\n"


def test_bare_usage() -> None:
    parser = ArgsParser(show_help=False, program_name="p")
    assert parser.format_usage() == "Usage:\n    p\n"


def test_help_option_text_uses_margin_when_configured() -> None:
    parser = ArgsParser(show_help=True, program_name="p", margin_size=2)
    assert "\n  Shows this help.\n" in parser.format_help()


def test_print_usage_writes_to_given_stream() -> None:
    buffer = io.StringIO()
    _tool_parser().print_usage(buffer)
    assert buffer.getvalue().startswith("Usage:\n    tool OPTIONS")


def test_help_flag_stops_parsing(capsys: pytest.CaptureFixture[str]) -> None:
    parser = _tool_parser()
    with pytest.raises(HelpShown):
        parser.parse(["--help", "--bogus", "extra", "more"])
    out = capsys.readouterr().out
    assert out == _tool_parser().format_help()
    assert parser.positional_values == ()


def test_help_alias_variants(capsys: pytest.CaptureFixture[str]) -> None:
    for alias in ("-h", "/help", "\\h"):
        with pytest.raises(HelpShown):
            _tool_parser().parse([alias])
    assert capsys.readouterr().out.count("Usage:") == 3


def test_help_clears_registrations(capsys: pytest.CaptureFixture[str]) -> None:
    parser = _tool_parser()
    with pytest.raises(HelpShown):
        parser.parse(["--output", "x", "-h"])
    capsys.readouterr()
    assert not parser.is_valid_alias("--output")
    with pytest.raises(UnknownArgumentError):
        parser.was_present("--output")


def test_help_exits_with_success_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    parser = ArgsParser(program_name="tool")
    with pytest.raises(SystemExit) as excinfo:
        parser.parse(["--help"])
    assert excinfo.value.code == 0
    assert "Usage:\n    tool OPTIONS\n" in capsys.readouterr().out


def test_help_goes_to_constructor_stream(capsys: pytest.CaptureFixture[str]) -> None:
    buffer = io.StringIO()
    parser = ArgsParser(program_name="tool", exit_on_help=False, stream=buffer)
    with pytest.raises(HelpShown):
        parser.parse(["-h"])
    assert buffer.getvalue().startswith("Usage:")
    assert capsys.readouterr().out == ""


def test_help_shown_is_not_a_parser_error() -> None:
    from argsparser import ArgsParserError

    assert not issubclass(HelpShown, ArgsParserError)


def test_help_discards_captured_positionals(capsys: pytest.CaptureFixture[str]) -> None:
    parser = _tool_parser()
    with pytest.raises(HelpShown):
        parser.parse(["a", "-h"])
    capsys.readouterr()
    assert parser.positional_values == ()


def test_option_added_after_help_does_not_trigger_help(capsys: pytest.CaptureFixture[str]) -> None:
    parser = ArgsParser(program_name="tool", exit_on_help=False)
    with pytest.raises(HelpShown):
        parser.parse(["--help"])
    capsys.readouterr()
    assert parser.help_id is None
    option_id = parser.add_option("--late")
    assert option_id == 0
    parser.parse(["--late"])
    assert parser.was_present("--late")
    assert capsys.readouterr().out == ""
