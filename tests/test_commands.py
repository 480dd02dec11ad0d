from __future__ import annotations

import pytest

from file_viewer.commands import (
    CommandSpec,
    CommandSpecError,
    ResolvedCommand,
    placeholder_values,
    resolve_command,
    split_command_line,
    substitute,
)


def make_table(*specs: str) -> dict[str, CommandSpec]:
    parsed = [CommandSpec.parse(spec) for spec in specs]
    return {spec.name: spec for spec in parsed}


def test_parse_command_spec_trims_both_sides() -> None:
    spec = CommandSpec.parse("  open :  code -g {line}  ")

    assert spec == CommandSpec(name="open", template="code -g {line}")


def test_parse_keeps_colons_inside_template() -> None:
    assert CommandSpec.parse("url: open http://x:{line}").template == "open http://x:{line}"


@pytest.mark.parametrize("raw", ["no separator", ": echo", "name:", "  :  "])
def test_parse_rejects_malformed_specs(raw: str) -> None:
    with pytest.raises(CommandSpecError):
        CommandSpec.parse(raw)


def test_resolve_with_cursor_and_args() -> None:
    table = make_table("e: echo {line} {col} {args}")

    resolution = resolve_command("e hello", table, (0, 0))

    assert resolution.status == "resolved"
    assert resolution.command == ResolvedCommand("echo", ("1", "1", "hello"))
    assert resolution.command.argv == ["echo", "1", "1", "hello"]


def test_selection_placeholders_default_to_cursor() -> None:
    values = placeholder_values((4, 2))

    assert values["start_line"] == values["end_line"] == "5"
    assert values["start_col"] == values["end_col"] == "3"
    assert values["args"] == ""


def test_selection_placeholders_use_bounds() -> None:
    table = make_table("r: run {start_line}:{start_col}-{end_line}:{end_col}")

    resolution = resolve_command("r", table, (2, 5), selection=((0, 1), (2, 5)))

    assert resolution.command == ResolvedCommand("run", ("1:2-3:6",))


def test_args_are_split_on_whitespace() -> None:
    table = make_table("g: grep {args}")

    resolution = resolve_command("g  needle   haystack ", table, (0, 0))

    assert resolution.command == ResolvedCommand("grep", ("needle", "haystack"))


def test_args_are_not_rescanned_for_placeholders() -> None:
    assert substitute("say {args}", {"args": "{line}", "line": "9"}) == "say {line}"


def test_unknown_command() -> None:
    resolution = resolve_command("missing arg", make_table("e: echo"), (0, 0))

    assert resolution.status == "unknown"
    assert resolution.name == "missing"
    assert resolution.command is None


def test_template_empty_after_substitution() -> None:
    resolution = resolve_command("a", make_table("a: {args}"), (0, 0))

    assert resolution.status == "empty"
    assert resolution.command is None


def test_split_command_line_on_first_whitespace() -> None:
    assert split_command_line("  name\tsome  args ") == ("name", "some  args")
    assert split_command_line("solo") == ("solo", "")
    assert split_command_line("") == ("", "")
