import subprocess
import sys

import pytest

from workbench.shell import (
    Command,
    ParseError,
    Pipeline,
    parse_and_execute,
    parse_command_line,
)

PY = sys.executable


def test_parse_simple_command():
    assert parse_command_line("ls -l /tmp") == Command("ls", ["-l", "/tmp"])


def test_parse_quoted_argument_keeps_spaces():
    assert parse_command_line("echo 'a b'  c") == Command("echo", ["a b", "c"])


def test_parse_pipeline():
    result = parse_command_line("cat file | grep x | wc")
    assert result == Pipeline(
        Command("cat", ["file"]),
        Pipeline(Command("grep", ["x"]), Command("wc", [])),
    )


def test_dangling_pipe_falls_back_to_command():
    assert parse_command_line("ls |") == Command("ls", [])


def test_empty_line_is_parse_error():
    with pytest.raises(ParseError):
        parse_command_line("   ")


def test_leading_pipe_is_parse_error():
    with pytest.raises(ParseError):
        parse_command_line("| ls")


def test_unterminated_quote_stops_arguments():
    assert parse_command_line("echo 'oops") == Command("echo", [])


def test_command_spawn_captures_output():
    command = parse_command_line(f"'{PY}' -c 'print(42)'")
    (child,) = command.spawn(None, subprocess.PIPE)
    out, _ = child.communicate()
    assert out.strip() == b"42"


def test_pipeline_spawn_connects_processes():
    line = (
        f"'{PY}' -c 'print(\"hello\")' | "
        f"'{PY}' -c 'import sys; sys.stdout.write(sys.stdin.read().upper())'"
    )
    pipeline = parse_command_line(line)
    children = pipeline.spawn(None, subprocess.PIPE)
    assert len(children) == 2
    out, _ = children[-1].communicate()
    children[0].wait()
    assert out.strip() == b"HELLO"


def test_parse_and_execute_returns_exit_codes():
    codes = parse_and_execute(f"'{PY}' -c 'import sys; sys.exit(3)'")
    assert codes == [3]


def test_parse_and_execute_blank_line():
    assert parse_and_execute("   ") == []


def test_parse_and_execute_missing_program(capsys):
    assert parse_and_execute("no-such-program-anywhere-xyz") == []
    assert "Failed to execute" in capsys.readouterr().err