"""A minimal interactive shell that runs commands and pipelines."""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass, field
from typing import IO, Union

_UNQUOTED_STOP = " \t\r\n'|"
_SPACE = " \t"

Stream = Union[int, IO, None]


class ParseError(ValueError):
    """Raised when a line holds no command."""


@dataclass
class Command:
    """A program with its arguments."""

    program: str
    args: list[str] = field(default_factory=list)

    def spawn(self, stdin: Stream = None, stdout: Stream = None) -> list[subprocess.Popen]:
        """Start the program; None inherits the shell's stream."""
        return [subprocess.Popen([self.program, *self.args], stdin=stdin, stdout=stdout)]


@dataclass
class Pipeline:
    """A command whose output feeds the rest of the command line."""

    left: Command
    right: "Command | Pipeline"

    def spawn(self, stdin: Stream = None, stdout: Stream = None) -> list[subprocess.Popen]:
        """Start every command in the pipeline, left to right."""
        (left,) = self.left.spawn(stdin, subprocess.PIPE)
        try:
            right = self.right.spawn(left.stdout, stdout)
        finally:
            left.stdout.close()
        return [left, *right]


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _skip_space(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _SPACE:
            self.pos += 1

    def _arg(self) -> str | None:
        start = self.pos
        self._skip_space()
        text = self.text
        end = self.pos
        while end < len(text) and text[end] not in _UNQUOTED_STOP:
            end += 1
        if end > self.pos:
            value = text[self.pos:end]
            self.pos = end
        elif self.pos < len(text) and text[self.pos] == "'":
            close = text.find("'", self.pos + 1)
            if close < 0:
                self.pos = start
                return None
            value = text[self.pos + 1:close]
            self.pos = close + 1
        else:
            self.pos = start
            return None
        self._skip_space()
        return value

    def command(self) -> Command | None:
        args = []
        while (arg := self._arg()) is not None:
            args.append(arg)
        if not args:
            return None
        return Command(args[0], args[1:])

    def _pipe(self) -> bool:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] == "|":
            self.pos += 1
        return self.pos > start

    def command_line(self) -> Command | Pipeline | None:
        start = self.pos
        left = self.command()
        if left is None:
            return None
        after_command = self.pos
        if self._pipe():
            right = self.command_line()
            if right is not None:
                return Pipeline(left, right)
        # Not a pipeline: fall back to the single command.
        self.pos = after_command
        del start
        return left


def parse_command_line(line: str) -> Command | Pipeline:
    """Parse a command or pipeline; trailing text that does not parse is ignored."""
    result = _Parser(line).command_line()
    if result is None:
        raise ParseError(f"no command in {line!r}")
    return result


def parse_and_execute(line: str) -> list[int]:
    """Run ``line`` and wait for it; return the exit codes of its processes."""
    if not line.strip():
        return []
    try:
        executable = parse_command_line(line)
    except ParseError as exc:
        print(f"Failed to parse: {exc}", file=sys.stderr)
        return []
    try:
        children = executable.spawn(None, None)
    except OSError as exc:
        print(f"Failed to execute: {exc}", file=sys.stderr)
        return []
    return [child.wait() for child in children]


def main(argv: list[str] | None = None) -> int:
    """Read lines from the prompt and run them until end of input."""
    try:
        import readline  # noqa: F401  line editing where available
    except ImportError:
        pass
    while True:
        try:
            line = input("> ")
        except KeyboardInterrupt:
            print()
            continue
        except EOFError:
            return 0
        parse_and_execute(line)


if __name__ == "__main__":
    sys.exit(main())