"""Colorize kernel and system log lines read from standard input."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Iterable

from termcolor import colored

_RE_LOG = re.compile(
    r"\[(?P<time0>\d{5}\.\d{3})]\s+"
    r"(?P<time1>\d{5}:\d{5})>\s*"
    r"(?P<content>"
    r"\[(?P<tag>\w+):(?P<source>.*)]\s*"
    r"(?P<text>.*)"
    r")"
)

_RE_KERNEL_LOG = re.compile(
    r"\[(?P<time0>\d{5}\.\d{3})]\s+"
    r"(?P<time1>\d{5}:\d{5})>\s*"
    r"(?P<content>"
    r"(((?P<tag>[A-Z]+):\s+)?((?P<source>[a-zA-Z0-9_\-\.\(\)]+):\s+)?)?"
    r"(?P<text>.*)"
    r")?"
)

_TAG_CLASSES = {
    "ERROR": ".error",
    "WARNING": ".warning",
    "INFO": ".info",
}

DEFAULT_STYLES = (
    (".text", "light_grey"),
    (".time", "cyan"),
    (".source", "light_green"),
    (".thread", "cyan"),
    (".info", "white"),
    (".warning", "magenta"),
    (".error", "red"),
)


class ParseError(Exception):
    """Raised when a line looks like a log line but cannot be classified."""


class StyleSheet:
    """Maps style classes such as ``.time`` to terminal colors."""

    def __init__(self, entries: Iterable[tuple[str, str]] = DEFAULT_STYLES):
        self._colors = dict(entries)

    def color_of(self, css_class: str) -> str:
        """Return the color of ``css_class``; raise KeyError if it is unknown."""
        try:
            return self._colors[css_class]
        except KeyError:
            raise KeyError(f"class not found: {css_class}") from None


@dataclass(frozen=True)
class Field:
    """A piece of a log line with the text around it and its style class."""

    prefix: str
    css_class: str
    content: str
    postfix: str = ""

    def format(self, style_sheet: StyleSheet) -> str:
        """Render the field with colors from ``style_sheet``."""
        text_color = style_sheet.color_of(".text")
        return (
            colored(self.prefix, text_color)
            + colored(self.content, style_sheet.color_of(self.css_class))
            + colored(self.postfix, text_color)
        )


def _group(match: re.Match, name: str) -> str:
    value = match.group(name)
    if value is None:
        raise ParseError("missing field")
    return value


def _parse_tagged(match: re.Match) -> list[Field]:
    tag = _group(match, "tag")
    css_class = _TAG_CLASSES.get(tag)
    if css_class is None:
        raise ParseError("unmatched line")
    return [
        Field("[", ".time", _group(match, "time0"), "]"),
        Field(" ", ".time", _group(match, "time1"), ">"),
        Field(" [", css_class, tag, ":"),
        Field("", ".source", _group(match, "source"), "]"),
        Field(" ", css_class, _group(match, "text")),
    ]


def _parse_kernel(match: re.Match) -> list[Field]:
    fields = [
        Field("[", ".time", _group(match, "time0"), "]"),
        Field(" ", ".time", _group(match, "time1"), ">"),
    ]
    if match.group("content") is None:
        return fields

    tag = match.group("tag")
    source = match.group("source")
    if tag is not None:
        css_class = _TAG_CLASSES.get(tag)
        # An unknown tag is treated as a source.
        fields.append(Field(" ", css_class or ".source", tag, ":"))
        if source is not None:
            fields.append(Field(" ", ".source", source, ":"))
        fields.append(Field(" ", css_class or ".text", _group(match, "text")))
    elif source is not None:
        fields.append(Field(" ", ".source", source, ":"))
        fields.append(Field(" ", ".text", _group(match, "text")))
    else:
        fields.append(Field(" ", ".text", _group(match, "text")))
    return fields


def parse_line(line: str) -> list[Field]:
    """Split a log line into styled fields."""
    match = _RE_LOG.search(line)
    if match is not None:
        return _parse_tagged(match)
    match = _RE_KERNEL_LOG.search(line)
    if match is not None:
        return _parse_kernel(match)
    return [Field("", ".text", line.strip(), "")]


def main(argv: list[str] | None = None) -> int:
    """Colorize standard input line by line onto standard output."""
    style_sheet = StyleSheet()
    for line in sys.stdin:
        try:
            fields = parse_line(line)
        except ParseError:
            sys.stdout.write(line)
            continue
        sys.stdout.write("".join(field.format(style_sheet) for field in fields) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())