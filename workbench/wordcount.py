"""Count whitespace-separated words in files."""

from __future__ import annotations

import sys
from typing import IO, Iterable


class EmptySourceError(Exception):
    """Raised when the input holds no words at all."""

    def __init__(self, message: str = "Source contains no data"):
        super().__init__(message)


def count_words(stream: Iterable[str] | Iterable[bytes] | IO) -> int:
    """Return the number of words read from a text or binary line stream."""
    count = 0
    for line in stream:
        if isinstance(line, (bytes, bytearray)):
            line = bytes(line).decode("utf-8")
        count += len(line.split())
    if count == 0:
        raise EmptySourceError()
    return count


def main(argv: list[str] | None = None) -> int:
    """Print the word count of each named file."""
    filenames = sys.argv[1:] if argv is None else argv
    for filename in filenames:
        try:
            handle = open(filename, "rb")
        except OSError as exc:
            print(f"Error: unable to open '{filename}': {exc}", file=sys.stderr)
            return 1
        with handle:
            try:
                word_count = count_words(handle)
            except (OSError, ValueError, EmptySourceError) as exc:
                print(f"Error: unable to count words in '{filename}': {exc}", file=sys.stderr)
                return 1
        print(f"{word_count} {filename}")
    return 0


if __name__ == "__main__":
    sys.exit(main())