"""Roll six-sided dice and draw them as ASCII art."""

from __future__ import annotations

import argparse
import random
import sys
from enum import Enum
from typing import Iterable, Iterator, Sequence, TypeVar

T = TypeVar("T")

_CORNER = "+"
_HORIZ = "-"
_VERT = "|"


class RollResult(Enum):
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6

    @classmethod
    def from_number(cls, n: int) -> "RollResult":
        """Map 1-5 to their faces; anything else is a six."""
        return cls(n) if 1 <= n <= 5 else cls.SIX

    def __str__(self) -> str:
        border = _CORNER + _HORIZ * 3 + _CORNER
        rows = [f"{_VERT}{row}{_VERT}" for row in _PIPS[self]]
        return "\n".join([border, *rows, border])


_PIPS = {
    RollResult.ONE: ("   ", " * ", "   "),
    RollResult.TWO: ("  *", "   ", "*  "),
    RollResult.THREE: ("  *", " * ", "*  "),
    RollResult.FOUR: ("* *", "   ", "* *"),
    RollResult.FIVE: ("* *", " * ", "* *"),
    RollResult.SIX: ("* *", "* *", "* *"),
}


def roll(rng: random.Random | None = None) -> RollResult:
    """Roll one die."""
    source = rng if rng is not None else random
    return RollResult.from_number(source.randint(1, 6))


def multizip(iterables: Iterable[Iterable[T]]) -> Iterator[list[T]]:
    """Yield lists of one item from each iterable until any runs out."""
    for items in zip(*iterables):
        yield list(items)


def format_row(rolls: Sequence[RollResult]) -> str:
    """Draw dice side by side, separated by a space."""
    faces = [str(r).splitlines() for r in rolls]
    return "\n".join(" ".join(line) for line in multizip(faces))


def _u16(text: str) -> int:
    value = int(text)
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"{text} is out of range")
    return value


def main(argv: list[str] | None = None) -> int:
    """Roll the requested dice and print them in rows."""
    parser = argparse.ArgumentParser(
        prog="rolldice", description="Rolls some numbers of 6 sided dice."
    )
    parser.add_argument("-n", dest="number_of_dice", type=_u16, default=1, help="Number of dice")
    parser.add_argument(
        "-r", "--rowsize", dest="dice_per_row", type=_u16, default=8, help="Maximum dice per row"
    )
    config = parser.parse_args(argv)
    if config.dice_per_row == 0:
        print("--rowsize must be greater than 0", file=sys.stderr)
        return 1

    rng = random.Random()
    rolls = [roll(rng) for _ in range(config.number_of_dice)]
    per_row = config.dice_per_row
    for start in range(0, len(rolls), per_row):
        print(format_row(rolls[start:start + per_row]))
    return 0


if __name__ == "__main__":
    sys.exit(main())