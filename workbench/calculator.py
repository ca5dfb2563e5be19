"""A small desk calculator: tokenizer and recursive-descent evaluator."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import Callable, Iterable, Iterator


class TokenKind(Enum):
    NAME = auto()
    NUMBER = auto()
    PLUS = auto()
    MINUS = auto()
    MUL = auto()
    DIV = auto()
    PRINT = auto()
    ASSIGN = auto()
    LP = auto()
    RP = auto()


@dataclass(frozen=True)
class Token:
    """A lexical token; ``value`` holds the name or the number."""

    kind: TokenKind
    value: str | float | None = None


_SINGLE_CHAR_TOKENS = {
    ";": TokenKind.PRINT,
    "*": TokenKind.MUL,
    "/": TokenKind.DIV,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "(": TokenKind.LP,
    ")": TokenKind.RP,
    "=": TokenKind.ASSIGN,
}


class _CalculationError(Exception):
    pass


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        return format(Decimal(text), "f")
    return text


def _divide(left: float, right: float) -> float:
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


class Calculator:
    """Evaluates a stream of tokens, one result line per expression."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._current: Token | None = None
        self.symbols: dict[str, float] = {"pi": math.pi, "e": math.e}

    def _next(self) -> Token | None:
        return next(self._tokens, None)

    def _current_kind(self) -> TokenKind | None:
        return self._current.kind if self._current is not None else None

    def calculate(self) -> list[str]:
        """Evaluate every expression and return the printed results."""
        results = []
        while (token := self._next()) is not None:
            if token.kind is TokenKind.PRINT:
                continue
            try:
                results.append(_format_number(self._expr(token)))
            except _CalculationError as exc:
                results.append(str(exc))
        return results

    def _expr(self, token: Token | None = None) -> float:
        left = self._term(token)
        while True:
            kind = self._current_kind()
            if kind is TokenKind.PLUS:
                left += self._term()
            elif kind is TokenKind.MINUS:
                left -= self._term()
            else:
                return left

    def _term(self, token: Token | None = None) -> float:
        left = self._prim(token)
        while True:
            kind = self._current_kind()
            if kind is TokenKind.MUL:
                left *= self._prim()
            elif kind is TokenKind.DIV:
                left = _divide(left, self._prim())
            else:
                return left

    def _prim(self, token: Token | None = None) -> float:
        if token is None:
            token = self._next()
        kind = token.kind if token is not None else None

        if kind is TokenKind.NAME:
            name = token.value
            value = self.symbols.get(name, 0.0)
            self._current = self._next()
            if self._current_kind() is TokenKind.ASSIGN:
                value = self._expr()
                self.symbols[name] = value
            return value
        if kind is TokenKind.NUMBER:
            self._current = self._next()
            return float(token.value)
        if kind is TokenKind.MINUS:
            return -self._prim()
        if kind is TokenKind.LP:
            value = self._expr()
            if self._current_kind() is TokenKind.RP:
                self._current = self._next()
                return value
            raise _CalculationError("unmatched parenthesis")
        raise _CalculationError("primary expected")


def _run_end(text: str, pos: int, accept: Callable[[str], bool]) -> int:
    # A run that reaches the end of the input is not extended.
    return next((i for i, c in enumerate(text[pos:], pos) if not accept(c)), pos)


def _is_number_char(c: str) -> bool:
    return "0" <= c <= "9" or c == "."


def _is_name_char(c: str) -> bool:
    return c.isalpha() or c == "_"


def tokenize(text: str) -> Iterator[Token]:
    """Yield tokens from ``text``; stops at the first character it cannot use."""
    pos = 0
    while pos < len(text):
        begin = pos
        ch = text[pos]
        pos += 1

        if ch in _SINGLE_CHAR_TOKENS:
            yield Token(_SINGLE_CHAR_TOKENS[ch])
        elif _is_number_char(ch):
            pos = _run_end(text, pos, _is_number_char)
            try:
                number = float(text[begin:pos])
            except ValueError:
                return
            yield Token(TokenKind.NUMBER, number)
        elif ch.isalpha():
            pos = _run_end(text, pos, _is_name_char)
            yield Token(TokenKind.NAME, text[begin:pos])
        elif ch.isspace():
            continue
        else:
            return


def main(argv: list[str] | None = None) -> int:
    """Evaluate each argument as a program and print its results."""
    programs = sys.argv[1:] if argv is None else argv
    for program in programs:
        print(f"Calculating {program}")
        for line in Calculator(tokenize(program)).calculate():
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())