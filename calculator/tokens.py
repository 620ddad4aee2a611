"""Shared vocabulary: token kinds, reserved functions and precedence levels."""
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional


class Precedence(IntEnum):
    LOWEST = 0
    SUM = 1
    PRODUCT = 2
    POWER = 3
    FUNCTION = 4
    PREFIX = 5
    ASSIGNMENT = 6


class FunctionKind(Enum):
    ABS = ("abs", "absolute value")
    FLOOR = ("floor", "largest integer not greater than x")
    LOG10 = ("log", "base 10 logarithm")
    LN = ("ln", "natural logarithm")
    SIN = ("sin", "sine (radians)")
    COS = ("cos", "cosine (radians)")
    TAN = ("tan", "tangent (radians)")
    ARCSIN = ("arcsin", "inverse sine, result in radians")
    ARCCOS = ("arccos", "inverse cosine, result in radians")
    ARCTAN = ("arctan", "inverse tangent, result in radians")

    def __init__(self, reserved: str, doc: str):
        self.reserved = reserved
        self.doc = doc

    @classmethod
    def from_name(cls, name: str) -> Optional["FunctionKind"]:
        return _RESERVED.get(name)


_RESERVED = {f.reserved: f for f in FunctionKind}


class TokenKind(Enum):
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    LPAREN = "("
    RPAREN = ")"
    EQUALS = "="
    FUNCTION = "function"
    IDENTIFIER = "identifier"
    EOF = "EndOfInput"


_PRECEDENCE = {
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.STAR: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.CARET: Precedence.POWER,
    TokenKind.FUNCTION: Precedence.FUNCTION,
    TokenKind.EQUALS: Precedence.ASSIGNMENT,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any = None
    pos: int = field(default=-1, compare=False)

    @classmethod
    def number(cls, n: float, pos: int = -1) -> "Token":
        return cls(TokenKind.NUMBER, float(n), pos)

    @classmethod
    def function(cls, f: FunctionKind, pos: int = -1) -> "Token":
        return cls(TokenKind.FUNCTION, f, pos)

    @classmethod
    def identifier(cls, name: str, pos: int = -1) -> "Token":
        return cls(TokenKind.IDENTIFIER, name, pos)

    @property
    def precedence(self) -> Precedence:
        return _PRECEDENCE.get(self.kind, Precedence.LOWEST)

    def __str__(self):
        if self.kind is TokenKind.NUMBER:
            return f"Num({self.value:g})"
        if self.kind is TokenKind.FUNCTION:
            return self.value.reserved
        if self.kind is TokenKind.IDENTIFIER:
            return self.value
        return self.kind.value


PLUS = Token(TokenKind.PLUS)
MINUS = Token(TokenKind.MINUS)
STAR = Token(TokenKind.STAR)
SLASH = Token(TokenKind.SLASH)
CARET = Token(TokenKind.CARET)
LPAREN = Token(TokenKind.LPAREN)
RPAREN = Token(TokenKind.RPAREN)
EQUALS = Token(TokenKind.EQUALS)
EOF = Token(TokenKind.EOF)


def list_functions():
    return [{"name": f.reserved, "kind": f.name, "doc": f.doc} for f in FunctionKind]
