"""Precedence-climbing parser producing an immutable AST."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from .errors import (
    DepthLimitExceeded, ExpectErr, InvalidInput, TokenStreamExhausted, UnknownAtom,
)
from .lexer import Lexer
from .tokens import FunctionKind, Precedence, Token, TokenKind

log = logging.getLogger(__name__)


class BinaryOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class Node: ...

@dataclass(frozen=True)
class Number(Node):
    value: float

@dataclass(frozen=True)
class Identifier(Node):
    name: str

@dataclass(frozen=True)
class BinOp(Node):
    op: BinaryOp
    left: Node
    right: Node

@dataclass(frozen=True)
class Negate(Node):
    operand: Node

@dataclass(frozen=True)
class Call(Node):
    func: FunctionKind
    operand: Node

@dataclass(frozen=True)
class Assign(Node):
    name: str
    value: Node


Expr = Union[Number, Identifier, BinOp, Negate, Call, Assign]

# infix token -> (AST operator, precedence the right operand is parsed at)
INFIX = {
    TokenKind.PLUS: (BinaryOp.ADD, Precedence.SUM),
    TokenKind.MINUS: (BinaryOp.SUB, Precedence.SUM),
    TokenKind.STAR: (BinaryOp.MUL, Precedence.PRODUCT),
    TokenKind.SLASH: (BinaryOp.DIV, Precedence.PRODUCT),
    TokenKind.CARET: (BinaryOp.POW, Precedence.POWER),
}

# tokens that start an implicit product after a number / identifier
_JUXTAPOSE_AFTER_NUMBER = {TokenKind.LPAREN, TokenKind.FUNCTION, TokenKind.IDENTIFIER}
_JUXTAPOSE_AFTER_NAME = {TokenKind.LPAREN, TokenKind.NUMBER, TokenKind.FUNCTION}


class Parser:
    """Two-token window over a token source.

    ``current`` is the token being examined, ``peek`` the one after it.
    """

    def __init__(self, tokens: Iterable[Token], max_depth: Optional[int] = None):
        if max_depth is None:
            from .settings import get_settings
            max_depth = get_settings().max_depth
        self.max_depth = max_depth
        self._depth = 0
        self._heights = {}
        self._tokens = iter(tokens)
        self.current = self._pull()
        self.peek = self._pull() if self.current.kind is not TokenKind.EOF else self.current

    def _pull(self) -> Token:
        try:
            return next(self._tokens)
        except StopIteration:
            raise TokenStreamExhausted("Token stream ended without EndOfInput") from None

    def next_token(self):
        self.current = self.peek
        if self.peek.kind is not TokenKind.EOF:
            self.peek = self._pull()

    def parse(self) -> Expr:
        expr = self.parse_expr(Precedence.LOWEST)
        if self.current.kind is not TokenKind.EOF:
            raise InvalidInput(f"Unexpected trailing token: {self.current}")
        log.debug("parsed %r", expr)
        return expr

    def parse_expr(self, prec: Precedence) -> Expr:
        self._depth += 1
        if self._depth > self.max_depth:
            raise DepthLimitExceeded(f"Expression nested deeper than {self.max_depth} levels")
        try:
            left = self.parse_atom()
            while prec < self.current.precedence and self.current.kind is not TokenKind.EOF:
                left = self.parse_infix_op(left)
            return left
        finally:
            self._depth -= 1

    def parse_infix_op(self, left: Expr) -> Expr:
        if self.current.kind not in INFIX:
            raise InvalidInput(f"Expected an infix operator, got {self.current}")
        op, prec = INFIX[self.current.kind]
        self.next_token()
        return self._node(BinOp, op, left, self.parse_expr(prec))

    def _node(self, cls, *args) -> Expr:
        # long flat chains (1+1+...+1) build tall trees without nesting parse_expr
        node = cls(*args)
        height = 1 + max((self._heights.get(id(a), 1) for a in args if isinstance(a, Node)), default=0)
        if height > self.max_depth:
            raise DepthLimitExceeded(f"Expression nested deeper than {self.max_depth} levels")
        self._heights[id(node)] = height
        return node

    def parse_atom(self) -> Expr:
        tok = self.current
        kind = tok.kind

        if kind is TokenKind.MINUS:
            self.next_token()
            return self._node(Negate, self.parse_expr(Precedence.PREFIX))

        if kind is TokenKind.NUMBER:
            self.next_token()
            return self._juxtapose(Number(tok.value), _JUXTAPOSE_AFTER_NUMBER)

        if kind is TokenKind.FUNCTION:
            self.next_token()
            return self._node(Call, tok.value, self.parse_expr(Precedence.FUNCTION))

        if kind is TokenKind.IDENTIFIER:
            self.next_token()
            if self.current.kind is TokenKind.EQUALS:
                self.next_token()
                # the value absorbs the rest of the expression: x = 1 + 2 stores 3
                return self._node(Assign, tok.value, self.parse_expr(Precedence.LOWEST))
            return self._juxtapose(Identifier(tok.value), _JUXTAPOSE_AFTER_NAME)

        if kind is TokenKind.LPAREN:
            self.next_token()
            inner = self.parse_expr(Precedence.LOWEST)
            self.expect(TokenKind.RPAREN)
            return self._juxtapose(inner, {TokenKind.LPAREN})

        raise UnknownAtom(f"Unknown atom: {tok}")

    def _juxtapose(self, left: Expr, starters) -> Expr:
        # 3(2+1), 2pi, 5sin(x), (a)(b)
        if self.current.kind in starters:
            return self._node(BinOp, BinaryOp.MUL, left, self.parse_expr(Precedence.PRODUCT))
        return left

    def expect(self, kind: TokenKind):
        if self.current.kind is not kind:
            raise ExpectErr(f"Expected {kind.value}, got {self.current}")
        self.next_token()


def parse_expression(src: str, max_depth: Optional[int] = None) -> Expr:
    return Parser(Lexer(src), max_depth=max_depth).parse()
