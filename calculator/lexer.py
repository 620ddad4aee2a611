"""Lexer: raw text to a lazy stream of ``Token``.

Scanning is delegated to a lark basic lexer; this module turns lark tokens into
calculator tokens and makes ``EOF`` an absorbing end of the stream.
"""
import logging
from typing import Iterator, List

from lark import Lark, UnexpectedCharacters

from .errors import InvalidChar, InvalidNumber
from .tokens import (
    CARET, EOF, EQUALS, LPAREN, MINUS, PLUS, RPAREN, SLASH, STAR,
    FunctionKind, Token,
)

log = logging.getLogger(__name__)

_PUNCT = {
    "PLUS": ("+", PLUS),
    "MINUS": ("-", MINUS),
    "STAR": ("*", STAR),
    "SLASH": ("/", SLASH),
    "CARET": ("^", CARET),
    "LPAREN": ("(", LPAREN),
    "RPAREN": (")", RPAREN),
    "EQUALS": ("=", EQUALS),
}

# Reserved names are string terminals that collide with NAME; lark's basic
# lexer retypes a NAME match only when the whole run equals the keyword, so
# "sinx" stays an identifier.
GRAMMAR = "\n".join([
    "start: _token*",
    "_token: NUMBER | NAME | " + " | ".join([f.name for f in FunctionKind] + list(_PUNCT)),
    "NUMBER: /[0-9][0-9.]*/",
    "NAME: /[A-Za-z][A-Za-z_]*/",
    *[f'{f.name}: "{f.reserved}"' for f in FunctionKind],
    *[f'{name}: "{ch}"' for name, (ch, _) in _PUNCT.items()],
    r"%ignore /[ \t\n]+/",
])

_lark = Lark(GRAMMAR, start="start", parser="lalr", lexer="basic")


def _number(text: str, pos: int) -> Token:
    if text.count(".") > 1:
        raise InvalidNumber(text, pos)
    return Token.number(float(text), pos)


def _convert(tok) -> Token:
    pos = tok.start_pos
    if tok.type == "NUMBER":
        return _number(str(tok), pos)
    if tok.type == "NAME":
        return Token.identifier(str(tok), pos)
    if tok.type in _PUNCT:
        return Token(_PUNCT[tok.type][1].kind, None, pos)
    return Token.function(FunctionKind[tok.type], pos)


class Lexer:
    """Pull-based token iterator.

    Never raises ``StopIteration``: once the text is consumed every further
    ``next()`` returns ``EOF``.
    """

    def __init__(self, source: str = ""):
        self.set_source(source)

    def set_source(self, source: str):
        self.source = source
        self._stream: Iterator = _lark.lex(source)
        self._eof = Token(EOF.kind, None, len(source))

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        try:
            tok = next(self._stream)
        except StopIteration:
            return self._eof
        except UnexpectedCharacters as e:
            raise InvalidChar(e.char, e.pos_in_stream) from e
        return _convert(tok)


def tokenize(text: str) -> List[Token]:
    out = []
    for tok in Lexer(text):
        out.append(tok)
        if tok == EOF:
            break
    log.debug("tokens %r -> %s", text, [str(t) for t in out])
    return out
