import pytest

from calculator.errors import InvalidChar, InvalidNumber
from calculator.lexer import Lexer, tokenize
from calculator.tokens import (
    CARET, EOF, EQUALS, LPAREN, MINUS, PLUS, RPAREN, SLASH, STAR,
    FunctionKind, Precedence, Token,
)


def test_num_token():
    assert tokenize("345671") == [Token.number(345671), EOF]


def test_mult_num_tokens():
    assert tokenize("7560 2371 2903") == [Token.number(7560), Token.number(2371), Token.number(2903), EOF]


def test_decimal():
    assert tokenize("3.25 1.") == [Token.number(3.25), Token.number(1.0), EOF]


@pytest.mark.parametrize("src, tok", [
    ("+", PLUS), ("-", MINUS), ("*", STAR), ("/", SLASH),
    ("^", CARET), ("(", LPAREN), (")", RPAREN), ("=", EQUALS),
])
def test_single_char_tokens(src, tok):
    assert tokenize(src) == [tok, EOF]


def test_ident():
    assert tokenize("lol") == [Token.identifier("lol"), EOF]


def test_ident_with_underscore():
    assert tokenize("undefined_var") == [Token.identifier("undefined_var"), EOF]


@pytest.mark.parametrize("name, kind", [
    ("abs", FunctionKind.ABS), ("floor", FunctionKind.FLOOR), ("log", FunctionKind.LOG10),
    ("ln", FunctionKind.LN), ("sin", FunctionKind.SIN), ("arcsin", FunctionKind.ARCSIN),
    ("arctan", FunctionKind.ARCTAN),
])
def test_reserved_functions(name, kind):
    assert tokenize(name) == [Token.function(kind), EOF]


@pytest.mark.parametrize("name", ["Sin", "sinx", "absolute", "lnx"])
def test_near_reserved_names_are_identifiers(name):
    assert tokenize(name) == [Token.identifier(name), EOF]


def test_juxtaposed_atoms():
    assert tokenize("2pi") == [Token.number(2), Token.identifier("pi"), EOF]
    assert tokenize("x2") == [Token.identifier("x"), Token.number(2), EOF]
    assert tokenize("5sin(x)") == [Token.number(5), Token.function(FunctionKind.SIN), LPAREN,
                                   Token.identifier("x"), RPAREN, EOF]


def test_whitespace_skipped():
    assert tokenize("\t1\n+  2 ") == [Token.number(1), PLUS, Token.number(2), EOF]


def test_positions():
    toks = tokenize("1 + x")
    assert [t.pos for t in toks] == [0, 2, 4, 5]


def test_invalid_char():
    with pytest.raises(InvalidChar) as exc:
        tokenize("1 % 2")
    assert exc.value.char == "%"
    assert exc.value.pos == 2
    assert exc.value.kind == "InvalidChar"


def test_invalid_char_is_lazy():
    lexer = Lexer("1 + $")
    assert next(lexer) == Token.number(1)
    assert next(lexer) == PLUS
    with pytest.raises(InvalidChar):
        next(lexer)


def test_multiple_decimal_points_rejected():
    with pytest.raises(InvalidNumber):
        tokenize("1.2.3")


def test_eof_is_absorbing():
    lexer = Lexer("1")
    assert next(lexer) == Token.number(1)
    for _ in range(3):
        assert next(lexer) == EOF


def test_set_source_reseats():
    lexer = Lexer("1")
    next(lexer)
    next(lexer)
    lexer.set_source("x")
    assert next(lexer) == Token.identifier("x")
    assert next(lexer) == EOF


def test_precedence_levels():
    assert PLUS.precedence == MINUS.precedence == Precedence.SUM
    assert STAR.precedence == SLASH.precedence == Precedence.PRODUCT
    assert CARET.precedence == Precedence.POWER
    assert Token.function(FunctionKind.SIN).precedence == Precedence.FUNCTION
    assert EQUALS.precedence == Precedence.ASSIGNMENT
    assert Token.number(1).precedence == Precedence.LOWEST
    assert Precedence.LOWEST < Precedence.SUM < Precedence.PRODUCT < Precedence.POWER \
        < Precedence.FUNCTION < Precedence.PREFIX < Precedence.ASSIGNMENT


def test_token_str():
    assert str(Token.number(2)) == "Num(2)"
    assert str(Token.function(FunctionKind.LOG10)) == "log"
    assert str(RPAREN) == ")"
    assert str(EOF) == "EndOfInput"
