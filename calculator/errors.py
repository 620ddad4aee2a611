"""Error taxonomy for the lexer, parser, evaluator and the calculator facade."""


class CalcError(Exception):
    """Base class. ``str(err)`` is the human readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self):
        return self.message


class LexError(CalcError): ...

class InvalidChar(LexError):
    def __init__(self, char: str, pos: int):
        super().__init__(f"Lexing error: invalid character {char!r} at position {pos}")
        self.char, self.pos = char, pos

class InvalidNumber(LexError):
    def __init__(self, text: str, pos: int):
        super().__init__(f"Lexing error: invalid number {text!r} at position {pos}")
        self.text, self.pos = text, pos


class ParseError(CalcError): ...

class ExpectErr(ParseError): ...
class UnknownAtom(ParseError): ...
class InvalidInput(ParseError): ...
class TokenStreamExhausted(ParseError): ...
class DepthLimitExceeded(ParseError): ...


class EvalError(CalcError): ...

class UnknownVar(EvalError):
    def __init__(self, name: str):
        super().__init__(f"Unknown variable: {name}")
        self.name = name


class CalculatorError(CalcError):
    """Single error shape raised by ``Calculator.calculate``.

    ``kind`` keeps the name of the underlying error class so callers can tell a
    lexical error from an unknown variable without parsing the message.
    """

    def __init__(self, message: str, kind: str = "CalculatorError"):
        super().__init__(message)
        self._kind = kind

    @property
    def kind(self) -> str:
        return self._kind

    @classmethod
    def wrap(cls, err: CalcError) -> "CalculatorError":
        return cls(str(err), err.kind)
