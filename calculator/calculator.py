"""Calculator facade: owns the session environment and the calculation log."""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .errors import CalcError, CalculatorError
from .eval import Environment, eval_node
from .lexer import Lexer
from .parser import Parser

log = logging.getLogger(__name__)

Calculation = Tuple[str, float]


def balance_parens(text: str) -> str:
    """Close unclosed ``(`` at the end, drop surplus trailing ``)``.

    Surplus ``)`` that are not at the end of the text are left alone so the
    parser reports them rather than the expression silently changing meaning.
    """
    depth = text.count("(") - text.count(")")
    if depth > 0:
        return text + ")" * depth
    if depth < 0:
        surplus = -depth
        body = text.rstrip()
        tail = text[len(body):]
        while surplus and body.endswith(")"):
            body = body[:-1]
            surplus -= 1
        return body + tail
    return text


class Calculator:
    """Stateful calculator session.

    Not thread safe: a host sharing one instance between callers must
    serialize calls to ``calculate``.
    """

    def __init__(self, env: Optional[Dict[str, float]] = None,
                 calcs: Optional[Iterable[Calculation]] = None,
                 max_depth: Optional[int] = None):
        self._env = Environment.default() if env is None else Environment(env)
        self._log: List[Calculation] = [] if calcs is None else [(str(t), float(v)) for t, v in calcs]
        self.max_depth = max_depth

    @classmethod
    def new(cls) -> "Calculator":
        return cls()

    @classmethod
    def from_state(cls, env: Dict[str, float], calcs: Iterable[Calculation]) -> "Calculator":
        return cls(env=env, calcs=calcs)

    @property
    def env(self) -> Dict[str, float]:
        return dict(self._env)

    def get_log(self) -> Tuple[Calculation, ...]:
        return tuple(self._log)

    def log_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self._log, columns=["input", "value"])

    def calculate(self, text: str) -> float:
        balanced = balance_parens(text)
        if balanced != text:
            log.debug("balanced parens %r -> %r", text, balanced)
        # evaluate against a copy so a failure halfway through leaves no assignment behind
        scratch = Environment(self._env)
        try:
            expr = Parser(Lexer(balanced), max_depth=self.max_depth).parse()
            value = eval_node(expr, scratch)
        except CalcError as e:
            log.info("calculation failed for %r: %s (%s)", balanced, e, e.kind)
            raise CalculatorError.wrap(e) from e
        except RecursionError as e:
            # only reachable with a max_depth set above what the interpreter stack allows
            log.info("calculation too deep for %r", balanced)
            raise CalculatorError("Expression nested too deeply", "DepthLimitExceeded") from e
        self._env = scratch
        self._log.append((balanced, value))
        return value


def session_calculate(env: Dict[str, float], calcs: Iterable[Calculation],
                      text: str) -> Tuple[float, Dict[str, float], List[Calculation]]:
    """Functional form: previous state in, ``(value, new_env, new_log)`` out.

    Raises ``CalculatorError``; the inputs are never modified.
    """
    calc = Calculator.from_state(env, calcs)
    value = calc.calculate(text)
    return value, calc.env, list(calc.get_log())
