import math
from typing import Dict

import numpy as np

from .errors import UnknownVar
from .parser import Assign, BinaryOp, BinOp, Call, Identifier, Negate, Number
from .tokens import FunctionKind

OPS = {
    BinaryOp.ADD: lambda a, b: a + b,
    BinaryOp.SUB: lambda a, b: a - b,
    BinaryOp.MUL: lambda a, b: a * b,
    BinaryOp.DIV: lambda a, b: a / b,
    BinaryOp.POW: lambda a, b: np.power(a, b),
}

FUNCS = {
    FunctionKind.ABS: np.abs,
    FunctionKind.FLOOR: np.floor,
    FunctionKind.LOG10: np.log10,
    FunctionKind.LN: np.log,
    FunctionKind.SIN: np.sin,
    FunctionKind.COS: np.cos,
    FunctionKind.TAN: np.tan,
    FunctionKind.ARCSIN: np.arcsin,
    FunctionKind.ARCCOS: np.arccos,
    FunctionKind.ARCTAN: np.arctan,
}


class Environment(Dict[str, float]):
    """Variables and constants visible to an expression. Names are case sensitive."""

    @classmethod
    def default(cls) -> "Environment":
        return cls(pi=math.pi, e=math.e)


def eval_node(node, env: Dict[str, float]) -> float:
    """Reduce ``node`` to a float. ``Assign`` nodes write into ``env``.

    Arithmetic is IEEE-754 float64: division by zero gives inf/nan and a
    negative base with a fractional exponent gives nan, no exception.
    """
    with np.errstate(all="ignore"):
        return float(_eval(node, env))


def _eval(node, env):
    if isinstance(node, Number):
        return np.float64(node.value)
    if isinstance(node, Identifier):
        if node.name not in env:
            raise UnknownVar(node.name)
        return np.float64(env[node.name])
    if isinstance(node, Assign):
        val = _eval(node.value, env)
        env[node.name] = float(val)
        return val
    if isinstance(node, BinOp):
        a = _eval(node.left, env)
        b = _eval(node.right, env)
        return OPS[node.op](a, b)
    if isinstance(node, Negate):
        return -_eval(node.operand, env)
    if isinstance(node, Call):
        return FUNCS[node.func](_eval(node.operand, env))
    raise TypeError(f"Unknown node {type(node).__name__}")
