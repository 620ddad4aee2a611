from dataclasses import dataclass, field
from typing import Set

from .parser import Assign, BinOp, Call, Identifier, Negate, Number


@dataclass
class Analysis:
    variables: Set[str] = field(default_factory=set)
    assigned: Set[str] = field(default_factory=set)
    functions: Set[str] = field(default_factory=set)


def analyze(node) -> Analysis:
    """Collect the names an expression reads, the names it writes and the functions it applies."""
    an = Analysis()

    def walk(n):
        if isinstance(n, Identifier):
            an.variables.add(n.name)
        elif isinstance(n, Assign):
            an.assigned.add(n.name)
            walk(n.value)
        elif isinstance(n, Call):
            an.functions.add(n.func.reserved)
            walk(n.operand)
        elif isinstance(n, Negate):
            walk(n.operand)
        elif isinstance(n, BinOp):
            walk(n.left)
            walk(n.right)
        elif not isinstance(n, Number):
            raise TypeError(f"Unknown node {type(n).__name__}")

    walk(node)
    return an
