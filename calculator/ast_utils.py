# calculator/ast_utils.py
from typing import Any, Dict

from .parser import Assign, BinOp, Call, Identifier, Negate, Number


def ast_to_dict(node) -> Dict[str, Any]:
    if isinstance(node, Number):
        return {"type": "Number", "value": node.value}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, Negate):
        return {"type": "Negate", "operand": ast_to_dict(node.operand)}
    if isinstance(node, Call):
        return {"type": "Call", "func": node.func.reserved, "operand": ast_to_dict(node.operand)}
    if isinstance(node, BinOp):
        return {"type": "BinOp", "op": node.op.value, "left": ast_to_dict(node.left), "right": ast_to_dict(node.right)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_dict(node.value)}
    return {"type": "Unknown", "repr": repr(node)}


def ast_to_pretty(node, indent: str = "  ") -> str:
    lines = []
    def rec(n, depth=0, label=None):
        pad = indent * depth
        pre = f"{label}: " if label else ""
        if isinstance(n, Number):
            lines.append(f"{pad}{pre}Number({n.value:g})")
        elif isinstance(n, Identifier):
            lines.append(f"{pad}{pre}Identifier({n.name})")
        elif isinstance(n, Negate):
            lines.append(f"{pad}{pre}Negate")
            rec(n.operand, depth+1, "operand")
        elif isinstance(n, Call):
            lines.append(f"{pad}{pre}Call({n.func.reserved})")
            rec(n.operand, depth+1, "operand")
        elif isinstance(n, BinOp):
            lines.append(f"{pad}{pre}BinOp({n.op.value})")
            rec(n.left, depth+1, "left")
            rec(n.right, depth+1, "right")
        elif isinstance(n, Assign):
            lines.append(f"{pad}{pre}Assign({n.name})")
            rec(n.value, depth+1, "value")
        else:
            lines.append(f"{pad}{pre}{type(n).__name__}")
    rec(node)
    return "\n".join(lines)
