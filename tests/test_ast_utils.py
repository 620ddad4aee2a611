from calculator.analyzer import analyze
from calculator.ast_utils import ast_to_dict, ast_to_pretty
from calculator.formatting import format_value
from calculator.parser import parse_expression


def test_ast_to_dict():
    assert ast_to_dict(parse_expression("-x + abs(2)")) == {
        "type": "BinOp",
        "op": "+",
        "left": {"type": "Negate", "operand": {"type": "Identifier", "name": "x"}},
        "right": {"type": "Call", "func": "abs", "operand": {"type": "Number", "value": 2.0}},
    }


def test_ast_to_pretty():
    assert ast_to_pretty(parse_expression("y = 2^x")) == "\n".join([
        "Assign(y)",
        "  value: BinOp(^)",
        "    left: Number(2)",
        "    right: Identifier(x)",
    ])


def test_analyze():
    an = analyze(parse_expression("a = b + sin(c) - ln(b)"))
    assert an.assigned == {"a"}
    assert an.variables == {"b", "c"}
    assert an.functions == {"sin", "ln"}


def test_format_value():
    assert format_value(6.0) == "6"
    assert format_value(-2.0) == "-2"
    assert format_value(0.5) == "0.5"
    assert format_value(float("inf")) == "inf"
    assert format_value(float("-inf")) == "-inf"
    assert format_value(float("nan")) == "NaN"
    assert format_value(1e20) == "100000000000000000000"
    assert format_value(-1e17) == "-100000000000000000"
    assert format_value(1.5e-7) == "1.5e-07"
