import math


def format_value(value: float) -> str:
    """Render a result the way the REPL and the web front end print it."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        # full digits, never exponent notation: 1e20 prints as 100000000000000000000
        return str(int(value))
    return repr(value)
