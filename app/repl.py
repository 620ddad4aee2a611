"""Interactive read-eval-print loop over one calculator session."""
import logging
from typing import Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory, InMemoryHistory

from calculator.calculator import Calculator
from calculator.errors import CalculatorError
from calculator.formatting import format_value
from calculator.tokens import FunctionKind

log = logging.getLogger(__name__)

QUIT = "#quit"
BANNER = (
    "Welcome to the calculator!\n"
    "Arithmetic, variables (x = 2) and abs, floor, log, ln and trig functions are supported.\n"
    f"Use Ctrl-C or type {QUIT} to quit."
)


def make_session(calculator: Calculator, history_file: Optional[str] = None) -> PromptSession:
    words = [f.reserved for f in FunctionKind] + sorted(calculator.env)
    history = FileHistory(history_file) if history_file else InMemoryHistory()
    return PromptSession(history=history, completer=WordCompleter(words, sentence=True))


def run_repl(calculator: Optional[Calculator] = None, session=None,
             echo: Callable[[str], None] = print) -> Calculator:
    """Run until ``#quit``, Ctrl-C or Ctrl-D. Returns the session's calculator.

    ``session`` is anything with a ``prompt(message)`` method; a
    prompt_toolkit ``PromptSession`` is built when it is omitted.
    """
    calculator = calculator if calculator is not None else Calculator.new()
    if session is None:
        from calculator.settings import get_settings
        session = make_session(calculator, get_settings().history_file)

    echo(BANNER)
    while True:
        try:
            line = session.prompt(">> ")
        except KeyboardInterrupt:
            echo("CTRL-C")
            break
        except EOFError:
            echo("CTRL-D")
            break

        if line.strip() == QUIT:
            break
        if not line.strip():
            continue

        try:
            echo(format_value(calculator.calculate(line)))
        except CalculatorError as e:
            echo(str(e))
    log.debug("repl finished after %d calculations", len(calculator.get_log()))
    return calculator
