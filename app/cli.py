"""Command line entry point: ``calculator repl``, ``calculator web``, ``calculator eval``."""
from typing import List, Optional

import typer

from calculator.calculator import Calculator
from calculator.errors import CalculatorError
from calculator.formatting import format_value
from calculator.logging_utils import configure_logging
from calculator.settings import get_settings

cli = typer.Typer(help="Calculator REPL/Web interface", no_args_is_help=True)


@cli.callback()
def main(log_level: Optional[str] = typer.Option(None, help="Overrides CALC_LOG_LEVEL")):
    configure_logging(log_level)


@cli.command()
def repl(history_file: Optional[str] = typer.Option(None, help="File to keep input history in")):
    """Start the interactive calculator."""
    from .repl import make_session, run_repl

    calculator = Calculator.new()
    run_repl(calculator, make_session(calculator, history_file or get_settings().history_file))


@cli.command()
def web(host: Optional[str] = typer.Option(None), port: Optional[int] = typer.Option(None)):
    """Start the web interface."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=host or settings.host, port=port or settings.port)


@cli.command("eval")
def eval_(expressions: List[str] = typer.Argument(..., help="Evaluated in order, in one session")):
    """Evaluate expressions and print one result per line."""
    calculator = Calculator.new()
    failed = False
    for text in expressions:
        try:
            typer.echo(format_value(calculator.calculate(text)))
        except CalculatorError as e:
            typer.echo(f"{e.kind}: {e}", err=True)
            failed = True
    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
