"""CLI для калькулятора выражений.

Usage:
    python -m src.app eval "(3 + 4) * 5"            # 35
    python -m src.app eval -- "-5 * 4"              # выражение с ведущим '-' после '--'
    python -m src.app eval "2.5 * 5.2 / 3.1" -r 2   # 4.19
    python -m src.app eval "3 + 4 * 5" --postfix    # 23 и postfix: 3 4 5 * +
    python -m src.app eval "1 / 0" --json           # машиночитаемая ошибка
    python -m src.app constants                     # таблица констант
    python -m src.app repl                          # построчное вычисление из stdin
"""

from __future__ import annotations

import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.app.config import AppConfig
from src.app.logging_config import setup_logging
from src.core.contracts import validate_evaluation_result
from src.core.domain.math_constants import list_constants
from src.core.errors import EvalError
from src.core.math.decimal_arithmetic import format_decimal, round_decimal
from src.evaluator import evaluate_detailed

logger = logging.getLogger(__name__)

# Коды выхода
EXIT_OK = 0
EXIT_EVAL_ERROR = 1
EXIT_INPUT_TOO_LONG = 2

REPL_QUIT_COMMANDS = ("quit", "exit")

app = typer.Typer(
    name="calc",
    help="Arbitrary-precision arithmetic expression evaluator",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console(soft_wrap=True)


def _bootstrap(config_path: Optional[Path]) -> AppConfig:
    config = AppConfig.load(config_path)
    setup_logging(config.logging.level, config.logging.format)
    return config


def render_result(value: Decimal, round_digits: Optional[int], rounding: str) -> str:
    """
    Текст результата: точный (без хвостовых нулей) или с фиксированным числом знаков.

    Examples:
        >>> render_result(Decimal("17.5"), None, "ROUND_HALF_EVEN")
        '17.5'
        >>> render_result(Decimal("7"), 2, "ROUND_HALF_EVEN")
        '7.00'
    """
    if round_digits is None:
        return format_decimal(value)
    rounded = round_decimal(value, round_digits, rounding)
    if rounded.is_zero():
        rounded = abs(rounded)
    return format(rounded, "f")


def _effective_digits(config: AppConfig, round_digits: Optional[int], exact: bool) -> Optional[int]:
    if exact:
        return None
    if round_digits is not None:
        return round_digits
    return config.evaluator.round_digits


def evaluate_to_record(
    expression: str,
    round_digits: Optional[int],
    rounding: str,
    include_postfix: bool = False,
) -> Dict[str, Any]:
    """
    Вычисление в машиночитаемую запись (контракт evaluation_result).

    Ошибки вычисления и округления не бросаются, а попадают в поле 'error'.
    """
    record: Dict[str, Any] = {"expression": expression}
    try:
        evaluation = evaluate_detailed(expression)
        rendered = render_result(evaluation.value, round_digits, rounding)
    except EvalError as e:
        logger.info("Evaluation failed: stage=%s kind=%s", e.stage.value, e.kind.value)
        record["ok"] = False
        record["error"] = e.to_dict()
    else:
        logger.debug("Evaluated %r -> postfix [%s]", expression, evaluation.postfix_text)
        record["ok"] = True
        record["result"] = rendered
        if include_postfix:
            record["postfix"] = evaluation.postfix_text

    validate_evaluation_result(record)
    return record


def _print_error(error: Dict[str, Any]) -> None:
    stage = error["stage"].lower()
    console.print(f"[red]{stage} error:[/red] {escape(error['message'])}")


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '(3 + 4) * 5'; put '--' before one starting with '-'"),
    round_digits: Optional[int] = typer.Option(None, "--round", "-r", min=0, help="Round to N fractional digits"),
    exact: bool = typer.Option(False, "--exact", help="Ignore configured rounding, print exact value"),
    show_postfix: bool = typer.Option(False, "--postfix", "-p", help="Also print the postfix (RPN) form"),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON record instead of plain text"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file (default: ./config.toml)"),
) -> None:
    """Evaluate one expression."""
    config = _bootstrap(config_path)
    settings = config.evaluator

    if len(expression) > settings.max_expression_length:
        logger.warning("Rejected expression of length %d", len(expression))
        console.print(
            f"[red]input error:[/red] expression exceeds {settings.max_expression_length} characters"
        )
        raise typer.Exit(EXIT_INPUT_TOO_LONG)

    digits = _effective_digits(config, round_digits, exact)
    record = evaluate_to_record(expression, digits, settings.rounding, include_postfix=show_postfix)

    if as_json:
        typer.echo(json.dumps(record))
    elif record["ok"]:
        typer.echo(record["result"])
        if show_postfix:
            typer.echo(f"postfix: {record['postfix']}")
    else:
        _print_error(record["error"])

    if not record["ok"]:
        raise typer.Exit(EXIT_EVAL_ERROR)


@app.command("constants")
def cmd_constants(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file (default: ./config.toml)"),
) -> None:
    """Show the named constants usable in expressions."""
    _bootstrap(config_path)

    table = Table(title="Constants", show_header=True, header_style="bold")
    table.add_column("Name", style="green")
    table.add_column("Value", overflow="fold")

    for name, value in list_constants():
        table.add_row(name, str(value))

    out.print(table)


@app.command("repl")
def cmd_repl(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file (default: ./config.toml)"),
) -> None:
    """Evaluate expressions line by line from stdin until EOF or 'quit'."""
    config = _bootstrap(config_path)
    settings = config.evaluator
    evaluated = 0

    for line in sys.stdin:
        expression = line.strip()
        if not expression:
            continue
        if expression.lower() in REPL_QUIT_COMMANDS:
            break

        if len(expression) > settings.max_expression_length:
            console.print(
                f"[red]input error:[/red] expression exceeds {settings.max_expression_length} characters"
            )
            continue

        record = evaluate_to_record(expression, settings.round_digits, settings.rounding)
        if record["ok"]:
            typer.echo(record["result"])
        else:
            _print_error(record["error"])
        evaluated += 1

    logger.debug("REPL finished after %d expression(s)", evaluated)
