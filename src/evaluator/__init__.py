"""Evaluator — вычисление арифметических выражений произвольной точности.

Конвейер:
- Tokenizer: текст → токены
- Shunting-Yard Parser: infix → postfix, унарный минус, скобки
- Postfix Evaluator: стековая машина над Decimal
- evaluate(): композиция трёх стадий
"""

from src.core.errors import (
    ArithError,
    ArithErrorKind,
    EvalError,
    EvalStage,
    LexError,
    LexErrorKind,
    ParseError,
    ParseErrorKind,
)
from .pipeline import Evaluation, evaluate, evaluate_detailed, evaluate_rounded
from .postfix import apply_binary_operator, apply_unary_operator, eval_postfix
from .shunting_yard import ParserState, ShuntingYardParser, to_postfix
from .tokenizer import tokenize

__all__ = [
    # Entry points
    "evaluate",
    "evaluate_detailed",
    "evaluate_rounded",
    "Evaluation",
    # Stages
    "tokenize",
    "to_postfix",
    "ShuntingYardParser",
    "ParserState",
    "eval_postfix",
    "apply_binary_operator",
    "apply_unary_operator",
    # Errors
    "EvalError",
    "EvalStage",
    "LexError",
    "LexErrorKind",
    "ParseError",
    "ParseErrorKind",
    "ArithError",
    "ArithErrorKind",
]
