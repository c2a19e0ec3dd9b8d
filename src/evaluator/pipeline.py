"""Evaluate — единая точка входа: текст → Decimal.

tokenize → to_postfix → eval_postfix, с остановкой на первой ошибке.
Ошибки стадий (LexError / ParseError / ArithError) пробрасываются как есть;
все они — подклассы EvalError и несут stage и kind.

Функция чистая: нет разделяемого состояния, I/O и логирования,
поэтому безопасна для параллельных вызовов без синхронизации.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Tuple

from src.core.domain.tokens import Token, format_tokens
from src.core.math.decimal_arithmetic import round_decimal
from src.evaluator.postfix import eval_postfix
from src.evaluator.shunting_yard import to_postfix
from src.evaluator.tokenizer import tokenize


@dataclass(frozen=True)
class Evaluation:
    """Результат вычисления с промежуточными стадиями (для диагностики)."""

    expression: str
    tokens: Tuple[Token, ...]
    postfix: Tuple[Token, ...]
    value: Decimal

    @property
    def postfix_text(self) -> str:
        return format_tokens(self.postfix)


def evaluate(expression: str) -> Decimal:
    """
    Вычисление арифметического выражения.

    Args:
        expression: Текст выражения, например '(3 + 4) * 5'

    Returns:
        Точный результат (без округления, кроме бесконечных дробей при делении)

    Raises:
        LexError / ParseError / ArithError: см. src.core.errors

    Examples:
        >>> evaluate("3 + 4 * 5")
        Decimal('23')
    """
    tokens = tokenize(expression)
    postfix = to_postfix(tokens)
    return eval_postfix(postfix)


def evaluate_detailed(expression: str) -> Evaluation:
    """То же, что evaluate(), но с токенами и postfix-формой."""
    tokens = tokenize(expression)
    postfix = to_postfix(tokens)
    value = eval_postfix(postfix)
    return Evaluation(
        expression=expression,
        tokens=tuple(tokens),
        postfix=tuple(postfix),
        value=value,
    )


def evaluate_rounded(expression: str, digits: int, rounding: str = ROUND_HALF_EVEN) -> Decimal:
    """
    Вычисление с округлением результата до digits знаков после запятой.

    Округление — явный шаг постобработки, выбираемый вызывающей стороной.

    Examples:
        >>> str(evaluate_rounded("2.5 * 5.2 / 3.1", 2))
        '4.19'
    """
    return round_decimal(evaluate(expression), digits, rounding)
