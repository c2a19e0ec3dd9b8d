"""
Token — лексемы арифметического выражения

Закрытое объединение immutable dataclasses:
- NumberToken: десятичный литерал
- IdentifierToken: ссылка на именованную константу
- OperatorToken: оператор
- LeftParenToken / RightParenToken: скобки

Создаются токенизатором, переупорядочиваются парсером (infix → postfix),
потребляются вычислителем.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Union

from src.core.domain.math_constants import MathConstant
from src.core.domain.operators import Operator
from src.core.math.decimal_arithmetic import format_decimal


@dataclass(frozen=True)
class NumberToken:
    """Числовой литерал."""

    value: Decimal

    def __str__(self) -> str:
        return format_decimal(self.value)


@dataclass(frozen=True)
class IdentifierToken:
    """Именованная константа."""

    constant: MathConstant

    def __str__(self) -> str:
        return self.constant.value


@dataclass(frozen=True)
class OperatorToken:
    """Оператор (после парсера может быть UNARY_NEGATE)."""

    operator: Operator

    def __str__(self) -> str:
        return self.operator.symbol


@dataclass(frozen=True)
class LeftParenToken:
    def __str__(self) -> str:
        return "("


@dataclass(frozen=True)
class RightParenToken:
    def __str__(self) -> str:
        return ")"


Token = Union[NumberToken, IdentifierToken, OperatorToken, LeftParenToken, RightParenToken]

LEFT_PAREN = LeftParenToken()
RIGHT_PAREN = RightParenToken()


def is_paren_symbol(ch: str) -> bool:
    return ch in ("(", ")")


def paren_token(ch: str) -> Token:
    """
    Токен скобки по символу.

    Raises:
        ValueError: Если символ не является скобкой
    """
    if ch == "(":
        return LEFT_PAREN
    if ch == ")":
        return RIGHT_PAREN
    raise ValueError(f"Invalid character for parenthesis: {ch!r}")


def format_tokens(tokens: Iterable[Token]) -> str:
    """
    Текстовое представление последовательности токенов через пробел.

    Examples:
        >>> format_tokens([NumberToken(Decimal(3)), NumberToken(Decimal(4)), OperatorToken(Operator.ADD)])
        '3 4 +'
    """
    return " ".join(str(token) for token in tokens)
