"""
Operator — арифметические операторы, приоритеты и ассоциативность

Приоритет и ассоциативность — тотальные функции над всеми тегами,
не хранятся в экземплярах.

ТАБЛИЦА:
    Оператор        Приоритет   Ассоциативность
    ADD, SUBTRACT       1           LEFT
    MULTIPLY,           2           LEFT
    DIVIDE, MODULO
    UNARY_NEGATE        3           RIGHT
    POWER               4           RIGHT
"""

from enum import Enum
from typing import Final


class Associativity(str, Enum):
    """Ассоциативность оператора."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"


class Operator(str, Enum):
    """Тег арифметического оператора."""

    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MODULO = "MODULO"
    POWER = "POWER"
    UNARY_NEGATE = "UNARY_NEGATE"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        """
        Оператор по символу из входного текста.

        '-' всегда SUBTRACT: различение унарного минуса делает парсер.

        Raises:
            ValueError: Если символ не является оператором
        """
        try:
            return _SYMBOL_TO_OPERATOR[symbol]
        except KeyError:
            raise ValueError(f"Invalid character for operator: {symbol!r}") from None

    @property
    def symbol(self) -> str:
        """Символ для отображения (унарный минус — 'u-')."""
        return _OPERATOR_SYMBOLS[self]

    @property
    def is_unary(self) -> bool:
        return self is Operator.UNARY_NEGATE

    def __str__(self) -> str:
        return self.symbol


_SYMBOL_TO_OPERATOR: Final[dict[str, Operator]] = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
    "%": Operator.MODULO,
    "^": Operator.POWER,
}

_OPERATOR_SYMBOLS: Final[dict[Operator, str]] = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "*",
    Operator.DIVIDE: "/",
    Operator.MODULO: "%",
    Operator.POWER: "^",
    Operator.UNARY_NEGATE: "u-",
}


def is_operator_symbol(ch: str) -> bool:
    """Является ли символ одним из '+ - * / % ^'."""
    return ch in _SYMBOL_TO_OPERATOR


def operator_precedence(op: Operator) -> int:
    """Приоритет оператора (больше — связывает сильнее)."""
    if op in (Operator.ADD, Operator.SUBTRACT):
        return 1
    if op in (Operator.MULTIPLY, Operator.DIVIDE, Operator.MODULO):
        return 2
    if op is Operator.UNARY_NEGATE:
        return 3
    if op is Operator.POWER:
        return 4
    raise ValueError(f"Unknown operator: {op!r}")


def operator_associativity(op: Operator) -> Associativity:
    """Ассоциативность оператора."""
    if op in (Operator.POWER, Operator.UNARY_NEGATE):
        return Associativity.RIGHT
    return Associativity.LEFT


def should_pop_operator(stack_op: Operator, incoming: Operator) -> bool:
    """
    Нужно ли вытолкнуть оператор с вершины стека перед push входящего.

    Выталкиваем, если:
    - приоритет на стеке строго выше, ИЛИ
    - приоритеты равны и входящий оператор LEFT-ассоциативен

    RIGHT-ассоциативные (POWER, UNARY_NEGATE) при равенстве не выталкивают,
    поэтому цепочки группируются справа налево: 2^3^2 = 2^(3^2).

    Args:
        stack_op: Оператор на вершине стека
        incoming: Входящий оператор

    Returns:
        True если stack_op должен уйти в output
    """
    stack_prec = operator_precedence(stack_op)
    incoming_prec = operator_precedence(incoming)

    if stack_prec > incoming_prec:
        return True

    if stack_prec == incoming_prec:
        return operator_associativity(incoming) is Associativity.LEFT

    return False
