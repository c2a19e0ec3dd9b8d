"""Postfix Evaluator — стековая машина над Decimal.

Правила:
- Number → push значения
- Identifier → push значения константы
- UNARY_NEGATE → pop 1, push -x
- бинарный оператор → pop rhs, pop lhs, push lhs OP rhs
- скобки → MALFORMED_EXPRESSION (в корректном postfix недостижимо)

После обработки на стеке должно остаться ровно одно значение.
"""

from decimal import Decimal
from typing import Callable, Dict, Final, List, Sequence

from src.core.domain.operators import Operator
from src.core.domain.tokens import (
    IdentifierToken,
    LeftParenToken,
    NumberToken,
    OperatorToken,
    RightParenToken,
    Token,
)
from src.core.errors import ArithError, ArithErrorKind
from src.core.math import decimal_arithmetic as dmath

BINARY_OPERATIONS: Final[Dict[Operator, Callable[[Decimal, Decimal], Decimal]]] = {
    Operator.ADD: dmath.add,
    Operator.SUBTRACT: dmath.subtract,
    Operator.MULTIPLY: dmath.multiply,
    Operator.DIVIDE: dmath.divide,
    Operator.MODULO: dmath.remainder,
    Operator.POWER: dmath.power,
}


def _pop_operand(stack: List[Decimal], op: Operator) -> Decimal:
    if not stack:
        raise ArithError(
            ArithErrorKind.INSUFFICIENT_OPERANDS,
            f"Not enough operands for operator {op.symbol}",
            detail=op.symbol,
        )
    return stack.pop()


def apply_unary_operator(value: Decimal, op: Operator) -> Decimal:
    if op is not Operator.UNARY_NEGATE:
        raise ArithError(
            ArithErrorKind.MALFORMED_EXPRESSION,
            f"Unsupported unary operator: {op.symbol}",
            detail=op.symbol,
        )
    return dmath.negate(value)


def apply_binary_operator(lhs: Decimal, rhs: Decimal, op: Operator) -> Decimal:
    """
    Применение бинарного оператора.

    Raises:
        ArithError: DIVISION_BY_ZERO, MODULO_BY_ZERO, NON_INTEGER_EXPONENT,
            EXPONENT_OUT_OF_RANGE, PRECISION_EXCEEDED из decimal_arithmetic; MALFORMED_EXPRESSION
            для унарного оператора в бинарном контексте
    """
    operation = BINARY_OPERATIONS.get(op)
    if operation is None:
        raise ArithError(
            ArithErrorKind.MALFORMED_EXPRESSION,
            "Unary operator cannot be applied in binary context",
            detail=op.symbol,
        )
    return operation(lhs, rhs)


def eval_postfix(tokens: Sequence[Token]) -> Decimal:
    """
    Вычисление postfix последовательности.

    Args:
        tokens: Токены в postfix порядке (результат to_postfix)

    Returns:
        Единственное значение, оставшееся на стеке

    Raises:
        ArithError(INSUFFICIENT_OPERANDS): Оператору не хватает операндов
        ArithError(MALFORMED_EXPRESSION): Скобка в потоке или на стеке != 1 значения
        ArithError: Ошибки арифметики (деление на ноль, недопустимый показатель,
            переполнение экспоненты, превышение EXACT_PRECISION)
        TypeError: Элемент последовательности не является токеном
    """
    stack: List[Decimal] = []

    for token in tokens:
        if isinstance(token, NumberToken):
            stack.append(token.value)

        elif isinstance(token, IdentifierToken):
            stack.append(token.constant.value_decimal)

        elif isinstance(token, OperatorToken):
            op = token.operator
            if op.is_unary:
                value = _pop_operand(stack, op)
                stack.append(apply_unary_operator(value, op))
            else:
                rhs = _pop_operand(stack, op)
                lhs = _pop_operand(stack, op)
                stack.append(apply_binary_operator(lhs, rhs, op))

        elif isinstance(token, (LeftParenToken, RightParenToken)):
            raise ArithError(
                ArithErrorKind.MALFORMED_EXPRESSION,
                "Parenthesis encountered in postfix stream",
                detail=str(token),
            )

        else:
            raise TypeError(f"Unsupported token: {token!r}")

    if len(stack) != 1:
        raise ArithError(
            ArithErrorKind.MALFORMED_EXPRESSION,
            f"Invalid postfix expression: {len(stack)} values left on stack",
        )

    return stack[0]
