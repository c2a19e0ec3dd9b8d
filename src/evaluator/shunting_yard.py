"""Shunting-Yard Parser — infix токены → postfix (обратная польская запись).

Учитывает приоритет, ассоциативность, вложенность скобок и различает
бинарное вычитание и унарный минус.

Состояния парсера:
- EXPECT_OPERAND: ожидается операнд, '(' или унарный минус
- EXPECT_OPERATOR: ожидается бинарный оператор или ')'

Переходы:
    Number / Identifier   → EXPECT_OPERATOR
    Operator              → EXPECT_OPERAND
    LeftParen             → EXPECT_OPERAND
    RightParen            → EXPECT_OPERATOR

В EXPECT_OPERAND '-' переписывается в UNARY_NEGATE, любой другой
оператор — ParseError(UNEXPECTED_OPERATOR).
"""

from enum import Enum
from typing import List, Sequence

from src.core.domain.operators import Operator, should_pop_operator
from src.core.domain.tokens import (
    LEFT_PAREN,
    IdentifierToken,
    LeftParenToken,
    NumberToken,
    OperatorToken,
    RightParenToken,
    Token,
)
from src.core.errors import ParseError, ParseErrorKind


class ParserState(str, Enum):
    """Состояние shunting-yard парсера."""

    EXPECT_OPERAND = "EXPECT_OPERAND"
    EXPECT_OPERATOR = "EXPECT_OPERATOR"


def _mismatched_parenthesis() -> ParseError:
    return ParseError(ParseErrorKind.MISMATCHED_PARENTHESIS, "Mismatched parentheses")


class ShuntingYardParser:
    """Конвертер infix → postfix.

    Экземпляр хранит состояние одного разбора; to_postfix() сбрасывает
    его при каждом вызове, поэтому парсер можно переиспользовать
    последовательно (но не из нескольких потоков одновременно).
    """

    def __init__(self):
        self.state = ParserState.EXPECT_OPERAND
        self._output: List[Token] = []
        self._stack: List[Token] = []

    def to_postfix(self, tokens: Sequence[Token]) -> List[Token]:
        """Переупорядочивание токенов в postfix.

        Args:
            tokens: Токены в infix порядке (результат tokenize)

        Returns:
            Токены в postfix порядке (без скобок)

        Raises:
            ParseError(UNEXPECTED_OPERATOR): Оператор на месте операнда (кроме '-')
            ParseError(MISMATCHED_PARENTHESIS): Несбалансированные скобки
            TypeError: Элемент последовательности не является токеном
        """
        self.state = ParserState.EXPECT_OPERAND
        self._output = []
        self._stack = []

        for token in tokens:
            if isinstance(token, (NumberToken, IdentifierToken)):
                self._output.append(token)
                self.state = ParserState.EXPECT_OPERATOR

            elif isinstance(token, OperatorToken):
                self._push_operator(token.operator)
                self.state = ParserState.EXPECT_OPERAND

            elif isinstance(token, LeftParenToken):
                self._stack.append(LEFT_PAREN)
                self.state = ParserState.EXPECT_OPERAND

            elif isinstance(token, RightParenToken):
                self._close_group()
                self.state = ParserState.EXPECT_OPERATOR

            else:
                raise TypeError(f"Unsupported token: {token!r}")

        while self._stack:
            top = self._stack.pop()
            if isinstance(top, (LeftParenToken, RightParenToken)):
                raise _mismatched_parenthesis()
            self._output.append(top)

        return self._output

    def _push_operator(self, op: Operator) -> None:
        if self.state is ParserState.EXPECT_OPERAND:
            if op is not Operator.SUBTRACT:
                raise ParseError(
                    ParseErrorKind.UNEXPECTED_OPERATOR,
                    f"Unexpected operator placement: {op.symbol}",
                    detail=op.symbol,
                )
            op = Operator.UNARY_NEGATE

        while self._stack:
            top = self._stack[-1]
            if not isinstance(top, OperatorToken):
                break
            if not should_pop_operator(top.operator, op):
                break
            self._output.append(self._stack.pop())

        self._stack.append(OperatorToken(op))

    def _close_group(self) -> None:
        while self._stack:
            top = self._stack.pop()
            if isinstance(top, LeftParenToken):
                return
            if isinstance(top, OperatorToken):
                self._output.append(top)

        raise _mismatched_parenthesis()


def to_postfix(tokens: Sequence[Token]) -> List[Token]:
    """Infix → postfix (свежий парсер на каждый вызов)."""
    return ShuntingYardParser().to_postfix(tokens)
