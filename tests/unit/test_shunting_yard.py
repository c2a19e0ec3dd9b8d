"""
Тесты Shunting-Yard Parser

Проверяет:
1. Приоритет и ассоциативность в postfix порядке
2. Распознавание унарного минуса по состоянию парсера
3. Удаление скобок из вывода
4. Ошибки: оператор не на своём месте, несбалансированные скобки
"""

import pytest

from src.core.domain import LeftParenToken, RightParenToken, format_tokens
from src.core.errors import EvalStage, ParseError, ParseErrorKind
from src.evaluator.shunting_yard import ParserState, ShuntingYardParser, to_postfix
from src.evaluator.tokenizer import tokenize


def postfix_of(expression: str) -> str:
    return format_tokens(to_postfix(tokenize(expression)))


# =============================================================================
# ТЕСТЫ: Порядок вывода
# =============================================================================


class TestPostfixOrder:
    """Тесты переупорядочивания infix → postfix."""

    def test_precedence(self) -> None:
        """Умножение связывает сильнее сложения."""
        assert postfix_of("3 + 4 * 5") == "3 4 5 * +"
        assert postfix_of("3 * 4 + 5") == "3 4 * 5 +"

    def test_parentheses_override_precedence(self) -> None:
        assert postfix_of("(3 + 4) * 5") == "3 4 + 5 *"

    def test_left_associativity(self) -> None:
        """10 - 4 - 3 = (10 - 4) - 3."""
        assert postfix_of("10 - 4 - 3") == "10 4 - 3 -"
        assert postfix_of("8 / 4 / 2") == "8 4 / 2 /"

    def test_power_right_associativity(self) -> None:
        """2 ^ 3 ^ 2 = 2 ^ (3 ^ 2)."""
        assert postfix_of("2 ^ 3 ^ 2") == "2 3 2 ^ ^"

    def test_modulo_same_level_as_multiply(self) -> None:
        assert postfix_of("7 % 4 * 2") == "7 4 % 2 *"

    def test_constants_pass_through(self) -> None:
        assert postfix_of("2 * pi") == "2 pi *"

    def test_no_parens_in_output(self) -> None:
        tokens = to_postfix(tokenize("((1 + 2) * (3 - 4))"))
        assert not any(isinstance(t, (LeftParenToken, RightParenToken)) for t in tokens)
        assert format_tokens(tokens) == "1 2 + 3 4 - *"

    def test_empty_input(self) -> None:
        assert to_postfix([]) == []


class TestUnaryMinus:
    """Тесты унарного минуса."""

    def test_leading_minus(self) -> None:
        """-5 * 4 = (-5) * 4: унарный минус сильнее умножения."""
        assert postfix_of("-5 * 4") == "5 u- 4 *"

    def test_double_negation(self) -> None:
        """Унарный минус правоассоциативен."""
        assert postfix_of("--5") == "5 u- u-"

    def test_minus_after_binary_operator(self) -> None:
        assert postfix_of("3 + -4") == "3 4 u- +"
        assert postfix_of("-3 * -2") == "3 u- 2 u- *"

    def test_minus_after_left_paren(self) -> None:
        assert postfix_of("(-3)") == "3 u-"
        assert postfix_of("-(3 * 2)") == "3 2 * u-"

    def test_power_binds_tighter_than_negation(self) -> None:
        """-2 ^ 2 = -(2 ^ 2)."""
        assert postfix_of("-2 ^ 2") == "2 2 ^ u-"

    def test_negative_exponent_needs_parentheses(self) -> None:
        """'^' выталкивается перед унарным минусом: без скобок postfix некорректен."""
        assert postfix_of("2 ^ -1") == "2 ^ 1 u-"
        assert postfix_of("2 ^ (-1)") == "2 1 u- ^"

    def test_binary_minus_after_operand(self) -> None:
        assert postfix_of("5 - 3") == "5 3 -"
        assert postfix_of("(1) - 3") == "1 3 -"


# =============================================================================
# ТЕСТЫ: Ошибки
# =============================================================================


class TestParseErrors:
    """Тесты ошибок разбора."""

    def test_leading_binary_operator(self) -> None:
        with pytest.raises(ParseError, match="Unexpected operator placement: \\*") as exc_info:
            postfix_of("* 3")

        assert exc_info.value.kind is ParseErrorKind.UNEXPECTED_OPERATOR
        assert exc_info.value.stage is EvalStage.PARSE
        assert exc_info.value.detail == "*"

    def test_consecutive_operators(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            postfix_of("3 + * 4")

        assert exc_info.value.kind is ParseErrorKind.UNEXPECTED_OPERATOR

    def test_unary_plus_not_supported(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            postfix_of("(+3)")

        assert exc_info.value.kind is ParseErrorKind.UNEXPECTED_OPERATOR
        assert exc_info.value.detail == "+"

    def test_unclosed_parenthesis(self) -> None:
        with pytest.raises(ParseError, match="Mismatched parentheses") as exc_info:
            postfix_of("(3 + 4")

        assert exc_info.value.kind is ParseErrorKind.MISMATCHED_PARENTHESIS

    def test_extra_closing_parenthesis(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            postfix_of("3 + 4)")

        assert exc_info.value.kind is ParseErrorKind.MISMATCHED_PARENTHESIS

    def test_reversed_parentheses(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            postfix_of(")(")

        assert exc_info.value.kind is ParseErrorKind.MISMATCHED_PARENTHESIS

    def test_non_token_element(self) -> None:
        """Строка вместо токена — ошибка вызывающей стороны, а не ParseError."""
        with pytest.raises(TypeError, match="Unsupported token"):
            to_postfix(["3"])


# =============================================================================
# ТЕСТЫ: Состояние парсера
# =============================================================================


class TestParserState:
    """Тесты состояния ShuntingYardParser."""

    def test_initial_state(self) -> None:
        parser = ShuntingYardParser()
        assert parser.state is ParserState.EXPECT_OPERAND

    def test_state_after_operand(self) -> None:
        parser = ShuntingYardParser()
        parser.to_postfix(tokenize("3"))
        assert parser.state is ParserState.EXPECT_OPERATOR

    def test_state_after_operator(self) -> None:
        """Висящий оператор оставляет парсер в ожидании операнда."""
        parser = ShuntingYardParser()
        parser.to_postfix(tokenize("3 +"))
        assert parser.state is ParserState.EXPECT_OPERAND

    def test_parser_is_reusable(self) -> None:
        """Каждый вызов начинает с чистого состояния."""
        parser = ShuntingYardParser()

        with pytest.raises(ParseError):
            parser.to_postfix(tokenize("(1 + 2"))

        assert format_tokens(parser.to_postfix(tokenize("-1 + 2"))) == "1 u- 2 +"
