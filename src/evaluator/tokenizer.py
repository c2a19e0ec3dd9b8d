"""Tokenizer — текст выражения → последовательность токенов.

Сканирование слева направо, один логический токен за итерацию:
- пробельные символы пропускаются
- '(' и ')' → LeftParenToken / RightParenToken
- '+ - * / % ^' → OperatorToken ('-' всегда SUBTRACT, унарный минус различает парсер)
- цифра → числовой литерал (десятичная точка, экспонента e/E со знаком)
- буква → идентификатор, разрешается по таблице констант

Вход потребляется целиком или бросается LexError.
"""

from typing import List

from src.core.domain.math_constants import MathConstant
from src.core.domain.operators import Operator, is_operator_symbol
from src.core.domain.tokens import (
    IdentifierToken,
    NumberToken,
    OperatorToken,
    Token,
    is_paren_symbol,
    paren_token,
)
from src.core.errors import LexError, LexErrorKind
from src.core.math.decimal_arithmetic import parse_decimal


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_ascii_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _scan_number(text: str, start: int) -> int:
    """
    Конец числового литерала, начинающегося с цифры в позиции start.

    Жадно принимает цифры и '.', одну экспоненту e/E; сразу после
    экспоненты — необязательный знак '+'/'-'. Корректность
    (например, две точки) проверяет парсинг литерала, не сканер.
    """
    pos = start + 1
    seen_exponent = False

    while pos < len(text):
        ch = text[pos]
        if _is_ascii_digit(ch) or ch == ".":
            pos += 1
        elif ch in "eE" and not seen_exponent:
            seen_exponent = True
            pos += 1
            if pos < len(text) and text[pos] in "+-":
                pos += 1
        else:
            break

    return pos


def _scan_identifier(text: str, start: int) -> int:
    """Конец идентификатора: буква, затем буквы/цифры."""
    pos = start + 1
    while pos < len(text) and text[pos].isalnum():
        pos += 1
    return pos


def tokenize(text: str) -> List[Token]:
    """
    Токенизация выражения.

    Args:
        text: Исходное выражение, например '2 * (pi + 1.5e-3)'

    Returns:
        Токены в порядке появления (infix)

    Raises:
        LexError(UNEXPECTED_CHARACTER): Символ вне алфавита выражений
        LexError(INVALID_NUMBER): Литерал не парсится ('1.2.3', '4e')
        LexError(UNKNOWN_IDENTIFIER): Имя не найдено в таблице констант

    Examples:
        >>> [str(t) for t in tokenize("3+4")]
        ['3', '+', '4']
    """
    tokens: List[Token] = []
    pos = 0

    while pos < len(text):
        ch = text[pos]

        if ch.isspace():
            pos += 1

        elif is_paren_symbol(ch):
            tokens.append(paren_token(ch))
            pos += 1

        elif is_operator_symbol(ch):
            tokens.append(OperatorToken(Operator.from_symbol(ch)))
            pos += 1

        elif _is_ascii_digit(ch):
            end = _scan_number(text, pos)
            literal = text[pos:end]
            try:
                value = parse_decimal(literal)
            except ValueError:
                raise LexError(
                    LexErrorKind.INVALID_NUMBER,
                    f"Invalid number: {literal}",
                    detail=literal,
                ) from None
            tokens.append(NumberToken(value))
            pos = end

        elif _is_ascii_alpha(ch):
            end = _scan_identifier(text, pos)
            name = text[pos:end]
            try:
                constant = MathConstant.from_name(name)
            except KeyError:
                raise LexError(
                    LexErrorKind.UNKNOWN_IDENTIFIER,
                    f"Unknown math constant: {name}",
                    detail=name,
                ) from None
            tokens.append(IdentifierToken(constant))
            pos = end

        else:
            raise LexError(
                LexErrorKind.UNEXPECTED_CHARACTER,
                f"Unexpected character: {ch}",
                detail=ch,
            )

    return tokens
