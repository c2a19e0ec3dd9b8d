"""
Evaluation Errors — таксономия ошибок вычисления выражений

Каждая стадия конвейера бросает свой подкласс EvalError:
- LexError: токенизация
- ParseError: shunting-yard (infix → postfix)
- ArithError: вычисление postfix

Все ошибки детерминированы (один и тот же вход → та же ошибка)
и не подлежат retry. Вызывающая сторона выбирает реакцию по
(stage, kind), например статус ответа.
"""

from enum import Enum
from typing import Any, Dict, Optional


class EvalStage(str, Enum):
    """Стадия конвейера, на которой произошла ошибка."""

    LEX = "LEX"
    PARSE = "PARSE"
    ARITHMETIC = "ARITHMETIC"


class LexErrorKind(str, Enum):
    UNEXPECTED_CHARACTER = "UNEXPECTED_CHARACTER"
    INVALID_NUMBER = "INVALID_NUMBER"
    UNKNOWN_IDENTIFIER = "UNKNOWN_IDENTIFIER"


class ParseErrorKind(str, Enum):
    UNEXPECTED_OPERATOR = "UNEXPECTED_OPERATOR"
    MISMATCHED_PARENTHESIS = "MISMATCHED_PARENTHESIS"


class ArithErrorKind(str, Enum):
    INSUFFICIENT_OPERANDS = "INSUFFICIENT_OPERANDS"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    MODULO_BY_ZERO = "MODULO_BY_ZERO"
    NON_INTEGER_EXPONENT = "NON_INTEGER_EXPONENT"
    EXPONENT_OUT_OF_RANGE = "EXPONENT_OUT_OF_RANGE"
    MALFORMED_EXPRESSION = "MALFORMED_EXPRESSION"
    PRECISION_EXCEEDED = "PRECISION_EXCEEDED"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class EvalError(Exception):
    """
    Базовая ошибка вычисления выражения.

    Attributes:
        stage: Стадия конвейера
        kind: Вид ошибки (Enum конкретной стадии)
        detail: Контекст (символ, текст идентификатора/литерала, оператор) или None
    """

    stage: EvalStage

    def __init__(self, kind: Enum, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.detail = detail

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-совместимое представление ошибки."""
        return {
            "stage": self.stage.value,
            "kind": self.kind.value,
            "detail": self.detail,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value}, {self.message!r})"


class LexError(EvalError):
    """Ошибка токенизации."""

    stage = EvalStage.LEX

    def __init__(self, kind: LexErrorKind, message: str, detail: Optional[str] = None):
        super().__init__(kind, message, detail)


class ParseError(EvalError):
    """Ошибка разбора (shunting-yard)."""

    stage = EvalStage.PARSE

    def __init__(self, kind: ParseErrorKind, message: str, detail: Optional[str] = None):
        super().__init__(kind, message, detail)


class ArithError(EvalError):
    """Арифметическая ошибка при вычислении postfix."""

    stage = EvalStage.ARITHMETIC

    def __init__(self, kind: ArithErrorKind, message: str, detail: Optional[str] = None):
        super().__init__(kind, message, detail)
