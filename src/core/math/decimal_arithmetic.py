"""
Decimal Arithmetic — точная арифметика с явной политикой ошибок

Модуль обеспечивает арифметику произвольной точности поверх decimal.Decimal:
- Сложение/вычитание/умножение/остаток без округления (exact context)
- Деление с защитой от деления на ноль; бесконечные дроби — до DIVISION_PRECISION
- Целочисленная степень с проверкой показателя (целый, в диапазоне int64)
- Округление результата как отдельный шаг постобработки
- Рендеринг в plain-нотацию (научная нотация только за PLAIN_RENDER_LIMIT)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление/остаток на ноль никогда не выполняются (ArithError)
2. NaN/Infinity никогда не возвращаются: все сигналы decimal трапятся
3. Округление применяется только при делении с бесконечной дробью,
   при степенях вне EXACT_POWER_DIGITS_LIMIT, и в round_decimal
4. Точный результат длиннее EXACT_PRECISION цифр не округляется молча:
   это ArithError(PRECISION_EXCEEDED)
5. Выход экспоненты результата за диапазон decimal — ArithError(EXPONENT_OUT_OF_RANGE)
6. Все операции детерминированы и не зависят от thread-local контекста
"""

from contextlib import contextmanager
from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)
from typing import Final, Iterator

from src.core.errors import ArithError, ArithErrorKind

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Максимум значащих цифр точного результата (сложение, умножение, остаток)
EXACT_PRECISION: Final[int] = 1_000_000

# Значащих цифр для частного, если деление не конечно (1/3, 2/7)
DIVISION_PRECISION: Final[int] = 100

# Максимальная оценка числа цифр результата, при которой степень считается точно.
# Выше этой оценки результат округляется до DIVISION_PRECISION значащих цифр
EXACT_POWER_DIGITS_LIMIT: Final[int] = 10_000

# Максимальная длина plain-представления, дальше научная нотация
PLAIN_RENDER_LIMIT: Final[int] = 100_000

# Диапазон показателя степени (signed 64-bit)
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

ROUNDING_MODES: Final[tuple[str, ...]] = (
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)

_ONE: Final[Decimal] = Decimal(1)


# =============================================================================
# КОНТЕКСТЫ
# =============================================================================


def exact_context() -> Context:
    """
    Контекст без округления для сложения, вычитания, умножения и остатка.

    Inexact трапится: результат, не помещающийся в EXACT_PRECISION цифр,
    становится исключением, а не округлённым значением.
    """
    return Context(
        prec=EXACT_PRECISION,
        rounding=ROUND_HALF_EVEN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
    )


def division_context() -> Context:
    """Контекст для деления и степеней, которые не могут быть точными."""
    return Context(
        prec=DIVISION_PRECISION,
        rounding=ROUND_HALF_EVEN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, DivisionByZero, Overflow],
    )


def rounding_context(rounding: str) -> Context:
    """Контекст для quantize в round_decimal (округление разрешено)."""
    return Context(
        prec=EXACT_PRECISION,
        rounding=rounding,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, DivisionByZero, Overflow],
    )


@contextmanager
def result_range_guard(symbol: str) -> Iterator[None]:
    """
    Перевод сигналов decimal о размере результата в ArithError.

    Args:
        symbol: Символ операции для detail ('+', '*', '^', ...)

    Raises:
        ArithError(EXPONENT_OUT_OF_RANGE): Экспонента результата вне [Emin, Emax]
        ArithError(PRECISION_EXCEEDED): Точный результат длиннее EXACT_PRECISION цифр
    """
    # Overflow является подклассом Inexact и проверяется первым
    try:
        yield
    except Overflow:
        raise ArithError(
            ArithErrorKind.EXPONENT_OUT_OF_RANGE,
            f"Result of operator {symbol} is out of range",
            detail=symbol,
        ) from None
    except Inexact:
        raise ArithError(
            ArithErrorKind.PRECISION_EXCEEDED,
            f"Result of operator {symbol} exceeds {EXACT_PRECISION} significant digits",
            detail=symbol,
        ) from None


# =============================================================================
# ПРЕДИКАТЫ И КОНВЕРСИИ
# =============================================================================


def parse_decimal(text: str) -> Decimal:
    """
    Парсинг текстового литерала в Decimal без округления.

    Raises:
        ValueError: Если текст не является конечным десятичным числом
    """
    try:
        value = exact_context().create_decimal(text)
    except DecimalException:
        raise ValueError(f"Invalid decimal literal: {text!r}") from None

    if not value.is_finite():
        raise ValueError(f"Invalid decimal literal: {text!r}")

    return value


def is_zero(value: Decimal) -> bool:
    return value.is_zero()


def is_integer(value: Decimal) -> bool:
    """Целое ли значение (2.0 и 1.2e3 — целые, 0.5 — нет)."""
    return value.is_finite() and value == value.to_integral_value()


def to_int64(value: Decimal) -> int:
    """
    Конверсия целого Decimal в signed 64-bit int.

    Ноль с любой экспонентой (0e20) — это 0.

    Args:
        value: Целое значение (проверяется вызывающей стороной через is_integer)

    Returns:
        int в диапазоне [INT64_MIN, INT64_MAX]

    Raises:
        ArithError(EXPONENT_OUT_OF_RANGE): Если значение вне диапазона int64
    """
    if value.is_zero():
        return 0

    # adjusted() > 19 отсекает огромные значения до конверсии в int
    if value.adjusted() > 19 or not (INT64_MIN <= int(value) <= INT64_MAX):
        raise ArithError(
            ArithErrorKind.EXPONENT_OUT_OF_RANGE,
            "Exponent is out of range for power operation",
            detail=str(value),
        )
    return int(value)


# =============================================================================
# ОПЕРАЦИИ
# =============================================================================


def add(lhs: Decimal, rhs: Decimal) -> Decimal:
    with result_range_guard("+"):
        return exact_context().add(lhs, rhs)


def subtract(lhs: Decimal, rhs: Decimal) -> Decimal:
    with result_range_guard("-"):
        return exact_context().subtract(lhs, rhs)


def multiply(lhs: Decimal, rhs: Decimal) -> Decimal:
    with result_range_guard("*"):
        return exact_context().multiply(lhs, rhs)


def negate(value: Decimal) -> Decimal:
    return exact_context().minus(value)


def divide(lhs: Decimal, rhs: Decimal) -> Decimal:
    """
    Деление с защитой от нуля.

    Конечные частные точны (3/4 = 0.75), бесконечные дроби
    округляются до DIVISION_PRECISION значащих цифр (ROUND_HALF_EVEN).

    Raises:
        ArithError(DIVISION_BY_ZERO): Если делитель равен нулю
        ArithError(EXPONENT_OUT_OF_RANGE): Частное вне диапазона decimal
    """
    if is_zero(rhs):
        raise ArithError(ArithErrorKind.DIVISION_BY_ZERO, "Division by zero", detail="/")

    with result_range_guard("/"):
        return division_context().divide(lhs, rhs)


def remainder(lhs: Decimal, rhs: Decimal) -> Decimal:
    """
    Остаток от усечённого деления: знак результата совпадает со знаком делимого.

    Examples:
        >>> remainder(Decimal(10), Decimal(3))
        Decimal('1')
        >>> remainder(Decimal(-7), Decimal(3))
        Decimal('-1')

    Raises:
        ArithError(MODULO_BY_ZERO): Если делитель равен нулю
        ArithError(PRECISION_EXCEEDED): Целое частное длиннее EXACT_PRECISION цифр
    """
    if is_zero(rhs):
        raise ArithError(ArithErrorKind.MODULO_BY_ZERO, "Modulo by zero", detail="%")

    # Остаток требует целого частного в пределах точности (DivisionImpossible)
    try:
        with result_range_guard("%"):
            return exact_context().remainder(lhs, rhs)
    except InvalidOperation:
        raise ArithError(
            ArithErrorKind.PRECISION_EXCEEDED,
            f"Quotient of operator % exceeds {EXACT_PRECISION} significant digits",
            detail="%",
        ) from None


def power(base: Decimal, exponent: Decimal) -> Decimal:
    """
    Возведение в целую степень.

    Правила:
    - exponent должен быть целым (NON_INTEGER_EXPONENT)
    - exponent должен помещаться в int64 (EXPONENT_OUT_OF_RANGE)
    - x^0 = 1 для любого x, включая 0
    - 0^n при n < 0 — деление на ноль
    - n > 0: точный результат, пока оценка числа цифр <= EXACT_POWER_DIGITS_LIMIT
    - n < 0: 1 / x^|n| с точностью DIVISION_PRECISION

    Raises:
        ArithError: См. правила выше; переполнение экспоненты результата
            также сообщается как EXPONENT_OUT_OF_RANGE
    """
    if not is_integer(exponent):
        raise ArithError(
            ArithErrorKind.NON_INTEGER_EXPONENT,
            "Exponent must be an integer for power operation",
            detail=format_decimal(exponent),
        )

    n = to_int64(exponent)

    if n == 0:
        return _ONE

    if is_zero(base) and n < 0:
        raise ArithError(ArithErrorKind.DIVISION_BY_ZERO, "Division by zero", detail="^")

    estimated_digits = len(base.as_tuple().digits) * n

    with result_range_guard("^"):
        if 0 < estimated_digits <= EXACT_POWER_DIGITS_LIMIT:
            return _exact_integer_power(base, n)
        return division_context().power(base, n)


def _exact_integer_power(base: Decimal, n: int) -> Decimal:
    """Точная степень n > 0 бинарным возведением (square-and-multiply)."""
    ctx = exact_context()
    result = _ONE
    while n:
        if n & 1:
            result = ctx.multiply(result, base)
        n >>= 1
        if n:
            base = ctx.multiply(base, base)
    return result


# =============================================================================
# ПОСТОБРАБОТКА
# =============================================================================


def round_decimal(value: Decimal, digits: int, rounding: str = ROUND_HALF_EVEN) -> Decimal:
    """
    Округление до фиксированного числа знаков после запятой.

    Не является частью вычисления выражения: применяется вызывающей
    стороной к готовому результату.

    Args:
        value: Значение для округления
        digits: Число знаков после запятой (>= 0)
        rounding: Режим округления decimal (default: ROUND_HALF_EVEN)

    Returns:
        Округлённое значение

    Raises:
        ValueError: Если digits < 0 или неизвестный режим округления
        ArithError(PRECISION_EXCEEDED): Округлённое значение длиннее EXACT_PRECISION цифр

    Examples:
        >>> round_decimal(Decimal("4.193548"), 2)
        Decimal('4.19')
    """
    if digits < 0:
        raise ValueError(f"digits must be non-negative, got {digits}")

    if rounding not in ROUNDING_MODES:
        raise ValueError(f"Unknown rounding mode: {rounding}")

    quantum = _ONE.scaleb(-digits)
    try:
        return value.quantize(quantum, context=rounding_context(rounding))
    except InvalidOperation:
        raise ArithError(
            ArithErrorKind.PRECISION_EXCEEDED,
            f"Value is too large to round to {digits} fractional digits",
            detail=str(digits),
        ) from None


def format_decimal(value: Decimal) -> str:
    """
    Plain-представление без экспоненты и без хвостовых нулей.

    Если plain-форма длиннее PLAIN_RENDER_LIMIT символов (1e999999999),
    значение выводится в научной нотации ('1E+999999999').

    Examples:
        >>> format_decimal(Decimal("1.2E+3"))
        '1200'
        >>> format_decimal(Decimal("0.0420"))
        '0.042'
        >>> format_decimal(Decimal("-0"))
        '0'
    """
    normalized = value.normalize(context=exact_context())
    if normalized.is_zero():
        return "0"
    if _plain_length(normalized) > PLAIN_RENDER_LIMIT:
        return str(normalized)
    return format(normalized, "f")


def _plain_length(value: Decimal) -> int:
    """Число цифр plain-представления (без знака и точки)."""
    _, digits, exponent = value.as_tuple()
    if exponent >= 0:
        return len(digits) + exponent
    return max(len(digits), -exponent) + 1
