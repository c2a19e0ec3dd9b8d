"""
Тесты Decimal Arithmetic

Проверяет:
1. Парсинг литералов и рендеринг в plain-нотацию
2. Точность операций в exact context
3. Политику ошибок (деление/остаток на ноль, показатель степени)
4. Округление как отдельный шаг постобработки
"""

import decimal
from decimal import MAX_EMAX, ROUND_HALF_UP, Decimal

import pytest

from src.core.errors import ArithError, ArithErrorKind
from src.core.math.decimal_arithmetic import (
    DIVISION_PRECISION,
    EXACT_PRECISION,
    INT64_MAX,
    INT64_MIN,
    PLAIN_RENDER_LIMIT,
    add,
    divide,
    format_decimal,
    is_integer,
    multiply,
    negate,
    parse_decimal,
    power,
    remainder,
    result_range_guard,
    round_decimal,
    subtract,
    to_int64,
)


# =============================================================================
# ТЕСТЫ: Парсинг и рендеринг
# =============================================================================


class TestParseDecimal:
    """Тесты парсинга литералов."""

    def test_valid_literals(self) -> None:
        assert parse_decimal("42") == Decimal(42)
        assert parse_decimal("1.2e3") == Decimal(1200)
        assert parse_decimal("4.2E-2") == Decimal("0.042")

    def test_literal_keeps_all_digits(self) -> None:
        literal = "1." + "1" * 200
        assert parse_decimal(literal).as_tuple().digits == (1,) * 201

    def test_invalid_literals(self) -> None:
        for text in ("1.2.3", "4e", "", "abc"):
            with pytest.raises(ValueError, match="Invalid decimal literal"):
                parse_decimal(text)

    def test_non_finite_rejected(self) -> None:
        """NaN и Infinity не являются числами выражения."""
        for text in ("NaN", "Infinity", "-inf"):
            with pytest.raises(ValueError):
                parse_decimal(text)


class TestFormatDecimal:
    """Тесты plain-рендеринга."""

    def test_no_exponent(self) -> None:
        assert format_decimal(Decimal("1.2E+3")) == "1200"
        assert format_decimal(Decimal("1E+30")) == "1" + "0" * 30

    def test_trailing_zeros_removed(self) -> None:
        assert format_decimal(Decimal("0.0420")) == "0.042"
        assert format_decimal(Decimal("10.000")) == "10"

    def test_small_value(self) -> None:
        assert format_decimal(Decimal("6.62607015e-34")) == "0." + "0" * 33 + "662607015"

    def test_zero(self) -> None:
        """Отрицательный ноль и ноль с экспонентой → '0'."""
        assert format_decimal(Decimal("0")) == "0"
        assert format_decimal(Decimal("-0")) == "0"
        assert format_decimal(Decimal("0E-10")) == "0"

    def test_negative(self) -> None:
        assert format_decimal(Decimal("-2.50")) == "-2.5"

    def test_scientific_past_plain_limit(self) -> None:
        """Plain-форма длиннее PLAIN_RENDER_LIMIT не строится."""
        assert format_decimal(Decimal("1E+999999999")) == "1E+999999999"
        assert format_decimal(Decimal("-2.50E+999999999")) == "-2.5E+999999999"
        assert format_decimal(Decimal(f"1E+{PLAIN_RENDER_LIMIT}")) == f"1E+{PLAIN_RENDER_LIMIT}"
        assert format_decimal(Decimal(f"1E-{PLAIN_RENDER_LIMIT}")) == f"1E-{PLAIN_RENDER_LIMIT}"

    def test_plain_up_to_limit(self) -> None:
        rendered = format_decimal(Decimal(f"1E+{PLAIN_RENDER_LIMIT - 1}"))
        assert rendered == "1" + "0" * (PLAIN_RENDER_LIMIT - 1)


# =============================================================================
# ТЕСТЫ: Операции
# =============================================================================


class TestOperations:
    """Тесты арифметических операций."""

    def test_exact_addition(self) -> None:
        """Сложение без округления при любом разбросе порядков."""
        result = add(Decimal("1e30"), Decimal("1e-30"))
        assert len(result.as_tuple().digits) == 61

    def test_subtract_and_negate(self) -> None:
        assert subtract(Decimal("0.3"), Decimal("0.1")) == Decimal("0.2")
        assert negate(Decimal("5")) == Decimal("-5")
        assert negate(Decimal("-5")) == Decimal("5")

    def test_exact_multiplication(self) -> None:
        a = 10**40 + 7
        b = 10**45 + 3
        assert multiply(Decimal(a), Decimal(b)) == Decimal(a * b)

    def test_finite_division_is_exact(self) -> None:
        assert divide(Decimal(3), Decimal(4)) == Decimal("0.75")

    def test_repeating_division_precision(self) -> None:
        result = divide(Decimal(1), Decimal(7))
        assert len(result.as_tuple().digits) == DIVISION_PRECISION

    def test_division_by_zero(self) -> None:
        with pytest.raises(ArithError, match="Division by zero") as exc_info:
            divide(Decimal(1), Decimal("0.000"))

        assert exc_info.value.kind is ArithErrorKind.DIVISION_BY_ZERO
        assert exc_info.value.detail == "/"

    def test_remainder_signs(self) -> None:
        """Знак остатка совпадает со знаком делимого."""
        assert remainder(Decimal(10), Decimal(3)) == Decimal(1)
        assert remainder(Decimal(-10), Decimal(3)) == Decimal(-1)
        assert remainder(Decimal(10), Decimal(-3)) == Decimal(1)
        assert remainder(Decimal(-10), Decimal(-3)) == Decimal(-1)

    def test_remainder_by_zero(self) -> None:
        with pytest.raises(ArithError) as exc_info:
            remainder(Decimal(1), Decimal(0))

        assert exc_info.value.kind is ArithErrorKind.MODULO_BY_ZERO
        assert exc_info.value.detail == "%"


class TestResultLimits:
    """Тесты переполнения экспоненты и лимита точных цифр."""

    def test_multiply_overflow(self) -> None:
        huge = Decimal("1e900000000000000000")
        with pytest.raises(ArithError) as exc_info:
            multiply(huge, huge)

        assert exc_info.value.kind is ArithErrorKind.EXPONENT_OUT_OF_RANGE
        assert exc_info.value.detail == "*"

    def test_subtract_overflow(self) -> None:
        huge = Decimal(f"9e{MAX_EMAX}")
        with pytest.raises(ArithError) as exc_info:
            subtract(negate(huge), huge)

        assert exc_info.value.kind is ArithErrorKind.EXPONENT_OUT_OF_RANGE

    def test_divide_overflow(self) -> None:
        with pytest.raises(ArithError) as exc_info:
            divide(Decimal("1e900000000000000000"), Decimal("1e-900000000000000000"))

        assert exc_info.value.kind is ArithErrorKind.EXPONENT_OUT_OF_RANGE
        assert exc_info.value.detail == "/"

    def test_exact_precision_boundary(self) -> None:
        """Ровно EXACT_PRECISION цифр — ещё точный результат."""
        value = add(Decimal(f"1e{EXACT_PRECISION - 1}"), Decimal(1))
        assert len(value.as_tuple().digits) == EXACT_PRECISION

        with pytest.raises(ArithError) as exc_info:
            add(Decimal(f"1e{EXACT_PRECISION}"), Decimal(1))
        assert exc_info.value.kind is ArithErrorKind.PRECISION_EXCEEDED

    def test_remainder_precision_exceeded(self) -> None:
        with pytest.raises(ArithError) as exc_info:
            remainder(Decimal(f"1e{2 * EXACT_PRECISION}"), Decimal(3))

        assert exc_info.value.kind is ArithErrorKind.PRECISION_EXCEEDED
        assert exc_info.value.detail == "%"

    def test_guard_maps_signals(self) -> None:
        with pytest.raises(ArithError) as exc_info:
            with result_range_guard("^"):
                raise decimal.Overflow()
        assert exc_info.value.kind is ArithErrorKind.EXPONENT_OUT_OF_RANGE
        assert exc_info.value.detail == "^"

        with pytest.raises(ArithError) as exc_info:
            with result_range_guard("-"):
                raise decimal.Inexact()
        assert exc_info.value.kind is ArithErrorKind.PRECISION_EXCEEDED

    def test_guard_passes_other_errors(self) -> None:
        with pytest.raises(decimal.InvalidOperation):
            with result_range_guard("%"):
                raise decimal.InvalidOperation()


class TestPower:
    """Тесты целочисленной степени."""

    def test_exact_power(self) -> None:
        assert power(Decimal(3), Decimal(40)) == Decimal(3**40)
        assert power(Decimal("-2"), Decimal(3)) == Decimal(-8)

    def test_zero_exponent(self) -> None:
        assert power(Decimal(0), Decimal(0)) == Decimal(1)
        assert power(Decimal("-7.5"), Decimal(0)) == Decimal(1)

    def test_negative_exponent(self) -> None:
        assert power(Decimal(4), Decimal(-1)) == Decimal("0.25")

    def test_negative_exponent_repeating(self) -> None:
        result = power(Decimal(3), Decimal(-1))
        assert len(result.as_tuple().digits) == DIVISION_PRECISION

    def test_zero_base_negative_exponent(self) -> None:
        with pytest.raises(ArithError) as exc_info:
            power(Decimal(0), Decimal(-2))

        assert exc_info.value.kind is ArithErrorKind.DIVISION_BY_ZERO
        assert exc_info.value.detail == "^"

    def test_non_integer_exponent(self) -> None:
        with pytest.raises(ArithError) as exc_info:
            power(Decimal(2), Decimal("1.5"))

        assert exc_info.value.kind is ArithErrorKind.NON_INTEGER_EXPONENT
        assert exc_info.value.detail == "1.5"


class TestIntegerHelpers:
    """Тесты is_integer и to_int64."""

    def test_is_integer(self) -> None:
        assert is_integer(Decimal("2"))
        assert is_integer(Decimal("2.000"))
        assert is_integer(Decimal("1.2e3"))
        assert not is_integer(Decimal("0.5"))
        assert not is_integer(Decimal("Infinity"))

    def test_to_int64_bounds(self) -> None:
        assert to_int64(Decimal(INT64_MAX)) == INT64_MAX
        assert to_int64(Decimal(INT64_MIN)) == INT64_MIN

    def test_to_int64_zero_with_exponent(self) -> None:
        assert to_int64(Decimal("0e20")) == 0
        assert to_int64(Decimal("-0E+5")) == 0
        assert power(Decimal(7), Decimal("0e20")) == Decimal(1)

    def test_to_int64_out_of_range(self) -> None:
        for value in (Decimal(INT64_MAX + 1), Decimal(INT64_MIN - 1), Decimal("1e100")):
            with pytest.raises(ArithError) as exc_info:
                to_int64(value)
            assert exc_info.value.kind is ArithErrorKind.EXPONENT_OUT_OF_RANGE


# =============================================================================
# ТЕСТЫ: Округление
# =============================================================================


class TestRoundDecimal:
    """Тесты округления результата."""

    def test_default_half_even(self) -> None:
        """Банковское округление по умолчанию."""
        assert round_decimal(Decimal("2.5"), 0) == Decimal(2)
        assert round_decimal(Decimal("3.5"), 0) == Decimal(4)
        assert round_decimal(Decimal("4.193548"), 2) == Decimal("4.19")

    def test_explicit_mode(self) -> None:
        assert round_decimal(Decimal("2.5"), 0, ROUND_HALF_UP) == Decimal(3)

    def test_pads_to_requested_digits(self) -> None:
        assert str(round_decimal(Decimal("7"), 3)) == "7.000"

    def test_negative_digits_rejected(self) -> None:
        with pytest.raises(ValueError, match="digits must be non-negative"):
            round_decimal(Decimal(1), -1)

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown rounding mode"):
            round_decimal(Decimal(1), 2, "ROUND_SIDEWAYS")

    def test_too_many_digits_after_rounding(self) -> None:
        """Дополнение нулями не может выйти за EXACT_PRECISION цифр."""
        with pytest.raises(ArithError) as exc_info:
            round_decimal(Decimal(f"1e{EXACT_PRECISION}"), 2)

        assert exc_info.value.kind is ArithErrorKind.PRECISION_EXCEEDED
        assert exc_info.value.detail == "2"
