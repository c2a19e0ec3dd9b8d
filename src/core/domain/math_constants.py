"""
MathConstant — Таблица именованных констант

Фиксированный набор математических и физических констант, доступных
в выражениях по имени (регистр не важен).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Набор констант закрыт (Enum), runtime-регистрации нет
2. Каждая константа имеет ровно одно каноническое имя (lowercase)
3. Значения — точные Decimal литералы, без float-конверсий
"""

from decimal import Decimal
from enum import Enum
from typing import Final


class MathConstant(str, Enum):
    """
    Именованная константа.

    Значение Enum — каноническое lowercase имя для поиска и отображения.
    """

    PI = "pi"
    TAU = "tau"
    E = "e"
    PHI = "phi"
    SPEED_OF_LIGHT = "c"  # m/s
    PLANCK = "h"  # J*s
    GRAVITATIONAL = "g"  # m^3/(kg*s^2)
    GAS_CONSTANT = "r"  # J/(mol*K)
    AVOGADRO = "na"  # 1/mol
    BOLTZMANN = "kb"  # J/K
    ELEMENTARY_CHARGE = "ec"  # C

    @classmethod
    def from_name(cls, name: str) -> "MathConstant":
        """
        Поиск константы по имени без учёта регистра.

        Args:
            name: Имя из выражения (например, 'Pi', 'TAU', 'kb')

        Returns:
            Соответствующая константа

        Raises:
            KeyError: Если имя не входит в таблицу
        """
        try:
            return cls(name.lower())
        except ValueError:
            raise KeyError(name) from None

    @property
    def value_decimal(self) -> Decimal:
        """Точное значение константы."""
        return _CONSTANT_VALUES[self]

    def __str__(self) -> str:
        return self.value


# =============================================================================
# ЗНАЧЕНИЯ
# =============================================================================

# Математические константы: 40 знаков после запятой
# Физические: точные значения SI 2019 (c, h, na, kb, ec) и CODATA 2018 (g, r)
_CONSTANT_VALUES: Final[dict[MathConstant, Decimal]] = {
    MathConstant.PI: Decimal("3.1415926535897932384626433832795028841971"),
    MathConstant.TAU: Decimal("6.2831853071795864769252867665590057683942"),
    MathConstant.E: Decimal("2.7182818284590452353602874713526624977572"),
    MathConstant.PHI: Decimal("1.6180339887498948482045868343656381177203"),
    MathConstant.SPEED_OF_LIGHT: Decimal("299792458"),
    MathConstant.PLANCK: Decimal("6.62607015e-34"),
    MathConstant.GRAVITATIONAL: Decimal("6.67430e-11"),
    MathConstant.GAS_CONSTANT: Decimal("8.314462618"),
    MathConstant.AVOGADRO: Decimal("6.02214076e23"),
    MathConstant.BOLTZMANN: Decimal("1.380649e-23"),
    MathConstant.ELEMENTARY_CHARGE: Decimal("1.602176634e-19"),
}


def list_constants() -> list[tuple[str, Decimal]]:
    """
    Таблица констант в порядке объявления.

    Returns:
        Список пар (каноническое имя, значение)
    """
    return [(const.value, const.value_decimal) for const in MathConstant]
