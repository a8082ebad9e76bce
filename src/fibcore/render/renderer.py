"""
Numeric Renderer: BigNat → отображаемая строка

Правило выбора формы:
- value > 10^35 (строго) → научная запись
- иначе → точная десятичная строка

Научная запись строится из точной десятичной строки:
mantissa = ведущая цифра + следующие fraction_digits цифр (TRUNCATE,
без округления), exponent = число цифр - 1.

Длительность конверсии замеряется отдельно от вычисления: извлечение
цифр для очень больших значений само по себе дорогое.
"""

import logging
import time
from dataclasses import dataclass
from typing import Final

from fibcore.core.domain.results import DecimalForm, RenderedNumber, ScientificForm
from fibcore.core.math.bignat import BigNat, from_decimal_string, to_decimal_string

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Порог научной записи: value > 10^SCIENTIFIC_THRESHOLD_EXPONENT
SCIENTIFIC_THRESHOLD_EXPONENT: Final[int] = 35

# Дробные цифры mantissa по умолчанию (5 значащих цифр: "2.8057e+41")
DEFAULT_FRACTION_DIGITS: Final[int] = 4

# Верхняя граница дробных цифр mantissa
MAX_FRACTION_DIGITS: Final[int] = 15


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class RendererConfig:
    """Конфигурация renderer."""

    fraction_digits: int = DEFAULT_FRACTION_DIGITS
    threshold_exponent: int = SCIENTIFIC_THRESHOLD_EXPONENT

    def __post_init__(self):
        if not 0 <= self.fraction_digits <= MAX_FRACTION_DIGITS:
            raise ValueError(
                f"fraction_digits must be in [0, {MAX_FRACTION_DIGITS}], "
                f"got {self.fraction_digits}"
            )
        if self.threshold_exponent < 0:
            raise ValueError(
                f"threshold_exponent must be non-negative, got {self.threshold_exponent}"
            )


# =============================================================================
# RENDERER
# =============================================================================


class NumericRenderer:
    """Конвертация BigNat в DecimalForm или ScientificForm."""

    def __init__(self, config: RendererConfig | None = None):
        self.config = config or RendererConfig()
        self._threshold = from_decimal_string("1" + "0" * self.config.threshold_exponent)

    @property
    def threshold(self) -> BigNat:
        return self._threshold

    def use_scientific(self, value: BigNat) -> bool:
        """True если value строго больше 10^threshold_exponent."""
        return value > self._threshold

    def to_decimal(self, value: BigNat) -> DecimalForm:
        return DecimalForm(digits=to_decimal_string(value))

    def to_scientific(self, value: BigNat) -> ScientificForm:
        """
        Научная запись с truncation дробной части.

        Если цифр меньше, чем ведущая + fraction_digits, дробная часть
        дополняется нулями справа.

        Exponent и цифры берутся из полной to_decimal_string(), поэтому
        стоимость та же O(L^2), что и у decimal формы.

        Examples:
            >>> NumericRenderer().to_scientific(BigNat.from_int(199999)).text
            '1.9999e+5'
        """
        digits = to_decimal_string(value)
        exponent = len(digits) - 1
        fraction_digits = self.config.fraction_digits

        if fraction_digits == 0:
            mantissa = digits[0]
        else:
            fraction = digits[1 : 1 + fraction_digits].ljust(fraction_digits, "0")
            mantissa = f"{digits[0]}.{fraction}"

        return ScientificForm(mantissa=mantissa, exponent=exponent)

    def render(self, value: BigNat) -> RenderedNumber:
        """
        Выбор формы и конверсия с замером длительности.

        Returns:
            RenderedNumber (form + elapsed_s конверсии)
        """
        start = time.perf_counter()
        if self.use_scientific(value):
            form = self.to_scientific(value)
        else:
            form = self.to_decimal(value)
        elapsed_s = time.perf_counter() - start

        logger.debug("Rendered %d-bit value as %s in %.6fs", value.bit_length(), form.kind, elapsed_s)
        return RenderedNumber(form=form, elapsed_s=elapsed_s)


def render_number(value: BigNat, config: RendererConfig | None = None) -> RenderedNumber:
    """Конверсия одним вызовом (см. NumericRenderer.render)."""
    return NumericRenderer(config).render(value)
