"""
Fast Doubling: вычисление F(n) за O(log n) умножений BigNat

Тождества:
    F(2k)   = F(k) * (2*F(k+1) - F(k))
    F(2k+1) = F(k)^2 + F(k+1)^2

Биты n обходятся от старшего к младшему, на каждом уровне пара
(F(k), F(k+1)) переходит в (F(2k), F(2k+1)) при бите 0
или в (F(2k+1), F(2k+2)) при бите 1.

Рекурсия по уровням последовательная (каждый уровень зависит от
предыдущего); параллелизм только внутри одного большого умножения
(см. MultiplicationPool).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. 2*F(k+1) >= F(k) для всех k >= 0, unsigned subtract никогда не
   underflow (нарушение → BigNatInvariantError)
2. Отрицательный или нецелый индекс → InvalidIndex, без wrap
3. Длительность вычисления возвращается в FibResult
"""

import logging
import time
from typing import Callable, Optional

from fibcore.core.domain.results import FibResult
from fibcore.core.math.bignat import ONE, ZERO, BigNat, add, multiply, subtract
from fibcore.core.math.parallel_mul import MultiplicationPool

logger = logging.getLogger(__name__)

MultiplyFn = Callable[[BigNat, BigNat], BigNat]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidIndex(ValueError):
    """
    Индекс Фибоначчи не является неотрицательным целым.

    Вызывающая сторона (interactive shell) должна валидировать ввод сама;
    engine отвергает такой индекс явно, а не вычисляет мусор.
    """

    pass


# =============================================================================
# VALIDATION
# =============================================================================


def validate_index(n: object) -> int:
    """
    Проверка индекса Фибоначчи.

    Args:
        n: Кандидат в индекс

    Returns:
        n как int

    Raises:
        InvalidIndex: если n не int (bool и float не принимаются) или n < 0

    Examples:
        >>> validate_index(10)
        10
        >>> validate_index(-1)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        InvalidIndex: ...
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidIndex(
            f"Fibonacci index must be a non-negative integer, got {type(n).__name__}: {n!r}"
        )
    if n < 0:
        raise InvalidIndex(f"Fibonacci index must be non-negative, got {n}")
    return n


# =============================================================================
# FAST DOUBLING
# =============================================================================


def fib_pair(n: int, mul: MultiplyFn = multiply) -> tuple[BigNat, BigNat]:
    """
    Пара (F(n), F(n+1)) методом fast doubling.

    Args:
        n: Неотрицательный индекс
        mul: Функция умножения (sequential multiply или pool.multiply)

    Returns:
        (F(n), F(n+1))

    Raises:
        InvalidIndex: если n невалиден
    """
    n = validate_index(n)

    a, b = ZERO, ONE  # (F(0), F(1))
    for shift in range(n.bit_length() - 1, -1, -1):
        # 2*F(k+1) >= F(k): subtract проверяет это сам
        doubled_minus = subtract(add(b, b), a)
        c = mul(a, doubled_minus)  # F(2k)
        d = add(mul(a, a), mul(b, b))  # F(2k+1)

        if (n >> shift) & 1:
            a, b = d, add(c, d)
        else:
            a, b = c, d

    return a, b


class FastDoublingEngine:
    """Engine вычисления F(n) с замером времени.

    Без pool все умножения последовательные. С pool большие умножения
    разбиваются на параллельные partial products; pool не принадлежит
    engine и закрывается владельцем.
    """

    def __init__(self, pool: Optional[MultiplicationPool] = None):
        """
        Args:
            pool: worker pool для больших умножений (опционально)
        """
        self.pool = pool
        self._multiply: MultiplyFn = pool.multiply if pool is not None else multiply

    def compute(self, n: int) -> FibResult:
        """
        Вычисление F(n).

        F(0) и F(1) возвращаются напрямую, без итераций.

        Raises:
            InvalidIndex: если n не является неотрицательным int
        """
        index = validate_index(n)

        start = time.perf_counter()
        if index == 0:
            value = ZERO
        elif index == 1:
            value = ONE
        else:
            value, _ = fib_pair(index, self._multiply)
        elapsed_s = time.perf_counter() - start

        logger.debug(
            "Computed F(%d): %d bits in %.6fs",
            index,
            value.bit_length(),
            elapsed_s,
        )
        return FibResult(index=index, value=value, elapsed_s=elapsed_s)


def compute_fibonacci(n: int, pool: Optional[MultiplicationPool] = None) -> FibResult:
    """Вычисление F(n) одним вызовом (см. FastDoublingEngine.compute)."""
    return FastDoublingEngine(pool).compute(n)
