"""
Parallel Multiplication: fork/join умножение больших BigNat

Fixed-size worker pool (по числу доступных CPU) вычисляет независимые
partial products одного большого умножения:

    a = a1 * B^m + a0,  b = b1 * B^m + b0
    tasks: a1*b1, a0*b0, (a0+a1)*(b0+b1)   (Karatsuba split)

Задачи получают immutable limb tuples и возвращают результат по значению.
Shared mutable state отсутствует, locks для вычислений не нужны.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат идентичен последовательному multiply()
2. Все задачи одного умножения завершаются до сборки результата (join)
3. Задачи не порождают новых задач (bounded fan-out, нет deadlock)
4. Ниже parallel_threshold_limbs умножение выполняется в вызывающем потоке
"""

import logging
import os
import threading
from concurrent.futures import (
    ALL_COMPLETED,
    Executor,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    wait,
)
from dataclasses import dataclass, field
from typing import Final, Optional

from fibcore.core.math.bignat import (
    ZERO,
    BigNat,
    Limbs,
    add_limbs,
    combine_karatsuba,
    karatsuba_limbs,
    multiply,
    split_limbs,
)

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Порог параллелизации (в limbs, по более короткому операнду).
# 512 limbs = 16384 бит: ниже этого overhead передачи задач в pool
# превышает выигрыш
PARALLEL_THRESHOLD_LIMBS_DEFAULT: Final[int] = 512

EXECUTOR_PROCESS: Final[str] = "process"
EXECUTOR_THREAD: Final[str] = "thread"
EXECUTOR_KINDS: Final[tuple[str, ...]] = (EXECUTOR_PROCESS, EXECUTOR_THREAD)


def _default_max_workers() -> int:
    return os.cpu_count() or 1


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PoolConfig:
    """Конфигурация worker pool.

    executor_kind:
    - "process": ProcessPoolExecutor, реальный параллелизм CPU-bound задач
    - "thread": ThreadPoolExecutor, без накладных расходов на pickling
    """

    max_workers: int = field(default_factory=_default_max_workers)
    parallel_threshold_limbs: int = PARALLEL_THRESHOLD_LIMBS_DEFAULT
    executor_kind: str = EXECUTOR_PROCESS

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.parallel_threshold_limbs < 2:
            raise ValueError(
                f"parallel_threshold_limbs must be >= 2, got {self.parallel_threshold_limbs}"
            )
        if self.executor_kind not in EXECUTOR_KINDS:
            raise ValueError(
                f"executor_kind must be one of {EXECUTOR_KINDS}, got {self.executor_kind!r}"
            )


# =============================================================================
# WORKER TASK
# =============================================================================


def _partial_product(a: Limbs, b: Limbs) -> Limbs:
    # Выполняется в worker: только последовательное умножение, без submit
    return karatsuba_limbs(a, b)


# =============================================================================
# MULTIPLICATION POOL
# =============================================================================


class MultiplicationPool:
    """Process-scoped handle worker pool для больших умножений.

    Executor создаётся лениво при первом параллельном умножении и далее не
    меняется. Handle передаётся явно (FastDoublingEngine(pool=...)),
    глобального экземпляра нет.

    Использование:
        with MultiplicationPool(PoolConfig(max_workers=4)) as pool:
            product = pool.multiply(a, b)
    """

    def __init__(self, config: PoolConfig | None = None):
        """
        Args:
            config: конфигурация pool (опционально, используется default)
        """
        self.config = config or PoolConfig()
        self._executor: Optional[Executor] = None
        self._closed = False
        # Защищает только ленивое создание executor
        self._init_lock = threading.Lock()

    @property
    def is_started(self) -> bool:
        return self._executor is not None

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _get_executor(self) -> Executor:
        with self._init_lock:
            if self._closed:
                raise RuntimeError("MultiplicationPool is closed")
            if self._executor is None:
                if self.config.executor_kind == EXECUTOR_PROCESS:
                    self._executor = ProcessPoolExecutor(max_workers=self.config.max_workers)
                else:
                    self._executor = ThreadPoolExecutor(
                        max_workers=self.config.max_workers,
                        thread_name_prefix="fibcore-mul",
                    )
                logger.info(
                    "Started %s multiplication pool with %d workers (threshold=%d limbs)",
                    self.config.executor_kind,
                    self.config.max_workers,
                    self.config.parallel_threshold_limbs,
                )
            return self._executor

    def should_parallelize(self, a: BigNat, b: BigNat) -> bool:
        """True если умножение a * b будет разбито на параллельные задачи."""
        if self.config.max_workers < 2:
            return False
        return min(a.limb_count, b.limb_count) >= self.config.parallel_threshold_limbs

    def multiply(self, a: BigNat, b: BigNat) -> BigNat:
        """
        Точное умножение a * b с параллельными partial products.

        Zero/one shortcuts и операнды ниже порога обрабатываются
        последовательным multiply() в вызывающем потоке.

        Raises:
            RuntimeError: если pool закрыт и требуется параллельное умножение
            Любое исключение worker-задачи пробрасывается вызывающему
        """
        if a.is_zero() or b.is_zero():
            return ZERO
        if a.is_one() or b.is_one() or not self.should_parallelize(a, b):
            return multiply(a, b)

        m = max(a.limb_count, b.limb_count) // 2
        a0, a1 = split_limbs(a.limbs, m)
        b0, b1 = split_limbs(b.limbs, m)

        executor = self._get_executor()
        high = executor.submit(_partial_product, a1, b1)
        low = executor.submit(_partial_product, a0, b0)
        mid = executor.submit(_partial_product, add_limbs(a0, a1), add_limbs(b0, b1))

        # Join: все задачи завершены до чтения любого результата
        wait((high, low, mid), return_when=ALL_COMPLETED)
        z2, z0, z_mid = high.result(), low.result(), mid.result()

        logger.debug(
            "Parallel multiply: %d x %d limbs, split at %d",
            a.limb_count,
            b.limb_count,
            m,
        )
        return BigNat.from_canonical_limbs(combine_karatsuba(z2, z_mid, z0, m))

    def close(self) -> None:
        """Остановка executor (ожидает завершения текущих задач)."""
        with self._init_lock:
            executor, self._executor = self._executor, None
            self._closed = True
        if executor is not None:
            executor.shutdown(wait=True)
            logger.info("Multiplication pool shut down")

    def __enter__(self) -> "MultiplicationPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
