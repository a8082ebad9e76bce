"""
BigNat: неизменяемые беззнаковые целые произвольной точности

Представление: tuple из 32-битных limbs, младший limb первым.
Ноль представлен пустым tuple (единственная canonical form).

Модуль содержит два уровня API:
- Limb-level примитивы (add_limbs, sub_limbs, karatsuba_limbs, ...) над
  tuple[int, ...]. Используются parallel_mul для отправки partial products
  в worker pool без сериализации объектов BigNat.
- Value-level API (BigNat, add, subtract, multiply, ...) с проверкой
  инвариантов и shortcut-ами для нуля и единицы.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Canonical form: нет старших нулевых limbs, каждый limb в [0, 2^32)
2. BigNat immutable: все операции возвращают новые значения
3. Все операции точные (никакого округления)
4. Unsigned underflow при вычитании → BigNatInvariantError, никогда не wrap
"""

from typing import Final, Iterable, Tuple

# =============================================================================
# КОНСТАНТЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Ширина limb в битах. 32 бита: произведение двух limbs + carry
# укладывается в 64 бита
LIMB_BITS: Final[int] = 32
LIMB_BASE: Final[int] = 1 << LIMB_BITS
LIMB_MASK: Final[int] = LIMB_BASE - 1

# Batch для извлечения десятичных цифр: 10^9 < 2^32, делитель помещается в limb
DECIMAL_CHUNK_DIGITS: Final[int] = 9
DECIMAL_CHUNK_BASE: Final[int] = 10**DECIMAL_CHUNK_DIGITS

# Ниже этого размера (в limbs, по более короткому операнду) используется
# schoolbook умножение, начиная с него: Karatsuba split на половины
KARATSUBA_THRESHOLD_LIMBS: Final[int] = 32

Limbs = Tuple[int, ...]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class BigNatInvariantError(AssertionError):
    """
    Нарушение инварианта BigNat (programming defect).

    Возникает при:
    - non-canonical limbs, попавших во внутренний конструктор
    - unsigned underflow в subtract (a < b)

    Не предназначено для перехвата и восстановления: сигнализирует об ошибке
    в коде, а не во входных данных.
    """

    pass


# =============================================================================
# LIMB-LEVEL ПРИМИТИВЫ
# =============================================================================


def normalize_limbs(limbs: list[int]) -> Limbs:
    """Отбрасывает старшие нулевые limbs и возвращает canonical tuple."""
    end = len(limbs)
    while end and limbs[end - 1] == 0:
        end -= 1
    return tuple(limbs[:end])


def assert_canonical(limbs: Limbs) -> None:
    """
    Проверка canonical form.

    Raises:
        BigNatInvariantError: если есть старший нулевой limb или limb вне
            диапазона [0, LIMB_BASE)
    """
    if limbs and limbs[-1] == 0:
        raise BigNatInvariantError(
            f"Non-canonical BigNat: most significant limb is zero (limbs={len(limbs)})"
        )
    for position, limb in enumerate(limbs):
        if not 0 <= limb < LIMB_BASE:
            raise BigNatInvariantError(
                f"Non-canonical BigNat: limb[{position}]={limb} outside [0, 2^{LIMB_BITS})"
            )


def compare_limbs(a: Limbs, b: Limbs) -> int:
    """Сравнение canonical limbs: -1 если a < b, 0 если равны, 1 если a > b."""
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


def add_limbs(a: Limbs, b: Limbs) -> Limbs:
    """
    Сложение limb-wise с propagation carry.

    Сложность O(max(len(a), len(b))). Для canonical входов результат
    canonical.
    """
    if len(a) < len(b):
        a, b = b, a

    result = []
    carry = 0
    for i in range(len(b)):
        total = a[i] + b[i] + carry
        result.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS
    for i in range(len(b), len(a)):
        total = a[i] + carry
        result.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS
    if carry:
        result.append(carry)

    return tuple(result)


def sub_limbs(a: Limbs, b: Limbs) -> Limbs:
    """
    Unsigned вычитание a - b.

    Raises:
        BigNatInvariantError: если a < b (underflow)
    """
    if compare_limbs(a, b) < 0:
        raise BigNatInvariantError(
            f"Unsigned subtraction underflow: minuend ({len(a)} limbs) < "
            f"subtrahend ({len(b)} limbs)"
        )

    result = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - (b[i] if i < len(b) else 0) - borrow
        if diff < 0:
            diff += LIMB_BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)

    return normalize_limbs(result)


def shift_limbs(a: Limbs, count: int) -> Limbs:
    """Умножение на LIMB_BASE^count (сдвиг на count limbs)."""
    if not a or count == 0:
        return a
    return (0,) * count + a


def split_limbs(a: Limbs, position: int) -> tuple[Limbs, Limbs]:
    """
    Разбиение a = high * LIMB_BASE^position + low.

    Returns:
        (low, high), оба в canonical form
    """
    low = normalize_limbs(list(a[:position]))
    high = a[position:]
    return low, high


def schoolbook_limbs(a: Limbs, b: Limbs) -> Limbs:
    """Schoolbook умножение, O(len(a) * len(b))."""
    if not a or not b:
        return ()

    result = [0] * (len(a) + len(b))
    for i, x in enumerate(a):
        if x == 0:
            continue
        carry = 0
        k = i
        for y in b:
            total = result[k] + x * y + carry
            result[k] = total & LIMB_MASK
            carry = total >> LIMB_BITS
            k += 1
        while carry:
            total = result[k] + carry
            result[k] = total & LIMB_MASK
            carry = total >> LIMB_BITS
            k += 1

    return normalize_limbs(result)


def karatsuba_limbs(a: Limbs, b: Limbs) -> Limbs:
    """
    Последовательное умножение с Karatsuba split.

    Для операндов ниже KARATSUBA_THRESHOLD_LIMBS (по более короткому)
    используется schoolbook. Иначе операнды делятся на high/low половины
    в позиции m = max(len) // 2:

        z2 = a1 * b1
        z0 = a0 * b0
        z1 = (a0 + a1) * (b0 + b1) - z2 - z0
        a * b = z2 * B^(2m) + z1 * B^m + z0
    """
    if len(a) < KARATSUBA_THRESHOLD_LIMBS or len(b) < KARATSUBA_THRESHOLD_LIMBS:
        return schoolbook_limbs(a, b)

    m = max(len(a), len(b)) // 2
    a0, a1 = split_limbs(a, m)
    b0, b1 = split_limbs(b, m)

    z2 = karatsuba_limbs(a1, b1)
    z0 = karatsuba_limbs(a0, b0)
    z_mid = karatsuba_limbs(add_limbs(a0, a1), add_limbs(b0, b1))

    return combine_karatsuba(z2, z_mid, z0, m)


def combine_karatsuba(z2: Limbs, z_mid: Limbs, z0: Limbs, m: int) -> Limbs:
    """Сборка результата Karatsuba из трёх partial products."""
    z1 = sub_limbs(sub_limbs(z_mid, z2), z0)
    return add_limbs(add_limbs(shift_limbs(z2, 2 * m), shift_limbs(z1, m)), z0)


def divmod_small_limbs(a: Limbs, divisor: int) -> tuple[Limbs, int]:
    """Short division на однолимбовый делитель (1 <= divisor < LIMB_BASE)."""
    quotient = [0] * len(a)
    remainder = 0
    for i in range(len(a) - 1, -1, -1):
        current = (remainder << LIMB_BITS) | a[i]
        quotient[i], remainder = divmod(current, divisor)
    return normalize_limbs(quotient), remainder


def mul_small_add_limbs(a: Limbs, factor: int, addend: int) -> Limbs:
    """a * factor + addend для однолимбовых factor и addend."""
    result = []
    carry = addend
    for limb in a:
        total = limb * factor + carry
        result.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS
    while carry:
        result.append(carry & LIMB_MASK)
        carry >>= LIMB_BITS
    return normalize_limbs(result)


# =============================================================================
# BIGNAT
# =============================================================================


class BigNat:
    """
    Неизменяемое беззнаковое целое произвольной точности.

    Публичный конструктор принимает произвольную последовательность limbs
    (младший первым), проверяет диапазон и нормализует. Внутренние операции
    используют from_canonical_limbs, который только проверяет canonical form.

    Examples:
        >>> BigNat.from_int(2**32 + 5).limbs
        (5, 1)
        >>> BigNat([7, 0, 0]).limbs
        (7,)
        >>> BigNat().is_zero()
        True
    """

    __slots__ = ("_limbs",)

    def __init__(self, limbs: Iterable[int] = ()):
        raw = list(limbs)
        for position, limb in enumerate(raw):
            if isinstance(limb, bool) or not isinstance(limb, int):
                raise TypeError(f"limb[{position}] must be int, got {type(limb).__name__}")
            if not 0 <= limb < LIMB_BASE:
                raise ValueError(f"limb[{position}]={limb} outside [0, 2^{LIMB_BITS})")
        object.__setattr__(self, "_limbs", normalize_limbs(raw))

    @classmethod
    def from_canonical_limbs(cls, limbs: Limbs) -> "BigNat":
        """
        Конструктор для результатов внутренних операций.

        Canonical form проверяется в debug-режиме (__debug__), нарушение
        приводит к BigNatInvariantError.
        """
        if __debug__:
            assert_canonical(limbs)
        instance = object.__new__(cls)
        object.__setattr__(instance, "_limbs", limbs)
        return instance

    @classmethod
    def from_int(cls, value: int) -> "BigNat":
        """
        Конверсия из Python int.

        Raises:
            TypeError: если value не int
            ValueError: если value < 0
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"BigNat.from_int expects int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"BigNat is unsigned, got {value}")

        limbs = []
        while value:
            limbs.append(value & LIMB_MASK)
            value >>= LIMB_BITS
        return cls.from_canonical_limbs(tuple(limbs))

    def to_int(self) -> int:
        """Конверсия в Python int."""
        result = 0
        for limb in reversed(self._limbs):
            result = (result << LIMB_BITS) | limb
        return result

    @property
    def limbs(self) -> Limbs:
        return self._limbs

    @property
    def limb_count(self) -> int:
        return len(self._limbs)

    def bit_length(self) -> int:
        if not self._limbs:
            return 0
        return (len(self._limbs) - 1) * LIMB_BITS + self._limbs[-1].bit_length()

    def is_zero(self) -> bool:
        return not self._limbs

    def is_one(self) -> bool:
        return self._limbs == (1,)

    # Immutability

    def __setattr__(self, name, value):
        raise AttributeError("BigNat is immutable")

    def __delattr__(self, name):
        raise AttributeError("BigNat is immutable")

    def __reduce__(self):
        return (BigNat, (self._limbs,))

    # Value semantics

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigNat):
            return NotImplemented
        return self._limbs == other._limbs

    def __hash__(self) -> int:
        return hash(self._limbs)

    def __lt__(self, other: "BigNat") -> bool:
        if not isinstance(other, BigNat):
            return NotImplemented
        return compare_limbs(self._limbs, other._limbs) < 0

    def __le__(self, other: "BigNat") -> bool:
        if not isinstance(other, BigNat):
            return NotImplemented
        return compare_limbs(self._limbs, other._limbs) <= 0

    def __gt__(self, other: "BigNat") -> bool:
        if not isinstance(other, BigNat):
            return NotImplemented
        return compare_limbs(self._limbs, other._limbs) > 0

    def __ge__(self, other: "BigNat") -> bool:
        if not isinstance(other, BigNat):
            return NotImplemented
        return compare_limbs(self._limbs, other._limbs) >= 0

    def __bool__(self) -> bool:
        return bool(self._limbs)

    # Arithmetic operators

    def __add__(self, other: "BigNat") -> "BigNat":
        if not isinstance(other, BigNat):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: "BigNat") -> "BigNat":
        if not isinstance(other, BigNat):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other: "BigNat") -> "BigNat":
        if not isinstance(other, BigNat):
            return NotImplemented
        return multiply(self, other)

    def __str__(self) -> str:
        return to_decimal_string(self)

    def __repr__(self) -> str:
        # Полная десятичная форма только для небольших значений
        if len(self._limbs) <= 4:
            return f"BigNat({self.to_int()})"
        return f"BigNat(<{self.bit_length()} bits, {len(self._limbs)} limbs>)"


ZERO: Final[BigNat] = BigNat.from_canonical_limbs(())
ONE: Final[BigNat] = BigNat.from_canonical_limbs((1,))


# =============================================================================
# VALUE-LEVEL ОПЕРАЦИИ
# =============================================================================


def add(a: BigNat, b: BigNat) -> BigNat:
    """
    Сложение a + b.

    Сложение с нулём возвращает другой операнд без изменений (тот же объект).

    Examples:
        >>> add(BigNat.from_int(2**32 - 1), ONE).limbs
        (0, 1)
    """
    if a.is_zero():
        return b
    if b.is_zero():
        return a
    return BigNat.from_canonical_limbs(add_limbs(a.limbs, b.limbs))


def subtract(a: BigNat, b: BigNat) -> BigNat:
    """
    Unsigned вычитание a - b.

    Raises:
        BigNatInvariantError: если a < b
    """
    if b.is_zero():
        return a
    return BigNat.from_canonical_limbs(sub_limbs(a.limbs, b.limbs))


def compare(a: BigNat, b: BigNat) -> int:
    """-1 если a < b, 0 если a == b, 1 если a > b."""
    return compare_limbs(a.limbs, b.limbs)


def multiply(a: BigNat, b: BigNat) -> BigNat:
    """
    Последовательное точное умножение a * b.

    - Нулевой операнд → canonical ZERO за O(1), независимо от размера
      другого операнда
    - Операнд ONE → другой операнд без изменений
    - Иначе schoolbook / Karatsuba по KARATSUBA_THRESHOLD_LIMBS

    Для параллельного умножения больших операндов см. MultiplicationPool.
    """
    if a.is_zero() or b.is_zero():
        return ZERO
    if a.is_one():
        return b
    if b.is_one():
        return a
    return BigNat.from_canonical_limbs(karatsuba_limbs(a.limbs, b.limbs))


def divmod_small(a: BigNat, divisor: int) -> tuple[BigNat, int]:
    """
    Деление на однолимбовый делитель.

    Raises:
        ValueError: если divisor вне [1, LIMB_BASE)
    """
    if isinstance(divisor, bool) or not isinstance(divisor, int):
        raise TypeError(f"divisor must be int, got {type(divisor).__name__}")
    if not 1 <= divisor < LIMB_BASE:
        raise ValueError(f"divisor must be in [1, 2^{LIMB_BITS}), got {divisor}")

    quotient, remainder = divmod_small_limbs(a.limbs, divisor)
    return BigNat.from_canonical_limbs(quotient), remainder


# =============================================================================
# ДЕСЯТИЧНАЯ КОНВЕРСИЯ
# =============================================================================


def to_decimal_string(a: BigNat) -> str:
    """
    Точная десятичная запись без разделителей и ведущих нулей.

    Последовательно делит на 10^9, получая группы цифр от младшей к
    старшей, затем разворачивает. Внутренние группы дополняются нулями
    до 9 цифр.

    Сложность O(L^2) по числу limbs L: каждое деление на 10^9 проходит
    все оставшиеся limbs. Для больших n конверсия F(n) дороже самого
    вычисления (fast doubling с Karatsuba растёт как O(L^1.58)).

    Examples:
        >>> to_decimal_string(ZERO)
        '0'
        >>> to_decimal_string(BigNat.from_int(10**18 + 7))
        '1000000000000000007'
    """
    if a.is_zero():
        return "0"

    groups = []
    current = a.limbs
    while current:
        current, remainder = divmod_small_limbs(current, DECIMAL_CHUNK_BASE)
        groups.append(remainder)
    groups.reverse()

    head = str(groups[0])
    tail = "".join(f"{group:0{DECIMAL_CHUNK_DIGITS}d}" for group in groups[1:])
    return head + tail


def from_decimal_string(text: str) -> BigNat:
    """
    Разбор десятичной строки (только ASCII цифры, ведущие нули допустимы).

    Raises:
        ValueError: если строка пустая или содержит не-цифры
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")
    if not text or not text.isascii() or not text.isdigit():
        raise ValueError(f"Invalid decimal string: {text[:40]!r}")

    limbs: Limbs = ()
    # Первая группа короче, чтобы остальные были ровно по 9 цифр
    position = len(text) % DECIMAL_CHUNK_DIGITS or DECIMAL_CHUNK_DIGITS
    limbs = mul_small_add_limbs(limbs, 10**position, int(text[:position]))
    while position < len(text):
        chunk = int(text[position : position + DECIMAL_CHUNK_DIGITS])
        limbs = mul_small_add_limbs(limbs, DECIMAL_CHUNK_BASE, chunk)
        position += DECIMAL_CHUNK_DIGITS

    return BigNat.from_canonical_limbs(limbs)
