"""
Тесты для BigNat substrate

Проверяемые инварианты:
1. Canonical form (нет старших нулевых limbs, ноль = пустой tuple)
2. Immutability
3. Точность add/subtract/multiply против Python int
4. Underflow в subtract → BigNatInvariantError
5. Zero/one shortcuts в multiply и add
6. Коммутативность и ассоциативность умножения
7. Точная десятичная конверсия и разбор
"""

import pickle
import random

import pytest

from fibcore.core.math.bignat import (
    DECIMAL_CHUNK_DIGITS,
    KARATSUBA_THRESHOLD_LIMBS,
    LIMB_BASE,
    LIMB_BITS,
    ONE,
    ZERO,
    BigNat,
    BigNatInvariantError,
    add,
    assert_canonical,
    compare,
    divmod_small,
    from_decimal_string,
    karatsuba_limbs,
    multiply,
    schoolbook_limbs,
    subtract,
    to_decimal_string,
)


def _random_bignat(rng: random.Random, bits: int) -> BigNat:
    return BigNat.from_int(rng.getrandbits(bits))


# =============================================================================
# ТЕСТЫ: Представление
# =============================================================================


class TestRepresentation:
    """Canonical form и конструкторы."""

    def test_zero_is_empty_tuple(self):
        """Ноль представлен пустым tuple."""
        assert ZERO.limbs == ()
        assert BigNat().limbs == ()
        assert BigNat([0, 0, 0]).limbs == ()
        assert BigNat.from_int(0) == ZERO

    def test_leading_zero_limbs_stripped(self):
        """Старшие нулевые limbs отбрасываются."""
        assert BigNat([5, 0, 0]).limbs == (5,)
        assert BigNat([0, 7, 0]).limbs == (0, 7)

    def test_from_int_least_significant_first(self):
        """Младший limb первым."""
        assert BigNat.from_int(LIMB_BASE + 5).limbs == (5, 1)
        assert BigNat.from_int(LIMB_BASE - 1).limbs == (LIMB_BASE - 1,)

    def test_int_round_trip(self):
        """from_int / to_int сохраняют значение."""
        rng = random.Random(7)
        for bits in (1, 31, 32, 33, 64, 1000, 5000):
            value = rng.getrandbits(bits)
            assert BigNat.from_int(value).to_int() == value

    def test_limb_out_of_range_rejected(self):
        """Limb вне [0, 2^32) отвергается публичным конструктором."""
        with pytest.raises(ValueError):
            BigNat([LIMB_BASE])
        with pytest.raises(ValueError):
            BigNat([-1])
        with pytest.raises(TypeError):
            BigNat([1.5])

    def test_negative_int_rejected(self):
        with pytest.raises(ValueError, match="unsigned"):
            BigNat.from_int(-1)
        with pytest.raises(TypeError):
            BigNat.from_int(True)

    def test_non_canonical_limbs_rejected(self):
        """Non-canonical limbs во внутреннем конструкторе → BigNatInvariantError."""
        with pytest.raises(BigNatInvariantError):
            assert_canonical((1, 0))
        with pytest.raises(BigNatInvariantError):
            assert_canonical((LIMB_BASE,))
        if __debug__:
            with pytest.raises(BigNatInvariantError):
                BigNat.from_canonical_limbs((3, 0))

    def test_invariant_error_is_assertion(self):
        """BigNatInvariantError - это AssertionError (programming defect)."""
        assert issubclass(BigNatInvariantError, AssertionError)

    def test_bit_length(self):
        assert ZERO.bit_length() == 0
        assert ONE.bit_length() == 1
        assert BigNat.from_int(2**LIMB_BITS).bit_length() == LIMB_BITS + 1
        assert BigNat.from_int(2**100 - 1).bit_length() == 100


class TestImmutability:
    """BigNat immutable и hashable."""

    def test_setattr_forbidden(self):
        value = BigNat.from_int(42)
        with pytest.raises(AttributeError):
            value._limbs = (1,)
        with pytest.raises(AttributeError):
            value.extra = 1

    def test_delattr_forbidden(self):
        with pytest.raises(AttributeError):
            del BigNat.from_int(42)._limbs

    def test_hash_and_equality(self):
        a = BigNat.from_int(2**70 + 3)
        b = BigNat([3, 0, 64])
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_pickle_round_trip(self):
        value = BigNat.from_int(3**200)
        assert pickle.loads(pickle.dumps(value)) == value

    def test_operations_do_not_mutate_operands(self):
        a = BigNat.from_int(2**90 + 11)
        b = BigNat.from_int(2**40 + 5)
        limbs_a, limbs_b = a.limbs, b.limbs
        add(a, b)
        subtract(a, b)
        multiply(a, b)
        assert a.limbs == limbs_a
        assert b.limbs == limbs_b


# =============================================================================
# ТЕСТЫ: Сложение / вычитание / сравнение
# =============================================================================


class TestAddSubtract:
    """add, subtract, compare против Python int."""

    def test_carry_across_limbs(self):
        """Carry propagation через все limbs."""
        value = BigNat.from_int(2**128 - 1)
        assert add(value, ONE).to_int() == 2**128
        assert add(value, ONE).limbs == (0, 0, 0, 0, 1)

    def test_random_add(self):
        rng = random.Random(11)
        for _ in range(50):
            x, y = rng.getrandbits(rng.randint(1, 3000)), rng.getrandbits(rng.randint(1, 3000))
            assert add(BigNat.from_int(x), BigNat.from_int(y)).to_int() == x + y

    def test_add_zero_returns_other_operand(self):
        """Сложение с нулём возвращает другой операнд без изменений."""
        value = BigNat.from_int(10**30)
        assert add(value, ZERO) is value
        assert add(ZERO, value) is value
        assert add(ZERO, ZERO) == ZERO

    def test_random_subtract(self):
        rng = random.Random(13)
        for _ in range(50):
            x, y = rng.getrandbits(3000), rng.getrandbits(2000)
            big, small = max(x, y), min(x, y)
            assert subtract(BigNat.from_int(big), BigNat.from_int(small)).to_int() == big - small

    def test_subtract_to_zero_is_canonical(self):
        value = BigNat.from_int(2**100 + 1)
        assert subtract(value, value) == ZERO
        assert subtract(value, value).limbs == ()

    def test_subtract_borrow_normalizes(self):
        """Borrow через старший limb даёт canonical результат."""
        result = subtract(BigNat.from_int(2**64), ONE)
        assert result.limbs == (LIMB_BASE - 1, LIMB_BASE - 1)

    def test_subtract_underflow_raises(self):
        """a < b → BigNatInvariantError, никакого wrap."""
        with pytest.raises(BigNatInvariantError, match="underflow"):
            subtract(ONE, BigNat.from_int(2))
        with pytest.raises(BigNatInvariantError):
            subtract(ZERO, ONE)
        with pytest.raises(BigNatInvariantError):
            subtract(BigNat.from_int(2**64), BigNat.from_int(2**64 + 1))

    def test_compare(self):
        a, b = BigNat.from_int(2**64), BigNat.from_int(2**64 + 1)
        assert compare(a, b) == -1
        assert compare(b, a) == 1
        assert compare(a, BigNat.from_int(2**64)) == 0
        assert a < b and b > a and a <= a and a >= a
        assert ZERO < ONE

    def test_operators(self):
        a, b = BigNat.from_int(1000), BigNat.from_int(24)
        assert (a + b).to_int() == 1024
        assert (a - b).to_int() == 976
        assert (a * b).to_int() == 24000


# =============================================================================
# ТЕСТЫ: Умножение
# =============================================================================


class TestMultiply:
    """Schoolbook, Karatsuba, shortcuts и алгебраические свойства."""

    def test_small_products(self):
        assert multiply(BigNat.from_int(6), BigNat.from_int(7)).to_int() == 42
        product = multiply(BigNat.from_int(LIMB_BASE - 1), BigNat.from_int(LIMB_BASE - 1))
        assert product.to_int() == (LIMB_BASE - 1) ** 2

    def test_multiply_by_zero_returns_canonical_zero(self):
        """x * 0 = 0 для любого x, результат - тот же объект ZERO."""
        huge = BigNat.from_int(7**20000)
        assert multiply(huge, ZERO) is ZERO
        assert multiply(ZERO, huge) is ZERO
        assert multiply(ZERO, ZERO) is ZERO

    def test_multiply_by_one_returns_other_operand(self):
        value = BigNat.from_int(3**500)
        assert multiply(value, ONE) is value
        assert multiply(ONE, value) is value

    def test_schoolbook_matches_int(self):
        rng = random.Random(17)
        for _ in range(20):
            x, y = rng.getrandbits(rng.randint(1, 900)), rng.getrandbits(rng.randint(1, 900))
            a, b = BigNat.from_int(x), BigNat.from_int(y)
            assert BigNat.from_canonical_limbs(schoolbook_limbs(a.limbs, b.limbs)).to_int() == x * y

    def test_karatsuba_matches_schoolbook(self):
        """Karatsuba выше порога совпадает со schoolbook."""
        rng = random.Random(19)
        bits = KARATSUBA_THRESHOLD_LIMBS * LIMB_BITS * 3
        for _ in range(5):
            a, b = _random_bignat(rng, bits), _random_bignat(rng, bits)
            assert karatsuba_limbs(a.limbs, b.limbs) == schoolbook_limbs(a.limbs, b.limbs)

    def test_karatsuba_unbalanced_operands(self):
        """Операнды разной длины (один в несколько раз длиннее)."""
        rng = random.Random(23)
        x = rng.getrandbits(KARATSUBA_THRESHOLD_LIMBS * LIMB_BITS * 5)
        y = rng.getrandbits(KARATSUBA_THRESHOLD_LIMBS * LIMB_BITS + 7)
        assert multiply(BigNat.from_int(x), BigNat.from_int(y)).to_int() == x * y

    def test_karatsuba_sparse_operands(self):
        """Low половина с нулевыми limbs (normalize в split)."""
        x = 2**5000 + 1
        y = 2**4000 + 2**3000
        assert multiply(BigNat.from_int(x), BigNat.from_int(y)).to_int() == x * y

    def test_commutativity(self):
        rng = random.Random(29)
        for _ in range(10):
            a = _random_bignat(rng, rng.randint(1, 4000))
            b = _random_bignat(rng, rng.randint(1, 4000))
            assert multiply(a, b) == multiply(b, a)

    def test_associativity(self):
        rng = random.Random(31)
        for _ in range(5):
            a = _random_bignat(rng, rng.randint(1, 3000))
            b = _random_bignat(rng, rng.randint(1, 3000))
            c = _random_bignat(rng, rng.randint(1, 3000))
            assert multiply(multiply(a, b), c) == multiply(a, multiply(b, c))

    def test_result_is_canonical(self):
        rng = random.Random(37)
        a, b = _random_bignat(rng, 4096), _random_bignat(rng, 4096)
        assert_canonical(multiply(a, b).limbs)


# =============================================================================
# ТЕСТЫ: Деление и десятичная конверсия
# =============================================================================


class TestDecimalConversion:
    """divmod_small, to_decimal_string, from_decimal_string."""

    def test_divmod_small(self):
        value = 10**40 + 123
        quotient, remainder = divmod_small(BigNat.from_int(value), 1000)
        assert quotient.to_int() == value // 1000
        assert remainder == 123

    def test_divmod_small_invalid_divisor(self):
        with pytest.raises(ValueError):
            divmod_small(ONE, 0)
        with pytest.raises(ValueError):
            divmod_small(ONE, LIMB_BASE)

    def test_zero_renders_as_zero(self):
        assert to_decimal_string(ZERO) == "0"

    def test_inner_groups_zero_padded(self):
        """Внутренние группы по 9 цифр дополняются нулями."""
        assert to_decimal_string(BigNat.from_int(10**18)) == "1" + "0" * 18
        assert to_decimal_string(BigNat.from_int(10**18 + 7)) == "1000000000000000007"
        assert to_decimal_string(BigNat.from_int(10**DECIMAL_CHUNK_DIGITS - 1)) == "999999999"

    def test_matches_python_str(self):
        rng = random.Random(41)
        for bits in (1, 32, 64, 100, 1000, 8000):
            value = rng.getrandbits(bits)
            assert to_decimal_string(BigNat.from_int(value)) == str(value)

    def test_parse(self):
        assert from_decimal_string("0") == ZERO
        assert from_decimal_string("000") == ZERO
        assert from_decimal_string("4294967296").limbs == (0, 1)
        assert from_decimal_string("0012345").to_int() == 12345

    def test_parse_invalid(self):
        for text in ("", "12a", "-5", " 5", "1.0", "١٢"):
            with pytest.raises(ValueError):
                from_decimal_string(text)

    def test_round_trip(self):
        """Строка → BigNat → строка восстанавливает исходное значение."""
        rng = random.Random(43)
        for _ in range(20):
            value = _random_bignat(rng, rng.randint(1, 5000))
            assert from_decimal_string(to_decimal_string(value)) == value

    def test_str_and_repr(self):
        assert str(BigNat.from_int(12345)) == "12345"
        assert repr(BigNat.from_int(12345)) == "BigNat(12345)"
        assert "bits" in repr(BigNat.from_int(2**1000))
