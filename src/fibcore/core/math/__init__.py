"""
Core math modules для fibcore

Arbitrary-precision арифметика (BigNat) и параллельное умножение.
"""

# BigNat substrate
from fibcore.core.math.bignat import (
    # Representation constants
    DECIMAL_CHUNK_DIGITS,
    KARATSUBA_THRESHOLD_LIMBS,
    LIMB_BASE,
    LIMB_BITS,
    # Types
    ONE,
    ZERO,
    BigNat,
    # Exceptions
    BigNatInvariantError,
    # Operations
    add,
    compare,
    divmod_small,
    from_decimal_string,
    multiply,
    subtract,
    to_decimal_string,
)

# Parallel multiplication
from fibcore.core.math.parallel_mul import (
    EXECUTOR_KINDS,
    PARALLEL_THRESHOLD_LIMBS_DEFAULT,
    MultiplicationPool,
    PoolConfig,
)

__all__ = [
    # BigNat: Constants
    "DECIMAL_CHUNK_DIGITS",
    "KARATSUBA_THRESHOLD_LIMBS",
    "LIMB_BASE",
    "LIMB_BITS",
    # BigNat: Types
    "BigNat",
    "ONE",
    "ZERO",
    # BigNat: Exceptions
    "BigNatInvariantError",
    # BigNat: Operations
    "add",
    "compare",
    "divmod_small",
    "from_decimal_string",
    "multiply",
    "subtract",
    "to_decimal_string",
    # Parallel: Constants
    "EXECUTOR_KINDS",
    "PARALLEL_THRESHOLD_LIMBS_DEFAULT",
    # Parallel: Types
    "MultiplicationPool",
    "PoolConfig",
]
