"""
Fibonacci engine.

Fast doubling over BigNat with optional parallel multiplication.
"""

from fibcore.engine.fast_doubling import (
    FastDoublingEngine,
    InvalidIndex,
    compute_fibonacci,
    fib_pair,
    validate_index,
)

__all__ = [
    "FastDoublingEngine",
    "InvalidIndex",
    "compute_fibonacci",
    "fib_pair",
    "validate_index",
]
