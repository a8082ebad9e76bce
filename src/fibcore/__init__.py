"""
fibcore: arbitrary-precision Fibonacci engine.

Computes F(n) for very large n with fast doubling over an immutable
limb-based BigNat, parallelizing large multiplications across a worker
pool, and renders the result as exact decimal or truncated scientific
notation. Both steps report their own duration.

Typical use, with settings taken from FIBCORE_* environment variables:

    with MultiplicationPool(load_pool_config()) as pool:
        result = FastDoublingEngine(pool).compute(1_000_000)
    rendered = NumericRenderer(load_renderer_config()).render(result.value)
    print(format_report(result, rendered))
"""

from fibcore.config import load_pool_config, load_renderer_config
from fibcore.core.domain import DecimalForm, FibResult, RenderedNumber, ScientificForm
from fibcore.core.math import BigNat, BigNatInvariantError, MultiplicationPool, PoolConfig
from fibcore.engine import FastDoublingEngine, InvalidIndex, compute_fibonacci, validate_index
from fibcore.render import NumericRenderer, RendererConfig, format_report, render_number

__version__ = "0.1.0"

__all__ = [
    "BigNat",
    "BigNatInvariantError",
    "DecimalForm",
    "FastDoublingEngine",
    "FibResult",
    "InvalidIndex",
    "MultiplicationPool",
    "NumericRenderer",
    "PoolConfig",
    "RenderedNumber",
    "RendererConfig",
    "ScientificForm",
    "compute_fibonacci",
    "format_report",
    "load_pool_config",
    "load_renderer_config",
    "render_number",
    "validate_index",
]
