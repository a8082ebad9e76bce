"""
Domain models and value objects.

Contains the per-request result records: FibResult, RenderedNumber.
"""

from fibcore.core.domain.results import (
    DecimalForm,
    FibResult,
    RenderedNumber,
    ScientificForm,
)

__all__ = [
    "FibResult",
    "RenderedNumber",
    "DecimalForm",
    "ScientificForm",
]
