"""
Rendering of BigNat values for display.
"""

from fibcore.render.formatting import format_duration, format_report, thousands_separator
from fibcore.render.renderer import (
    DEFAULT_FRACTION_DIGITS,
    MAX_FRACTION_DIGITS,
    SCIENTIFIC_THRESHOLD_EXPONENT,
    NumericRenderer,
    RendererConfig,
    render_number,
)

__all__ = [
    # Constants
    "DEFAULT_FRACTION_DIGITS",
    "MAX_FRACTION_DIGITS",
    "SCIENTIFIC_THRESHOLD_EXPONENT",
    # Renderer
    "NumericRenderer",
    "RendererConfig",
    "render_number",
    # Formatting
    "format_duration",
    "format_report",
    "thousands_separator",
]
