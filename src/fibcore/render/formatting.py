"""
Presentation helpers для вызывающей стороны.

Форматирование длительностей, разделители тысяч и текстовый отчёт по
одному вычислению. Сам цикл ввода/вывода сюда не входит.
"""

from fibcore.core.domain.results import FibResult, RenderedNumber


def format_duration(seconds: float) -> str:
    """
    Человекочитаемая длительность.

    Examples:
        >>> format_duration(0.000042)
        '42μs'
        >>> format_duration(0.25)
        '250ms'
        >>> format_duration(3.14159)
        '3.142s'
    """
    if seconds < 0:
        raise ValueError(f"duration must be non-negative, got {seconds}")
    if seconds < 1e-3:
        return f"{round(seconds * 1e6)}μs"
    if seconds < 1.0:
        return f"{round(seconds * 1e3)}ms"
    return f"{seconds:.3f}s"


def thousands_separator(number: int) -> str:
    """1234567 → '1,234,567'"""
    return f"{number:,}"


def format_report(fib_result: FibResult, rendered: RenderedNumber) -> str:
    """
    Текстовый отчёт: индекс, длительности вычисления и конверсии, результат.

    Exponent научной записи выводится с разделителями тысяч.
    """
    if rendered.is_scientific:
        conversion_label = "Result to Scientific notation duration"
        result_text = f"{rendered.form.mantissa}e+{thousands_separator(rendered.form.exponent)}"
    else:
        conversion_label = "Result to String duration"
        result_text = rendered.text

    lines = [
        f"Calculated the {thousands_separator(fib_result.index)}th Fibonacci number",
        f"Fibonacci calculation duration: {format_duration(fib_result.elapsed_s)}",
        f"{conversion_label}: {format_duration(rendered.elapsed_s)}",
        "Result:",
        result_text,
    ]
    return "\n".join(lines)
