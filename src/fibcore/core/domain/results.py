"""
Result models: FibResult и RenderedNumber

Immutable Pydantic модели, которые core передаёт вызывающей стороне.
Живут один цикл request/response: FibResult создаётся engine,
потребляется renderer, RenderedNumber отдаётся на отображение.

JSON форма каждой модели (model_dump(mode="json")) и есть запись
контракта core/contracts/schema/; to_contract_record() проверяет её.
"""

from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, Field, computed_field, field_serializer

from fibcore.core.contracts.validators import (
    FIB_RESULT_CONTRACT,
    RENDERED_NUMBER_CONTRACT,
    check_record,
)
from fibcore.core.math.bignat import BigNat, to_decimal_string


# =============================================================================
# FIB RESULT
# =============================================================================


class FibResult(BaseModel):
    """
    Результат вычисления F(index).

    value хранится как BigNat; в JSON сериализуется точной десятичной
    строкой (это O(n^2) по числу limbs, поэтому только по запросу).
    """

    index: int = Field(..., ge=0, description="Индекс числа Фибоначчи")
    value: BigNat = Field(..., description="F(index)")
    elapsed_s: float = Field(..., ge=0, description="Длительность вычисления (секунды)")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_serializer("value")
    def serialize_value(self, value: BigNat) -> str:
        return to_decimal_string(value)

    @computed_field
    @property
    def bit_length(self) -> int:
        return self.value.bit_length()

    def to_contract_record(self) -> Dict[str, Any]:
        """
        JSON запись, проверенная по контракту fib_result.

        Raises:
            ContractViolation: если модель и схема разошлись
        """
        return check_record(FIB_RESULT_CONTRACT, self.model_dump(mode="json"))


# =============================================================================
# RENDERED NUMBER
# =============================================================================


class DecimalForm(BaseModel):
    """Точная десятичная запись без разделителей и ведущих нулей."""

    kind: Literal["decimal"] = "decimal"
    digits: str = Field(..., pattern=r"^(0|[1-9][0-9]*)$")

    model_config = {"frozen": True}

    @property
    def text(self) -> str:
        return self.digits


class ScientificForm(BaseModel):
    """
    Научная запись: mantissa (ведущая цифра + truncated дробная часть)
    и десятичный exponent = число цифр - 1.
    """

    kind: Literal["scientific"] = "scientific"
    mantissa: str = Field(..., pattern=r"^[0-9](\.[0-9]+)?$")
    exponent: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @property
    def text(self) -> str:
        return f"{self.mantissa}e+{self.exponent}"


class RenderedNumber(BaseModel):
    """
    Отображаемая форма числа (tagged union по полю kind) и длительность
    конверсии, отдельная от длительности вычисления.
    """

    form: Union[DecimalForm, ScientificForm] = Field(..., discriminator="kind")
    elapsed_s: float = Field(..., ge=0, description="Длительность конверсии (секунды)")

    model_config = {"frozen": True}

    @property
    def is_scientific(self) -> bool:
        return isinstance(self.form, ScientificForm)

    @property
    def text(self) -> str:
        return self.form.text

    def to_contract_record(self) -> Dict[str, Any]:
        """JSON запись, проверенная по контракту rendered_number."""
        return check_record(RENDERED_NUMBER_CONTRACT, self.model_dump(mode="json"))
