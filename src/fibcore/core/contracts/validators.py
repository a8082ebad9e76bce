"""
Contracts: JSON записи результатов, которые core отдаёт вызывающей стороне

Каждая модель результата сериализуется через model_dump(mode="json") и
проверяется по своей схеме (Draft 2020-12) до выдачи наружу:
- fib_result       ← FibResult.to_contract_record()
- rendered_number  ← RenderedNumber.to_contract_record()

Схемы поставляются как package data (core/contracts/schema/*.json) и
компилируются в validator один раз на процесс.
"""

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Final, List

from jsonschema import Draft202012Validator

FIB_RESULT_CONTRACT: Final[str] = "fib_result"
RENDERED_NUMBER_CONTRACT: Final[str] = "rendered_number"
CONTRACT_NAMES: Final[tuple[str, ...]] = (FIB_RESULT_CONTRACT, RENDERED_NUMBER_CONTRACT)


class ContractViolation(ValueError):
    """
    Запись результата не соответствует своей схеме.

    Для записей, построенных самими моделями, это programming defect:
    модель и схема разошлись.
    """

    def __init__(self, contract: str, errors: List[str]):
        self.contract = contract
        self.errors = errors
        super().__init__(f"{contract} contract violated: " + "; ".join(errors))


@lru_cache(maxsize=None)
def _contract_validator(contract: str) -> Draft202012Validator:
    if contract not in CONTRACT_NAMES:
        raise KeyError(f"Unknown contract {contract!r}, expected one of {CONTRACT_NAMES}")

    text = resources.files(__package__).joinpath("schema").joinpath(f"{contract}.json").read_text("utf-8")
    schema = json.loads(text)
    # Битая схема в package data: падаем сразу при первой загрузке
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def load_contract(contract: str) -> Dict[str, Any]:
    """JSON Schema контракта как dict."""
    return _contract_validator(contract).schema


def contract_errors(contract: str, record: Dict[str, Any]) -> List[str]:
    """
    Все нарушения контракта в виде "path: message", пустой список если
    запись валидна. Ошибки упорядочены по пути в записи.
    """
    found = []
    for error in _contract_validator(contract).iter_errors(record):
        path = "/".join(str(part) for part in error.absolute_path) or "<root>"
        found.append(f"{path}: {error.message}")
    return sorted(found)


def check_record(contract: str, record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Проверка записи по контракту.

    Returns:
        ту же запись, чтобы проверку можно было встроить в return

    Raises:
        ContractViolation: со списком всех нарушений
    """
    errors = contract_errors(contract, record)
    if errors:
        raise ContractViolation(contract, errors)
    return record


def validate_fib_result(record: Dict[str, Any]) -> None:
    """Raises ContractViolation если запись не соответствует fib_result."""
    check_record(FIB_RESULT_CONTRACT, record)


def validate_rendered_number(record: Dict[str, Any]) -> None:
    """Raises ContractViolation если запись не соответствует rendered_number."""
    check_record(RENDERED_NUMBER_CONTRACT, record)
