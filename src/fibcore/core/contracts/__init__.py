"""
Contract Validation Module

JSON Schema контракты записей FibResult и RenderedNumber.
"""

from .validators import (
    CONTRACT_NAMES,
    FIB_RESULT_CONTRACT,
    RENDERED_NUMBER_CONTRACT,
    ContractViolation,
    check_record,
    contract_errors,
    load_contract,
    validate_fib_result,
    validate_rendered_number,
)

__all__ = [
    # Constants
    "CONTRACT_NAMES",
    "FIB_RESULT_CONTRACT",
    "RENDERED_NUMBER_CONTRACT",
    # Exceptions
    "ContractViolation",
    # Functions
    "check_record",
    "contract_errors",
    "load_contract",
    "validate_fib_result",
    "validate_rendered_number",
]
