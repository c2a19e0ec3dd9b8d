"""
Contract Validation Module

Модуль для валидации JSON контрактов: настройки приложения и
машиночитаемые результаты вычислений.
"""

from .validators import (
    SCHEMA_DIR,
    Contract,
    get_validator,
    iter_contract_errors,
    load_schema,
    validate_app_config,
    validate_evaluation_result,
)

__all__ = [
    "SCHEMA_DIR",
    "Contract",
    # Functions
    "load_schema",
    "get_validator",
    "iter_contract_errors",
    "validate_app_config",
    "validate_evaluation_result",
]
