"""
JSON Schema контракты калькулятора

Документы, пересекающие границу процесса, проверяются по схемам
из contracts/schema/:
- app_config.json — настройки (файл + env overrides) до построения AppConfig
- evaluation_result.json — запись результата для --json вывода

Схема читается и проходит meta-validation один раз; скомпилированный
Draft202012Validator кэшируется на процесс.
"""

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping

from jsonschema import Draft202012Validator, SchemaError, ValidationError

SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


class Contract(str, Enum):
    APP_CONFIG = "app_config"
    EVALUATION_RESULT = "evaluation_result"

    @property
    def path(self) -> Path:
        return SCHEMA_DIR / f"{self.value}.json"


@lru_cache(maxsize=None)
def load_schema(contract: Contract) -> Dict[str, Any]:
    """
    Чтение схемы контракта с meta-validation.

    Raises:
        FileNotFoundError: Файла схемы нет в SCHEMA_DIR
        ValueError: Схема не соответствует Draft 2020-12
    """
    path = contract.path
    if not path.is_file():
        raise FileNotFoundError(f"Schema not found: {path}")

    schema = json.loads(path.read_text(encoding="utf-8"))
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e
    return schema


@lru_cache(maxsize=None)
def get_validator(contract: Contract) -> Draft202012Validator:
    return Draft202012Validator(load_schema(contract))


def iter_contract_errors(contract: Contract, data: Mapping[str, Any]) -> Iterator[ValidationError]:
    """Все нарушения контракта, а не только первое."""
    return get_validator(contract).iter_errors(data)


def validate_app_config(data: Mapping[str, Any]) -> None:
    """
    Raises:
        ValidationError: Документ настроек не соответствует app_config.json
    """
    get_validator(Contract.APP_CONFIG).validate(data)


def validate_evaluation_result(data: Mapping[str, Any]) -> None:
    """
    Raises:
        ValidationError: Запись не соответствует evaluation_result.json
    """
    get_validator(Contract.EVALUATION_RESULT).validate(data)
