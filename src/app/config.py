"""
AppConfig — настройки приложения

Источники (в порядке возрастания приоритета):
1. Значения по умолчанию (pydantic модель)
2. Файл настроек config.toml
3. Переменные окружения APP__<SECTION>__<KEY> (например, APP__EVALUATOR__ROUND_DIGITS=8)

Объединённый документ проверяется JSON Schema контрактом app_config,
затем загружается в immutable pydantic модель.

Вычислитель выражений параметров не принимает: настройки определяют
только политику на границе (округление результата, лимит длины входа,
логирование).
"""

import logging
import os
import tomllib
from decimal import ROUND_HALF_EVEN
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

from src.app.logging_config import DEFAULT_LOG_FORMAT
from src.core.contracts import validate_app_config
from src.core.math.decimal_arithmetic import ROUNDING_MODES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")
ENV_PREFIX = "APP"
ENV_SEPARATOR = "__"


# =============================================================================
# MODELS
# =============================================================================


class EvaluatorSettings(BaseModel):
    """Политика выдачи результата вычисления."""

    round_digits: int | None = Field(
        None, ge=0, le=1000, description="Знаков после запятой в ответе (None — точное значение)"
    )
    rounding: str = Field(ROUND_HALF_EVEN, description="Режим округления decimal")
    max_expression_length: int = Field(
        4096, ge=1, le=1_048_576, description="Максимальная длина выражения на входе"
    )

    model_config = {"frozen": True}

    @field_validator("rounding")
    @classmethod
    def validate_rounding(cls, v: str) -> str:
        if v not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {v}")
        return v


class LoggingSettings(BaseModel):
    """Настройки логирования."""

    level: str = Field("WARNING", description="Уровень root логгера")
    format: str = Field(DEFAULT_LOG_FORMAT, min_length=1, description="logging формат строки")

    model_config = {"frozen": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown logging level: {v}")
        return level


class AppConfig(BaseModel):
    """Настройки приложения."""

    evaluator: EvaluatorSettings = Field(default_factory=EvaluatorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"frozen": True}

    @classmethod
    def default(cls) -> "AppConfig":
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AppConfig":
        """
        Загрузка из уже объединённого документа.

        Raises:
            jsonschema.ValidationError: Документ не соответствует контракту
            pydantic.ValidationError: Значения не проходят валидацию модели
        """
        document = dict(data)
        validate_app_config(document)
        return cls.model_validate(document)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AppConfig":
        """
        Загрузка из TOML файла; переменные окружения имеют приоритет над файлом.

        Args:
            path: Путь к файлу настроек
            environ: Окружение (default: os.environ)

        Raises:
            FileNotFoundError: Файл не найден
            tomllib.TOMLDecodeError: Файл не является валидным TOML
            jsonschema.ValidationError / pydantic.ValidationError: Невалидные значения
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            document = tomllib.load(f)

        overrides = env_overrides(os.environ if environ is None else environ)
        merged = merge_documents(document, overrides)

        logger.debug("Loaded config from %s with %d env override(s)", path, len(overrides))
        return cls.from_mapping(merged)

    @classmethod
    def load(
        cls,
        path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AppConfig":
        """
        Загрузка с fallback: явный путь → DEFAULT_CONFIG_PATH → только окружение.

        Явно указанный, но отсутствующий файл — ошибка (FileNotFoundError).
        """
        if path is not None:
            return cls.from_file(path, environ)

        if DEFAULT_CONFIG_PATH.exists():
            return cls.from_file(DEFAULT_CONFIG_PATH, environ)

        overrides = env_overrides(os.environ if environ is None else environ)
        return cls.from_mapping(overrides)


# =============================================================================
# ENVIRONMENT OVERRIDES
# =============================================================================


def parse_env_value(raw: str) -> Union[bool, int, float, str]:
    """
    Попытка интерпретировать строку окружения как bool/int/float.

    Examples:
        >>> parse_env_value("8")
        8
        >>> parse_env_value("true")
        True
        >>> parse_env_value("INFO")
        'INFO'
    """
    lowered = raw.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"

    try:
        return int(raw)
    except ValueError:
        pass

    try:
        return float(raw)
    except ValueError:
        return raw


def env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """
    Вложенный документ из переменных APP__SECTION__KEY.

    Имена секций и ключей приводятся к lowercase.

    Examples:
        >>> env_overrides({"APP__EVALUATOR__ROUND_DIGITS": "8", "HOME": "/root"})
        {'evaluator': {'round_digits': 8}}
    """
    prefix = ENV_PREFIX + ENV_SEPARATOR
    result: Dict[str, Any] = {}

    for name in sorted(environ):
        if not name.startswith(prefix):
            continue

        parts = [part.lower() for part in name[len(prefix):].split(ENV_SEPARATOR)]
        if not all(parts):
            continue

        node = result
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = parse_env_value(environ[name])

    return result


def merge_documents(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Рекурсивное слияние: значения overrides побеждают."""
    merged: Dict[str, Any] = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_documents(merged[key], value)
        else:
            merged[key] = value
    return merged
