"""Прикладной слой: настройки, логирование, CLI."""

from .config import AppConfig, EvaluatorSettings, LoggingSettings
from .logging_config import setup_logging

__all__ = [
    "AppConfig",
    "EvaluatorSettings",
    "LoggingSettings",
    "setup_logging",
]
