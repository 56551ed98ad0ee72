"""Конфигурация приложения из YAML.

Константы вычисляются один раз при импорте; отсутствующие ключи заменяются
значениями по умолчанию.
"""
from __future__ import annotations

from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"


def load_config(path: Path = CONFIG_PATH) -> dict:
    """Parse the YAML config file and return a dict (empty if the file is empty)."""
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


config = load_config()

REFERENCE_WIDTH: float = float(config.get("ratio", {}).get("reference_width", 1080))
MIN_HEIGHT: float = float(config.get("ratio", {}).get("min_height", 565.31))
MAX_HEIGHT: float = float(config.get("ratio", {}).get("max_height", 1350))

BLUR_MIN: int = int(config.get("blur", {}).get("min", 1))
BLUR_MAX: int = int(config.get("blur", {}).get("max", 100))
BLUR_DEFAULT: int = int(config.get("blur", {}).get("default", 50))

WORKING_WIDTH: int = int(config.get("preview", {}).get("working_width", 1080))
PREVIEW_DEBOUNCE_MS: int = int(config.get("preview", {}).get("debounce_ms", 250))

OUTPUT_FORMAT: str = str(config.get("output", {}).get("format", "JPEG"))
OUTPUT_QUALITY: int = int(config.get("output", {}).get("quality", 90))

LOG_LEVEL: str = str(config.get("log", {}).get("level", "INFO"))
