"""
Модуль для управления конфигурационным файлом

Конфиг (JSON) накладывается на значения по умолчанию; параметры
командной строки имеют приоритет над конфигом.
"""
import copy
import json
import os
import shutil
from typing import Any, Dict, Optional

from .utils import OUTPUT_EXTENSIONS

DEFAULT_CONFIG_NAME = "sstc.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "tables_dir": "tables",
    "output_dir": ".",
    "default_format": "markdown",
    "output_names": {
        "ntos": "syscalls",
        "win32k": "w32ksyscalls",
        "ium": "iumsyscalls",
    },
    "table_titles": {
        "ntos": "NT OS System Service Table",
        "win32k": "Win32k System Service Table",
        "ium": "IUM System Service Table",
    },
}


class ConfigError(Exception):
    """Конфиг не читается или содержит неверные значения"""


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key not in base:
            # неизвестные ключи игнорируются
            continue
        if isinstance(base[key], dict):
            if not isinstance(value, dict):
                raise ConfigError(f"Config key '{key}' must be an object")
            result[key] = _merge(base[key], value)
        else:
            result[key] = value
    return result


def _check_values(config: Dict[str, Any]):
    """Проверяет типы значений после наложения на значения по умолчанию"""
    for key in ("tables_dir", "output_dir", "default_format"):
        if not isinstance(config[key], str):
            raise ConfigError(f"Config key '{key}' must be a string")

    if config["default_format"] not in OUTPUT_EXTENSIONS:
        raise ConfigError(f"Unknown default_format '{config['default_format']}'")

    for section in ("output_names", "table_titles"):
        for table_type, value in config[section].items():
            if not isinstance(value, str):
                raise ConfigError(f"Config key '{section}.{table_type}' must be a string")

    # пустое имя дало бы файл ".md" и т.п.
    for table_type, name in config["output_names"].items():
        if not name.strip():
            raise ConfigError(f"Config key 'output_names.{table_type}' must not be empty")


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Загружает конфиг

    Args:
        config_path: Путь к JSON файлу. Если не указан - используется
            sstc.json в текущей директории (если он есть).

    Returns:
        Конфиг, объединенный со значениями по умолчанию

    Raises:
        ConfigError: файл указан явно и отсутствует, не читается или неверен
    """
    if config_path is None:
        if not os.path.exists(DEFAULT_CONFIG_NAME):
            return copy.deepcopy(DEFAULT_CONFIG)
        config_path = DEFAULT_CONFIG_NAME

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Cannot read config '{config_path}': {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config '{config_path}' must contain a JSON object")

    config = _merge(DEFAULT_CONFIG, data)
    _check_values(config)
    return config


def initialize_config_from_template(config_path: str = DEFAULT_CONFIG_NAME) -> bool:
    """
    Создает конфиг из шаблона (<config_path>.template), если конфига еще нет.

    Args:
        config_path: Путь к создаваемому конфигу

    Returns:
        bool: True если конфиг был создан, False если уже существовал
    """
    if os.path.exists(config_path):
        return False

    template_path = f"{config_path}.template"
    if os.path.exists(template_path):
        shutil.copy2(template_path, config_path)
        print(f"[OK] Config created from template: {config_path}")
        return True

    # Шаблона нет - записываем значения по умолчанию
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(DEFAULT_CONFIG, f, indent=2, ensure_ascii=False)
        f.write("\n")

    print(f"[OK] Default config created: {config_path}")
    return True
