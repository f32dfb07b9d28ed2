# -*- coding: utf-8 -*-
"""
Парсеры таблиц системных сервисов

Поддерживаемые форматы:
- TXT: исходные таблицы, одна запись на строку "ServiceName<TAB>index"
- CSV: ранее сгенерированная объединенная таблица (для повторного чтения)
- JSON: ранее сгенерированная объединенная таблица (для повторного чтения)
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import pandas as pd

# Знаковое десятичное целое, пробелы по краям допускаются
INTEGER_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$", re.ASCII)

# Только \r\n, \r и \n (str.splitlines() делит еще и по \f, \x1c, \u2028 и т.д.)
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

# Причины отказа для parse_table_line
REJECT_FORMAT = "format"
REJECT_VALUE = "value"


class SourceStats:
    """Счетчики обработки одного исходного файла"""

    def __init__(self, version: str, source: Optional[str] = None):
        self.version = version
        self.source = source or version
        self.lines = 0
        self.applied = 0
        self.skipped = 0
        self.blank = 0

    def __repr__(self):
        return (f"SourceStats(version={self.version!r}, lines={self.lines}, "
                f"applied={self.applied}, skipped={self.skipped}, blank={self.blank})")


def parse_service_index(text: str) -> Optional[int]:
    """
    Разбирает номер сервиса

    Examples:
        "42" -> 42
        " -7 " -> -7
        "0x10" -> None
        "99999999999" -> None (вне диапазона int32)

    Args:
        text: Правая часть строки таблицы

    Returns:
        Число или None, если строка не является целым числом int32
    """
    if not INTEGER_RE.match(text):
        return None
    value = int(text)
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def parse_table_line(line: str) -> Tuple[Optional[Tuple[str, int]], Optional[str]]:
    """
    Разбирает одну строку таблицы

    Строка делится по первому символу табуляции. Имя сохраняется как есть.

    Args:
        line: Строка без символа перевода строки

    Returns:
        ((имя, номер), None) при успехе или (None, причина) при ошибке,
        где причина - REJECT_FORMAT или REJECT_VALUE
    """
    tab_index = line.find("\t")
    if tab_index <= 0:
        return None, REJECT_FORMAT

    service_name = line[:tab_index]
    service_index = parse_service_index(line[tab_index + 1:])
    if service_index is None:
        return None, REJECT_VALUE

    return (service_name, service_index), None


def iter_table_records(
    lines: Iterable[str],
    version: str,
    source_stats: Optional[SourceStats] = None,
    verbose: bool = False,
    source: Optional[str] = None,
) -> Iterator[Tuple[str, int]]:
    """
    Перебирает корректные записи таблицы одной версии

    Пустые строки пропускаются, некорректные - считаются и пропускаются
    (обработка файла никогда не прерывается из-за одной строки).

    Args:
        lines: Строки файла
        version: Идентификатор версии
        source_stats: Счетчики для заполнения (необязательно)
        verbose: Печатать предупреждения о некорректных строках
        source: Имя источника для сообщений (по умолчанию - версия)

    Yields:
        Пары (имя сервиса, номер)
    """
    stats = source_stats if source_stats is not None else SourceStats(version, source)
    source_name = source or stats.source

    for raw in lines:
        line = raw.rstrip("\r\n")
        stats.lines += 1

        if not line.strip():
            stats.blank += 1
            continue

        record, reason = parse_table_line(line)
        if record is None:
            stats.skipped += 1
            if verbose:
                if reason == REJECT_FORMAT:
                    print(f"Warning: Invalid line format in {source_name}: {line}")
                else:
                    print(f"Warning: Invalid syscall ID in {source_name}: {line}")
            continue

        yield record


def read_table_lines(path: Union[str, Path]) -> List[str]:
    """
    Читает файл таблицы целиком

    Некорректные байты заменяются, BOM в начале файла игнорируется.
    Ошибки доступа (OSError) не перехватываются - это фатальная ошибка
    для всей обработки.

    Args:
        path: Путь к TXT файлу

    Returns:
        Список строк без символов перевода строки
    """
    with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
        text = f.read()
    lines = LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _records_from_frame(df: pd.DataFrame, versions: List[str]) -> List[Tuple[str, str, int]]:
    records = []
    for _, row in df.iterrows():
        name = row["ServiceName"]
        for version in versions:
            cell = str(row[version]).strip()
            if cell:
                records.append((version, name, int(cell)))
    return records


def load_csv_table(path: Union[str, Path]) -> Tuple[List[str], List[Tuple[str, str, int]]]:
    """
    Читает сгенерированную CSV таблицу обратно

    Все колонки читаются как текст, без распознавания NA (имя "NA" или
    "null" остается строкой), пустая ячейка - значение отсутствует.

    Args:
        path: Путь к CSV файлу

    Returns:
        (список версий из заголовка, список троек (версия, имя, номер))
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False, na_filter=False, encoding="utf-8")
    if list(df.columns[:2]) != ["Index", "ServiceName"]:
        raise ValueError(f"Unexpected CSV header in {path}: {list(df.columns[:2])}")
    versions = [str(col) for col in df.columns[2:]]
    return versions, _records_from_frame(df, versions)


def load_json_table(path: Union[str, Path]) -> Tuple[List[str], List[Tuple[str, str, int]]]:
    """
    Читает сгенерированную JSON таблицу обратно

    Args:
        path: Путь к JSON файлу

    Returns:
        (список версий, список троек (версия, имя, номер))
    """
    with open(path, "r", encoding="utf-8") as f:
        data: Dict[str, Any] = json.load(f)

    versions = list(data["Builds"])
    records = []
    for item in data["Syscalls"]:
        ids = item["Ids"]
        if len(ids) != len(versions):
            raise ValueError(f"Entry {item['Name']!r} has {len(ids)} ids for {len(versions)} builds")
        for version, value in zip(versions, ids):
            if value is not None:
                records.append((version, item["Name"], int(value)))
    return versions, records
