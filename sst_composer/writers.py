# -*- coding: utf-8 -*-
"""
Генерация выходных файлов объединенной таблицы

Основные функции:
- render_markdown: таблица Markdown (|#|ServiceName|версии...|)
- render_csv: CSV с экранированием имени сервиса
- render_json: JSON со списком версий и номерами по позициям
- RENDERERS: выбор функции по формату вывода
- write_output: атомарная запись результата в файл

Все функции render_* только читают таблицу и возвращают байты.
"""

import io
import json
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .excel_writer import render_xlsx
from .html_writer import render_html
from .registry import ServiceTable
from .utils import write_atomic


def _cell(value: Optional[int]) -> str:
    # отсутствующий номер - пустая ячейка, не 0
    return "" if value is None else str(value)


def render_markdown(table: ServiceTable, title: Optional[str] = None) -> bytes:
    """
    Таблица Markdown

    Пример:
        |#|ServiceName|v1|v2|
        |---|---|---|---|
        |1|A|10|11|
        |2|B|20||
    """
    versions = table.versions
    out = io.StringIO()
    out.write("|#|ServiceName|" + "".join(f"{v}|" for v in versions) + "\n")
    out.write("|---|---|" + "---|" * len(versions) + "\n")

    for index, entry in enumerate(table, start=1):
        row = f"|{index}|{entry.name}|"
        row += "".join(f"{_cell(entry.get(v))}|" for v in versions)
        out.write(row + "\n")

    return out.getvalue().encode("utf-8")


def escape_csv_field(field: str) -> str:
    """
    Экранирует поле CSV (RFC 4180)

    Examples:
        'NtClose' -> 'NtClose'
        'a,b' -> '"a,b"'
        'say "hi"' -> в кавычках, внутренние кавычки удваиваются
    """
    if any(ch in field for ch in (",", '"', "\n", "\r")):
        return '"' + field.replace('"', '""') + '"'
    return field


def render_csv(table: ServiceTable, title: Optional[str] = None) -> bytes:
    """
    CSV: Index,ServiceName,<версии>

    Заголовки версий записываются как есть, имена сервисов экранируются.
    """
    versions = table.versions
    out = io.StringIO()
    out.write(",".join(["Index", "ServiceName"] + list(versions)) + "\n")

    for index, entry in enumerate(table, start=1):
        fields = [str(index), escape_csv_field(entry.name)]
        fields.extend(_cell(entry.get(v)) for v in versions)
        out.write(",".join(fields) + "\n")

    return out.getvalue().encode("utf-8")


def render_json(table: ServiceTable, title: Optional[str] = None) -> bytes:
    """
    JSON: {"Builds": [...], "Syscalls": [{"Name": ..., "Ids": [...]}]}

    Номера выровнены по позициям со списком Builds, отсутствующий номер - null.
    """
    versions = list(table.versions)
    output = {
        "Builds": versions,
        "Syscalls": [
            {"Name": entry.name, "Ids": [entry.get(v) for v in versions]}
            for entry in table
        ],
    }
    return (json.dumps(output, indent=2, ensure_ascii=False) + "\n").encode("utf-8")


RENDERERS: Dict[str, Callable[..., bytes]] = {
    "markdown": render_markdown,
    "html": render_html,
    "csv": render_csv,
    "json": render_json,
    "xlsx": render_xlsx,
}

FORMAT_LABELS = {
    "markdown": "Markdown table",
    "html": "HTML table",
    "csv": "CSV table",
    "json": "JSON table",
    "xlsx": "Excel table",
}


def render(table: ServiceTable, output_format: str, title: Optional[str] = None) -> bytes:
    """Рендерит таблицу в указанном формате"""
    try:
        renderer = RENDERERS[output_format]
    except KeyError:
        raise ValueError(f"Unknown output format: {output_format}") from None
    return renderer(table, title=title)


def write_output(
    table: ServiceTable,
    output_format: str,
    output_path: Union[str, Path],
    title: Optional[str] = None,
) -> Path:
    """
    Записывает таблицу в файл

    Рендеринг выполняется полностью в памяти, затем файл записывается
    атомарно - при ошибке частично записанного результата не остается.

    Raises:
        OSError: не удалось записать файл
    """
    data = render(table, output_format, title)
    path = write_atomic(output_path, data)
    print(f"{FORMAT_LABELS[output_format]} written to {path}")
    return path
