# -*- coding: utf-8 -*-
"""
Запись объединенной таблицы в Excel

Основные функции:
- render_xlsx: книга Excel с одним листом (Index, ServiceName, версии)
- apply_excel_styles: применение стилей к ячейкам
"""

import io
import re
from typing import Optional

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from .composer import table_to_dataframe
from .registry import ServiceTable

# Символы, запрещенные в именах листов Excel
INVALID_SHEET_CHARS_RE = re.compile(r"[\[\]:*?/\\]")

DEFAULT_SHEET_NAME = "Services"


def sheet_name_from_title(title: Optional[str]) -> str:
    """
    Имя листа из заголовка таблицы (не более 31 символа)

    Examples:
        "Win32k System Service Table" -> "Win32k System Service Table"
        None -> "Services"
    """
    if not title:
        return DEFAULT_SHEET_NAME
    name = INVALID_SHEET_CHARS_RE.sub("_", title).strip()
    return name[:31] or DEFAULT_SHEET_NAME


def apply_excel_styles(ws: Worksheet, name_col_idx: int = 2):
    """
    Применяет стили к листу:
    - Заголовок: жирный шрифт, серая заливка, закрепление первой строки
    - Выравнивание (left для имени сервиса, center для остальных)
    - Границы всех ячеек
    - Автоматическая ширина столбцов

    Args:
        ws: Лист с уже записанными данными
        name_col_idx: Номер колонки с именем сервиса (с 1)
    """
    thin_border = Border(
        left=Side(style='thin', color='000000'),
        right=Side(style='thin', color='000000'),
        top=Side(style='thin', color='000000'),
        bottom=Side(style='thin', color='000000')
    )
    header_fill = PatternFill(start_color='666666', end_color='666666', fill_type='solid')
    header_font = Font(bold=True, color='FFFFFF')

    for row_idx, row in enumerate(ws.iter_rows(), start=1):
        for col_idx, cell in enumerate(row, start=1):
            if col_idx == name_col_idx:
                cell.alignment = Alignment(horizontal='left', vertical='center')
            else:
                cell.alignment = Alignment(horizontal='center', vertical='center')
            cell.border = thin_border

            if row_idx == 1:
                cell.fill = header_fill
                cell.font = header_font

    ws.freeze_panes = "C2"

    # Ширина столбцов по содержимому
    for column in ws.columns:
        max_length = 0
        column_letter = column[0].column_letter
        for cell in column:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[column_letter].width = min(max_length + 2, 100)


def render_xlsx(table: ServiceTable, title: Optional[str] = None) -> bytes:
    """
    Книга Excel с одним листом

    Колонки как в CSV: Index, ServiceName, версии. Отсутствующий номер -
    пустая ячейка.
    """
    df = table_to_dataframe(table)
    sheet_name = sheet_name_from_title(title)

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        apply_excel_styles(writer.book[sheet_name])
    return buffer.getvalue()
