# -*- coding: utf-8 -*-
"""
Модель поведения интерактивной HTML таблицы

Повторяет логику встроенного скрипта (html_assets.TABLE_JS) на Python,
чтобы ее можно было проверить без браузера:
- search: скрытие строк, где имя не содержит строку поиска
- toggle_column / show_all: выбор колонок версий
- highlights: пометки "same" / "diff" для выбранных ячеек

Также содержит read_html_table для чтения таблицы из сгенерированной страницы.
"""

from html.parser import HTMLParser
from typing import Dict, List, Optional, Set, Tuple

FIRST_VERSION_COLUMN = 2
NAME_COLUMN = 1

MARK_SAME = "same"
MARK_DIFF = "diff"


def classify_cells(values: List[str]) -> Optional[str]:
    """
    Правило подсветки строки по непустым значениям выбранных ячеек

    Examples:
        ["10", "11"] -> "diff"
        ["10", "10"] -> "same"
        ["20"] -> None (меньше двух непустых ячеек)
    """
    if len(values) < 2:
        return None
    if all(v == values[0] for v in values[1:]):
        return MARK_SAME
    return MARK_DIFF


class TableViewState:
    """
    Состояние страницы: строка поиска, выбранные колонки, пометки

    Args:
        header: Заголовки колонок (#, ServiceName, версии...)
        rows: Строки таблицы - тексты ячеек в порядке колонок
    """

    def __init__(self, header: List[str], rows: List[List[str]]):
        self.header = list(header)
        self.rows = [list(r) for r in rows]
        self.query = ""
        self._active: List[int] = []
        self._highlights: Dict[Tuple[int, int], str] = {}

    # --- поиск ---

    def search(self, text: str):
        """Обработчик ввода в поле поиска"""
        self.query = text

    @property
    def visible_rows(self) -> List[int]:
        needle = self.query.upper()
        return [
            i for i, row in enumerate(self.rows)
            if len(row) <= NAME_COLUMN or needle in row[NAME_COLUMN].upper()
        ]

    # --- выбор колонок ---

    def toggle_column(self, column: int):
        """Обработчик нажатия на переключатель колонки"""
        if column < FIRST_VERSION_COLUMN or column >= len(self.header):
            raise IndexError(f"Column {column} is not a version column")
        if column in self._active:
            self._active.remove(column)
        else:
            self._active.append(column)
        self._recompute()

    def show_all(self):
        """Обработчик кнопки "Show All" """
        self._active = []
        self._recompute()

    @property
    def active_columns(self) -> List[int]:
        return list(self._active)

    @property
    def filtered_columns(self) -> Set[int]:
        """Колонки с пометкой выбора в заголовке"""
        return set(self._active)

    @property
    def hidden_columns(self) -> Set[int]:
        if not self._active:
            return set()
        return {
            c for c in range(FIRST_VERSION_COLUMN, len(self.header))
            if c not in self._active
        }

    @property
    def highlights(self) -> Dict[Tuple[int, int], str]:
        """Пометки {(строка, колонка): "same" | "diff"}"""
        return dict(self._highlights)

    def row_mark(self, row: int) -> Optional[str]:
        marks = {mark for (r, _), mark in self._highlights.items() if r == row}
        return marks.pop() if marks else None

    def _recompute(self):
        self._highlights = {}
        if len(self._active) < 2:
            return
        for r, row in enumerate(self.rows):
            filled = []
            for column in self._active:
                if column < len(row):
                    text = row[column].strip()
                    if text:
                        filled.append((column, text))
            mark = classify_cells([text for _, text in filled])
            if mark:
                for column, _ in filled:
                    self._highlights[(r, column)] = mark


class _TableParser(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.header: List[str] = []
        self.rows: List[List[str]] = []
        self.groups: List[Optional[str]] = []
        self._in_table = False
        self._row: Optional[List[str]] = None
        self._row_group: Optional[str] = None
        self._cell: Optional[List[str]] = None

    def handle_starttag(self, tag, attrs):
        if tag == "table":
            self._in_table = True
        elif not self._in_table:
            return
        elif tag == "tr":
            self._row = []
            self._row_group = dict(attrs).get("data-first-seen")
        elif tag in ("td", "th") and self._row is not None:
            self._cell = []

    def handle_endtag(self, tag):
        if not self._in_table:
            return
        if tag in ("td", "th") and self._cell is not None:
            self._row.append("".join(self._cell))
            self._cell = None
        elif tag == "tr" and self._row is not None:
            if not self.header:
                self.header = self._row
            else:
                self.rows.append(self._row)
                self.groups.append(self._row_group)
            self._row = None
        elif tag == "table":
            self._in_table = False

    def handle_data(self, data):
        if self._cell is not None:
            self._cell.append(data)


def read_html_table(document: str) -> Tuple[List[str], List[List[str]], List[Optional[str]]]:
    """
    Читает таблицу из сгенерированной HTML страницы

    Returns:
        (заголовки, строки, версия первого появления для каждой строки)
    """
    parser = _TableParser()
    parser.feed(document)
    parser.close()
    return parser.header, parser.rows, parser.groups
