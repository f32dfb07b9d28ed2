# -*- coding: utf-8 -*-
"""
Генерация интерактивной HTML страницы

Страница самодостаточна: стили и скрипт встроены. Строки сгруппированы
по версии первого появления сервиса, внутри группы - по имени.
"""

import html
import io
from typing import Optional

from .composer import group_by_first_seen
from .html_assets import TABLE_CSS, TABLE_JS
from .registry import ServiceTable

DEFAULT_TITLE = "System Service Table"


def render_html(table: ServiceTable, title: Optional[str] = None) -> bytes:
    """
    HTML страница с таблицей, поиском и выбором колонок

    Args:
        table: Замороженная таблица сервисов
        title: Заголовок страницы и подпись таблицы (тип таблицы)

    Returns:
        Документ в UTF-8
    """
    title = html.escape(title or DEFAULT_TITLE)
    versions = table.versions

    out = io.StringIO()
    out.write("<!DOCTYPE html><html><head><title>")
    out.write(title)
    out.write('</title><meta charset="utf-8">')
    out.write('<meta name="viewport" content="width=device-width,initial-scale=1">')
    out.write("<style>")
    out.write(TABLE_CSS)
    out.write("</style><script>")
    out.write(TABLE_JS)
    out.write("</script></head><body>")

    out.write('<input type="text" id="searchInput" class="search-box" '
              'onkeyup="filterTable()" placeholder="Search for syscalls...">')
    out.write('<div id="filterContainer" class="filter-container"><strong>Select:</strong></div>')

    out.write(f'<table class="service-table"><caption>{title}</caption>')
    out.write("<tr><th>#</th><th>ServiceName</th>")
    for version in versions:
        out.write(f"<th>{html.escape(version)}</th>")
    out.write("</tr>")

    index = 1
    for first_seen, entries in group_by_first_seen(table):
        group_attr = html.escape(first_seen)
        for entry in entries:
            out.write(f'<tr data-first-seen="{group_attr}"><td>{index}</td><td>{html.escape(entry.name)}</td>')
            for version in versions:
                value = entry.get(version)
                out.write("<td>" + ("" if value is None else str(value)) + "</td>")
            out.write("</tr>")
            index += 1

    out.write("</table></body></html>\n")
    return out.getvalue().encode("utf-8")
