# -*- coding: utf-8 -*-

"""
Стили и скрипт интерактивной HTML таблицы

Скрипт встраивается в страницу целиком, без внешних зависимостей:
- filterTable: поиск по имени сервиса (без учета регистра, на каждое нажатие)
- toggleColumnFilter: выбор колонок версий, скрытие невыбранных
- highlightDifferences: подсветка совпадающих/различающихся номеров
  в выбранных колонках

Поведение продублировано в view_model.TableViewState.
"""

# ===============================
# === СТИЛИ ===
# ===============================
TABLE_CSS = """
body {
    font-family: "Segoe UI", -apple-system, BlinkMacSystemFont, Roboto, "Helvetica Neue", sans-serif;
    line-height: 1.4;
    color: #333;
    background-color: #fff;
    padding: 0 5vw 90vh 5vw;
}

table {
    margin: 1em 0;
    border-collapse: collapse;
    border: .1em solid #d6d6d6;
    width: 100%;
}

caption {
    text-align: left;
    padding: .25em .5em .5em;
    font-size: 1.2em;
    font-weight: 700;
}

th, td {
    padding: .25em .5em .25em 1em;
    vertical-align: text-top;
    text-align: left;
    text-indent: -.5em;
    border: .1em solid #d6d6d6;
}

th {
    vertical-align: bottom;
    background-color: #666;
    color: #fff;
    position: sticky;
    top: 0;
    z-index: 2;
}

tr:nth-child(even) { background-color: rgba(0, 0, 0, .05); }
tr:nth-child(odd) { background-color: rgba(255, 255, 255, .05); }

td:nth-child(2) { min-width: 24em; }

/* --- Поиск и выбор колонок --- */
.search-box {
    margin: 1em 0;
    padding: .5em;
    width: 100%;
    max-width: 500px;
    font-size: 1em;
    border: 1px solid #ccc;
    border-radius: 4px;
}

.filter-container {
    display: flex;
    flex-wrap: wrap;
    gap: 10px;
    margin: 15px 0;
}

.filter-item {
    cursor: pointer;
    padding: 5px 10px;
    background-color: #eee;
    border-radius: 4px;
    font-size: .9em;
}

.filter-item.active {
    background-color: #666;
    color: #fff;
}

.filter-button {
    cursor: pointer;
    padding: 5px 10px;
    background-color: #555;
    color: #fff;
    border: none;
    border-radius: 4px;
    margin-left: 10px;
}

th.filtered { background-color: #4b9e4a; }
.col-hidden { display: none; }

/* --- Подсветка --- */
.highlight-diff {
    background-color: rgba(255, 235, 59, .3) !important;
    font-weight: 700;
    color: #d32f2f;
}

.highlight-same { background-color: rgba(76, 175, 80, .2) !important; }
"""

# ===============================
# === СКРИПТ ===
# ===============================
# Колонки 0 (#) и 1 (ServiceName) видны всегда, колонки версий начинаются с 2.
TABLE_JS = """
var FIRST_VERSION_COLUMN = 2;
var activeColumns = [];

function getTable() {
    return document.querySelector("table.service-table");
}

function getHeaderCells() {
    return getTable().getElementsByTagName("tr")[0].getElementsByTagName("th");
}

function filterTable() {
    var filter = document.getElementById("searchInput").value.toUpperCase();
    var rows = getTable().getElementsByTagName("tr");
    for (var i = 1; i < rows.length; i++) {
        var cell = rows[i].getElementsByTagName("td")[1];
        if (!cell) {
            continue;
        }
        var text = cell.textContent || cell.innerText;
        rows[i].style.display = text.toUpperCase().indexOf(filter) > -1 ? "" : "none";
    }
}

function toggleColumnVisibility(column, visible) {
    var rows = getTable().getElementsByTagName("tr");
    for (var r = 0; r < rows.length; r++) {
        var cells = r === 0 ? rows[r].getElementsByTagName("th") : rows[r].getElementsByTagName("td");
        if (column < cells.length) {
            if (visible) {
                cells[column].classList.remove("col-hidden");
            } else {
                cells[column].classList.add("col-hidden");
            }
        }
    }
}

function clearHighlighting() {
    var marked = document.querySelectorAll(".highlight-diff, .highlight-same");
    for (var i = 0; i < marked.length; i++) {
        marked[i].classList.remove("highlight-diff", "highlight-same");
    }
}

function classifyCells(values) {
    if (values.length < 2) {
        return null;
    }
    for (var i = 1; i < values.length; i++) {
        if (values[i] !== values[0]) {
            return "highlight-diff";
        }
    }
    return "highlight-same";
}

function highlightDifferences() {
    clearHighlighting();
    if (activeColumns.length < 2) {
        return;
    }
    var rows = getTable().getElementsByTagName("tr");
    for (var r = 1; r < rows.length; r++) {
        var cells = rows[r].getElementsByTagName("td");
        var filled = [];
        var values = [];
        for (var i = 0; i < activeColumns.length; i++) {
            var column = activeColumns[i];
            if (column < cells.length) {
                var text = cells[column].textContent.trim();
                if (text) {
                    filled.push(cells[column]);
                    values.push(text);
                }
            }
        }
        var mark = classifyCells(values);
        if (mark) {
            for (var k = 0; k < filled.length; k++) {
                filled[k].classList.add(mark);
            }
        }
    }
}

function applyColumnSelection() {
    var headers = getHeaderCells();
    for (var c = FIRST_VERSION_COLUMN; c < headers.length; c++) {
        var selected = activeColumns.indexOf(c) > -1;
        if (selected) {
            headers[c].classList.add("filtered");
        } else {
            headers[c].classList.remove("filtered");
        }
        toggleColumnVisibility(c, activeColumns.length === 0 || selected);
    }
    highlightDifferences();
}

function toggleColumnFilter(column) {
    var pos = activeColumns.indexOf(column);
    if (pos > -1) {
        activeColumns.splice(pos, 1);
    } else {
        activeColumns.push(column);
    }
    applyColumnSelection();
}

function showAllColumns() {
    var items = document.querySelectorAll(".filter-item");
    for (var i = 0; i < items.length; i++) {
        items[i].classList.remove("active");
    }
    activeColumns = [];
    applyColumnSelection();
}

function setupColumnFilters() {
    var headers = getHeaderCells();
    var container = document.getElementById("filterContainer");
    for (var c = FIRST_VERSION_COLUMN; c < headers.length; c++) {
        var item = document.createElement("span");
        item.className = "filter-item";
        item.textContent = headers[c].textContent;
        item.setAttribute("data-column", c);
        item.onclick = function () {
            this.classList.toggle("active");
            toggleColumnFilter(parseInt(this.getAttribute("data-column"), 10));
        };
        container.appendChild(item);
    }
    var button = document.createElement("button");
    button.className = "filter-button";
    button.textContent = "Show All";
    button.onclick = showAllColumns;
    container.appendChild(button);
}

window.onload = setupColumnFilters;
"""
