# -*- coding: utf-8 -*-
"""
Сборка объединенной таблицы из таблиц отдельных версий

Основные функции:
- TableComposer: последовательная обработка файлов в порядке версий
- compose_tables / compose_from_lines: короткие обертки
- compute_first_seen / group_by_first_seen: версия появления сервиса
- table_to_dataframe: представление таблицы в виде DataFrame
"""

import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from .parsers import SourceStats, iter_table_records, read_table_lines
from .registry import ServiceEntry, ServiceTable


class ComposerError(Exception):
    """Фатальная ошибка обработки (не удалось прочитать исходный файл)"""

    def __init__(self, source: str, reason: Exception):
        super().__init__(f"Error processing file {source}: {reason}")
        self.source = source
        self.reason = reason


class ProcessingStats:
    """Диагностическая статистика обработки (на результат не влияет)"""

    def __init__(self):
        self.sources: List[SourceStats] = []
        self.unique_entries = 0
        self.elapsed_ms = 0

    @property
    def files_processed(self) -> int:
        return len(self.sources)

    @property
    def entries_processed(self) -> int:
        return sum(s.applied for s in self.sources)

    @property
    def lines_skipped(self) -> int:
        return sum(s.skipped for s in self.sources)

    @property
    def blank_lines(self) -> int:
        return sum(s.blank for s in self.sources)

    def summary_lines(self) -> List[str]:
        return [
            f"Processing completed in {self.elapsed_ms}ms:",
            f"  - Files processed: {self.files_processed}",
            f"  - Unique services found: {self.unique_entries}",
            f"  - Total entries processed: {self.entries_processed}",
            f"  - Lines skipped: {self.lines_skipped}",
        ]


class TableComposer:
    """
    Собирает таблицу сервисов из упорядоченного списка источников

    Источники обрабатываются строго по порядку. Порядок определяет и
    колонки в выводе, и версию "первого появления" сервиса.
    """

    def __init__(self, sources: Iterable[Tuple[str, Union[str, Path]]], verbose: bool = False):
        self.sources = [(version, Path(path)) for version, path in sources]
        self.verbose = verbose
        self.stats = ProcessingStats()
        self.table: Optional[ServiceTable] = None

    def apply_lines(self, table: ServiceTable, version: str, lines: Iterable[str], source: str):
        """Добавляет в таблицу записи одной версии и считает статистику"""
        source_stats = SourceStats(version, source)
        self.stats.sources.append(source_stats)
        table.add_version(version)

        for name, value in iter_table_records(lines, version, source_stats, self.verbose, source):
            entry = table.find_or_create(name)
            table.set_value(entry, version, value)
            source_stats.applied += 1

    def process(self) -> ServiceTable:
        """
        Обрабатывает все источники и замораживает таблицу

        Returns:
            Готовая (неизменяемая) таблица

        Raises:
            ComposerError: не удалось прочитать один из файлов
        """
        started = time.perf_counter()
        table = ServiceTable()

        for version, path in self.sources:
            try:
                lines = read_table_lines(path)
            except OSError as exc:
                raise ComposerError(str(path), exc) from exc

            if self.verbose:
                print(f"Processing {path} with {len(lines)} entries")
            self.apply_lines(table, version, lines, str(path))

        table.freeze()
        self.stats.unique_entries = len(table)
        self.stats.elapsed_ms = int((time.perf_counter() - started) * 1000)
        self.table = table

        if self.verbose:
            for line in self.stats.summary_lines():
                print(line)

        return table


def compose_tables(sources: Iterable[Tuple[str, Union[str, Path]]], verbose: bool = False) -> ServiceTable:
    """Собирает таблицу из файлов (версия, путь)"""
    return TableComposer(sources, verbose).process()


def compose_from_lines(pairs: Iterable[Tuple[str, Iterable[str]]]) -> ServiceTable:
    """
    Собирает таблицу из строк в памяти

    Args:
        pairs: Упорядоченные пары (версия, строки таблицы)

    Returns:
        Замороженная таблица
    """
    composer = TableComposer([])
    table = ServiceTable()
    for version, lines in pairs:
        composer.apply_lines(table, version, lines, version)
    table.freeze()
    return table


def build_table_from_records(versions: Iterable[str], records: Iterable[Tuple[str, str, int]]) -> ServiceTable:
    """
    Восстанавливает таблицу из троек (версия, имя, номер)

    Используется для повторного чтения CSV/JSON результатов.
    """
    table = ServiceTable(versions)
    for version, name, value in records:
        if version not in table.versions:
            raise ValueError(f"Unknown version {version!r}")
        table.set_value(table.find_or_create(name), version, value)
    table.freeze()
    return table


def compute_first_seen(table: ServiceTable) -> Dict[str, str]:
    """Версия первого появления для каждого сервиса {имя: версия}"""
    versions = table.versions
    first_seen = {}
    for entry in table:
        version = entry.first_seen(versions)
        if version is not None:
            first_seen[entry.name] = version
    return first_seen


def group_by_first_seen(table: ServiceTable) -> List[Tuple[str, List[ServiceEntry]]]:
    """
    Группирует сервисы по версии первого появления

    Returns:
        Список (версия, записи) в порядке версий; записи внутри группы
        упорядочены по имени. Для версий без новых сервисов группа пустая.
    """
    first_seen = compute_first_seen(table)
    groups: Dict[str, List[ServiceEntry]] = {version: [] for version in table.versions}
    # таблица уже упорядочена по имени, порядок внутри групп сохраняется
    for entry in table:
        version = first_seen.get(entry.name)
        if version is not None:
            groups[version].append(entry)
    return [(version, groups[version]) for version in table.versions]


def table_to_dataframe(table: ServiceTable) -> pd.DataFrame:
    """
    Представляет таблицу в виде DataFrame

    Колонки: Index (с 1), ServiceName, затем по колонке на версию
    (тип Int64, отсутствующий номер - <NA>).
    """
    versions = list(table.versions)
    entries = list(table)
    data = {
        "Index": pd.Series(range(1, len(entries) + 1), dtype="int64"),
        "ServiceName": pd.Series([e.name for e in entries], dtype=object),
    }
    for version in versions:
        data[version] = pd.array([e.get(version) for e in entries], dtype="Int64")
    return pd.DataFrame(data, columns=["Index", "ServiceName"] + versions)
