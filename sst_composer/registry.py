# -*- coding: utf-8 -*-
"""
Объединенная таблица системных сервисов

Основные классы:
- ServiceEntry: один сервис и его номера в каждой версии
- ServiceTable: упорядоченный по имени набор сервисов без дубликатов

Имена сравниваются ординально (по кодам символов, как str в Python),
без учета локали, поэтому порядок вывода одинаков в любом окружении.
"""

from bisect import bisect_left
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class TableFrozenError(RuntimeError):
    """Попытка изменить таблицу после завершения обработки"""


class ServiceEntry:
    """Сервис и его номера по версиям (версия отсутствует - сервиса в ней нет)"""

    __slots__ = ("name", "values")

    def __init__(self, name: str):
        if not name:
            raise ValueError("Service name must not be empty")
        self.name = name
        self.values: Dict[str, int] = {}

    def get(self, version: str) -> Optional[int]:
        return self.values.get(version)

    def first_seen(self, versions: Iterable[str]) -> Optional[str]:
        """Первая версия (в заданном порядке), где у сервиса есть номер"""
        for version in versions:
            if version in self.values:
                return version
        return None

    def __repr__(self):
        return f"ServiceEntry({self.name!r}, {self.values!r})"


class ServiceTable:
    """
    Упорядоченная таблица сервисов

    Хранит параллельные списки имен и записей, отсортированные по имени.
    Поиск - бинарный (bisect), вставка - в точку вставки, поэтому
    отдельная сортировка перед выводом не нужна.
    """

    def __init__(self, versions: Optional[Iterable[str]] = None):
        self._names: List[str] = []
        self._entries: List[ServiceEntry] = []
        self._versions: List[str] = []
        self._frozen = False
        for version in versions or ():
            self.add_version(version)

    # --- изменение (только до freeze) ---

    def _check_mutable(self):
        if self._frozen:
            raise TableFrozenError("Service table is frozen")

    def add_version(self, version: str):
        """Добавляет версию в конец фиксированного порядка версий"""
        self._check_mutable()
        if version not in self._versions:
            self._versions.append(version)

    def find_or_create(self, name: str) -> ServiceEntry:
        """
        Находит запись по имени или вставляет новую с сохранением порядка

        Args:
            name: Имя сервиса

        Returns:
            Существующая или новая запись
        """
        pos = bisect_left(self._names, name)
        if pos < len(self._names) and self._names[pos] == name:
            return self._entries[pos]

        self._check_mutable()
        entry = ServiceEntry(name)
        self._names.insert(pos, name)
        self._entries.insert(pos, entry)
        return entry

    def set_value(self, entry: ServiceEntry, version: str, value: int):
        """Сохраняет номер сервиса для версии (повторная запись перезаписывает)"""
        self._check_mutable()
        entry.values[version] = value

    def freeze(self):
        self._frozen = True

    # --- чтение ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def versions(self) -> Tuple[str, ...]:
        return tuple(self._versions)

    def get(self, name: str) -> Optional[ServiceEntry]:
        pos = bisect_left(self._names, name)
        if pos < len(self._names) and self._names[pos] == name:
            return self._entries[pos]
        return None

    def names(self) -> List[str]:
        return list(self._names)

    def triples(self) -> List[Tuple[str, str, int]]:
        """Все значения таблицы как тройки (версия, имя, номер)"""
        result = []
        for entry in self._entries:
            for version in self._versions:
                if version in entry.values:
                    result.append((version, entry.name, entry.values[version]))
        return result

    def __contains__(self, name) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[ServiceEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f"ServiceTable(entries={len(self)}, versions={list(self._versions)!r}, frozen={self._frozen})"
