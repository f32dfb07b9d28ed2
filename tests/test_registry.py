"""
Тесты для упорядоченной таблицы сервисов
"""
import random

import pytest
from sst_composer.registry import ServiceEntry, ServiceTable, TableFrozenError


class TestFindOrCreate:
    """Тесты поиска и вставки"""

    def test_returns_same_entry(self):
        """Тест что повторный поиск возвращает ту же запись"""
        table = ServiceTable()
        first = table.find_or_create("NtClose")
        second = table.find_or_create("NtClose")

        assert first is second
        assert len(table) == 1

    def test_keeps_ordinal_order(self):
        """Тест порядка при случайной вставке"""
        names = ["NtWrite", "NtClose", "ntclose", "NtAlloc", "_Z", "Nt", "NtClose2", "Ä"]
        table = ServiceTable()
        shuffled = names[:]
        random.Random(7).shuffle(shuffled)
        for name in shuffled:
            table.find_or_create(name)

        assert table.names() == sorted(set(names))
        assert [e.name for e in table] == sorted(set(names))

    def test_ordinal_not_locale(self):
        """Тест ординального сравнения: прописные раньше строчных"""
        table = ServiceTable()
        for name in ["b", "B", "a", "A"]:
            table.find_or_create(name)

        assert table.names() == ["A", "B", "a", "b"]

    def test_case_sensitive_names(self):
        """Тест что имена различаются по регистру"""
        table = ServiceTable()
        table.find_or_create("NtClose")
        table.find_or_create("NTCLOSE")
        assert len(table) == 2

    def test_empty_name_rejected(self):
        """Тест пустого имени"""
        with pytest.raises(ValueError):
            ServiceTable().find_or_create("")


class TestSetValue:
    """Тесты записи номеров"""

    def test_last_write_wins(self):
        """Тест перезаписи номера в той же версии"""
        table = ServiceTable(["v1"])
        entry = table.find_or_create("A")
        table.set_value(entry, "v1", 1)
        table.set_value(entry, "v1", 2)

        assert entry.get("v1") == 2
        assert entry.values == {"v1": 2}

    def test_missing_version(self):
        """Тест отсутствующей версии"""
        entry = ServiceEntry("A")
        assert entry.get("v1") is None

    def test_first_seen(self):
        """Тест версии первого появления"""
        entry = ServiceEntry("A")
        entry.values["v3"] = 1
        entry.values["v2"] = 1
        assert entry.first_seen(["v1", "v2", "v3"]) == "v2"
        assert entry.first_seen(["v1"]) is None


class TestFreeze:
    """Тесты заморозки таблицы"""

    def test_frozen_table_rejects_changes(self):
        """Тест что замороженную таблицу нельзя изменить"""
        table = ServiceTable(["v1"])
        entry = table.find_or_create("A")
        table.freeze()

        assert table.frozen
        with pytest.raises(TableFrozenError):
            table.find_or_create("B")
        with pytest.raises(TableFrozenError):
            table.set_value(entry, "v1", 1)
        with pytest.raises(TableFrozenError):
            table.add_version("v2")

    def test_lookup_after_freeze(self):
        """Тест что поиск существующей записи работает после заморозки"""
        table = ServiceTable()
        entry = table.find_or_create("A")
        table.freeze()

        assert table.find_or_create("A") is entry
        assert table.get("A") is entry
        assert "A" in table
        assert "B" not in table


class TestVersions:
    """Тесты списка версий"""

    def test_versions_keep_insertion_order(self):
        """Тест что версии не сортируются и не дублируются"""
        table = ServiceTable()
        for version in ["v2", "v1", "v2"]:
            table.add_version(version)
        assert table.versions == ("v2", "v1")

    def test_triples(self):
        """Тест троек (версия, имя, номер)"""
        table = ServiceTable(["v1", "v2"])
        table.set_value(table.find_or_create("B"), "v2", 5)
        table.set_value(table.find_or_create("A"), "v1", 3)

        assert table.triples() == [("v1", "A", 3), ("v2", "B", 5)]
