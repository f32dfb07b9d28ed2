"""
Тесты сборки таблицы из версий
"""
import pytest
import pandas as pd

from sst_composer.composer import (
    ComposerError,
    TableComposer,
    build_table_from_records,
    compose_from_lines,
    compose_tables,
    compute_first_seen,
    group_by_first_seen,
    table_to_dataframe,
)
from sst_composer.utils import order_table_files, sort_versions


class TestComposeFromLines:
    """Тесты сборки из строк"""

    def test_two_versions_example(self, sample_table):
        """Тест примера: A{v1:10,v2:11}, B{v1:20}, C{v2:30}"""
        assert sample_table.names() == ["A", "B", "C"]
        assert sample_table.versions == ("v1", "v2")
        assert sample_table.get("A").values == {"v1": 10, "v2": 11}
        assert sample_table.get("B").values == {"v1": 20}
        assert sample_table.get("C").values == {"v2": 30}
        assert sample_table.frozen

    def test_size_equals_distinct_names(self):
        """Тест: размер таблицы равен числу различных имен во всех версиях"""
        pairs = [
            ("v1", ["A\t1", "B\t2", "a\t3"]),
            ("v2", ["B\t2", "C\t4", "bad"]),
            ("v3", ["A\t1", "D\t9"]),
        ]
        table = compose_from_lines(pairs)
        assert len(table) == len({"A", "B", "a", "C", "D"})

    def test_duplicate_name_in_one_version(self):
        """Тест повторного имени в одной версии - побеждает последнее"""
        table = compose_from_lines([("v1", ["A\t1", "A\t2"])])
        assert table.get("A").values == {"v1": 2}

    def test_version_without_valid_lines(self):
        """Тест версии без корректных строк - колонка все равно есть"""
        table = compose_from_lines([("v1", ["A\t1"]), ("v2", ["garbage"])])
        assert table.versions == ("v1", "v2")
        assert table.get("A").get("v2") is None


class TestTableComposer:
    """Тесты обработки файлов"""

    def test_process_files_in_order(self, tables_dir):
        """Тест обработки файлов в порядке номеров сборок"""
        files = sorted((tables_dir / "ntos").glob("*.txt"))
        composer = TableComposer(order_table_files(files))
        table = composer.process()

        assert table.versions == ("9600", "22000", "26100")
        assert table.names() == ["NtClose", "NtCreateFile", "NtNewCall", "NtOpenFile"]
        assert table.get("NtClose").values == {"9600": 13, "22000": 15, "26100": 15}

    def test_stats(self, tables_dir):
        """Тест статистики обработки"""
        files = sorted((tables_dir / "ntos").glob("*.txt"))
        composer = TableComposer(order_table_files(files))
        composer.process()
        stats = composer.stats

        assert stats.files_processed == 3
        assert stats.unique_entries == 4
        assert stats.entries_processed == 8
        assert stats.lines_skipped == 1
        assert [s.version for s in stats.sources] == ["9600", "22000", "26100"]

    def test_verbose_summary(self, tables_dir, capsys):
        """Тест вывода статистики в verbose режиме"""
        files = sorted((tables_dir / "ntos").glob("*.txt"))
        compose_tables(order_table_files(files), verbose=True)
        out = capsys.readouterr().out

        assert "Processing completed in" in out
        assert "  - Files processed: 3" in out
        assert "  - Unique services found: 4" in out
        assert "  - Lines skipped: 1" in out
        assert "Warning: Invalid line format" in out

    def test_missing_file_is_fatal(self, tables_dir):
        """Тест: ошибка чтения файла прерывает обработку"""
        sources = [("9600", tables_dir / "ntos" / "9600.txt"), ("9999", tables_dir / "ntos" / "9999.txt")]
        composer = TableComposer(sources)

        with pytest.raises(ComposerError) as exc_info:
            composer.process()

        assert "9999.txt" in str(exc_info.value)
        assert isinstance(exc_info.value.reason, OSError)
        assert composer.table is None


class TestFirstSeen:
    """Тесты версии первого появления"""

    def test_compute_first_seen(self, sample_table):
        """Тест карты первого появления"""
        assert compute_first_seen(sample_table) == {"A": "v1", "B": "v1", "C": "v2"}

    def test_group_by_first_seen(self):
        """Тест группировки: группы по версиям, внутри - по имени"""
        table = compose_from_lines([
            ("v1", ["Zed\t1", "Alpha\t2"]),
            ("v2", ["Beta\t3", "Zed\t4"]),
            ("v3", ["Alpha\t5"]),
            ("v4", ["Aardvark\t6"]),
        ])
        groups = group_by_first_seen(table)

        assert [(v, [e.name for e in entries]) for v, entries in groups] == [
            ("v1", ["Alpha", "Zed"]),
            ("v2", ["Beta"]),
            ("v3", []),
            ("v4", ["Aardvark"]),
        ]


class TestRecordsAndFrame:
    """Тесты восстановления таблицы и DataFrame"""

    def test_build_table_from_records(self, sample_table):
        """Тест восстановления таблицы из троек"""
        rebuilt = build_table_from_records(sample_table.versions, sample_table.triples())
        assert rebuilt.triples() == sample_table.triples()
        assert rebuilt.versions == sample_table.versions

    def test_unknown_version(self):
        """Тест тройки с неизвестной версией"""
        with pytest.raises(ValueError):
            build_table_from_records(["v1"], [("v2", "A", 1)])

    def test_table_to_dataframe(self, sample_table):
        """Тест DataFrame: Index, ServiceName, версии с <NA>"""
        df = table_to_dataframe(sample_table)

        assert list(df.columns) == ["Index", "ServiceName", "v1", "v2"]
        assert list(df["Index"]) == [1, 2, 3]
        assert list(df["ServiceName"]) == ["A", "B", "C"]
        assert df.loc[0, "v2"] == 11
        assert pd.isna(df.loc[1, "v2"])
        assert str(df["v1"].dtype) == "Int64"


class TestVersionOrder:
    """Тесты порядка версий"""

    def test_numeric_order(self):
        """Тест сортировки по номеру сборки"""
        assert sort_versions(["22000", "9600", "10240"]) == ["9600", "10240", "22000"]

    def test_first_number_in_stem(self):
        """Тест что используется первое число в имени"""
        assert sort_versions(["win10_19041", "win8_9600", "win11_22000"]) == [
            "win8_9600", "win10_19041", "win11_22000"
        ]

    def test_lexical_fallback(self):
        """Тест: если хоть в одном имени нет числа - строковая сортировка"""
        assert sort_versions(["v10", "v9", "rtm"]) == ["rtm", "v10", "v9"]

    def test_equal_numbers_tie_break(self):
        """Тест одинаковых номеров - по строке"""
        assert sort_versions(["b1", "a1"]) == ["a1", "b1"]
