"""
Конфигурация pytest и общие фикстуры
"""
import sys
import pytest
import tempfile
import shutil
from pathlib import Path

# Добавляем корневую директорию проекта в путь
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def temp_dir():
    """Временная директория для тестов"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_lines():
    """Две версии из примера: A, B в v1; A, C в v2"""
    return [
        ("v1", ["A\t10", "B\t20"]),
        ("v2", ["A\t11", "C\t30"]),
    ]


@pytest.fixture
def sample_table(sample_lines):
    """Готовая таблица для примера из двух версий"""
    from sst_composer.composer import compose_from_lines
    return compose_from_lines(sample_lines)


def write_table(path: Path, lines):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return path


@pytest.fixture
def tables_dir(temp_dir):
    """
    Директория с таблицами в формате tables/<тип>/<сборка>.txt

    ntos: три сборки (номера в именах файлов), одна строка с ошибкой
    win32k: одна сборка
    """
    root = temp_dir / "tables"
    write_table(root / "ntos" / "22000.txt", [
        "NtClose\t15",
        "NtOpenFile\t51",
        "NtCreateFile\t85",
    ])
    write_table(root / "ntos" / "9600.txt", [
        "NtClose\t13",
        "NtOpenFile\t48",
        "broken line without tab",
    ])
    write_table(root / "ntos" / "26100.txt", [
        "NtClose\t15",
        "NtCreateFile\t85",
        "NtNewCall\t500",
    ])
    write_table(root / "win32k" / "22000.txt", [
        "NtUserGetDC\t4106",
    ])
    return root
