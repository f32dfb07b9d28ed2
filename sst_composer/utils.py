# -*- coding: utf-8 -*-
"""
Утилиты и вспомогательные функции

Содержит:
- Извлечение идентификатора версии из имени файла
- Упорядочивание версий (по номеру сборки или по имени)
- Поиск файлов таблиц в директории
- Атомарную запись выходного файла
"""

import os
import re
import stat
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple, Union

# Первая группа цифр в имени файла - номер сборки
BUILD_NUMBER_RE = re.compile(r"\d+")

# Подкаталоги и имена выходных файлов для типов таблиц
TABLE_SUBDIRS = {
    "ntos": "ntos",
    "win32k": "win32k",
    "ium": "ium",
}

OUTPUT_EXTENSIONS = {
    "markdown": ".md",
    "html": ".html",
    "csv": ".csv",
    "json": ".json",
    "xlsx": ".xlsx",
}


def version_from_path(path: Union[str, Path]) -> str:
    """Идентификатор версии - имя файла без расширения"""
    return Path(path).stem


def extract_build_number(version: str) -> Optional[int]:
    """
    Извлекает номер сборки из идентификатора версии

    Examples:
        "22621" -> 22621
        "win11_22h2_22621" -> 11
        "rtm" -> None

    Args:
        version: Идентификатор версии (имя файла без расширения)

    Returns:
        Первое число в строке или None
    """
    match = BUILD_NUMBER_RE.search(version)
    if not match:
        return None
    return int(match.group(0))


def sort_versions(versions: List[str]) -> List[str]:
    """
    Упорядочивает версии

    Если в каждом идентификаторе есть число - сортировка по этому числу
    (при равенстве - по строке). Иначе - ординальная сортировка строк.

    Args:
        versions: Список идентификаторов версий

    Returns:
        Новый упорядоченный список
    """
    numbers = [extract_build_number(v) for v in versions]
    if versions and all(n is not None for n in numbers):
        return [v for _, v in sorted(zip(numbers, versions))]
    return sorted(versions)


def order_table_files(paths: List[Union[str, Path]]) -> List[Tuple[str, Path]]:
    """
    Превращает список файлов в упорядоченный список (версия, путь)

    Args:
        paths: Пути к файлам таблиц

    Returns:
        Список пар (версия, путь) в порядке версий
    """
    by_version = {}
    for path in paths:
        by_version[version_from_path(path)] = Path(path)
    return [(version, by_version[version]) for version in sort_versions(list(by_version))]


def find_table_files(lookup_dir: Union[str, Path], pattern: str = "*.txt") -> List[Path]:
    """
    Ищет файлы таблиц в директории (без рекурсии)

    Raises:
        FileNotFoundError: директория не существует
        NotADirectoryError: путь не является директорией
        PermissionError: нет доступа к директории
    """
    lookup_dir = Path(lookup_dir)
    if not lookup_dir.exists():
        raise FileNotFoundError(f"Directory not found: {lookup_dir}")
    if not lookup_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {lookup_dir}")
    return sorted(p for p in lookup_dir.glob(pattern) if p.is_file())


def _output_mode(output_path: Path) -> int:
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(output_path: Union[str, Path], data: bytes) -> Path:
    """
    Записывает данные во временный файл рядом с целевым и заменяет им целевой

    При ошибке временный файл удаляется, целевой файл остается прежним.
    Права доступа: как у существующего файла, иначе 0o666 с учетом umask
    (mkstemp создает файл с правами 0o600).

    Args:
        output_path: Путь к выходному файлу
        data: Содержимое

    Returns:
        Путь к записанному файлу
    """
    output_path = Path(output_path)
    mode = _output_mode(output_path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", suffix=".tmp", dir=str(output_path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, output_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise
    return output_path
