# -*- coding: utf-8 -*-
"""
Главная функция CLI для объединения таблиц системных сервисов

Таблицы берутся из <tables_dir>/<ntos|win32k|ium>/*.txt, каждый файл -
одна версия (сборка). Результат - один файл в выбранном формате.

Коды возврата:
    0 - успех
    1 - не указаны параметры (выводится справка)
    2 - неверные параметры или конфиг
    3 - файлы таблиц не найдены
    4 - ошибка доступа к директории
    5 - ошибка обработки таблиц
    6 - ошибка записи выходного файла
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .composer import ComposerError, TableComposer
from .config_manager import ConfigError, initialize_config_from_template, load_config, DEFAULT_CONFIG_NAME
from .utils import OUTPUT_EXTENSIONS, TABLE_SUBDIRS, find_table_files, order_table_files
from .writers import write_output

EXIT_OK = 0
EXIT_NO_INPUT = 1
EXIT_BAD_ARGUMENTS = 2
EXIT_NO_FILES = 3
EXIT_DIRECTORY_ERROR = 4
EXIT_PROCESSING_ERROR = 5
EXIT_WRITE_ERROR = 6


def build_parser() -> argparse.ArgumentParser:
    """
    Парсер аргументов

    Стандартный -h занят форматом HTML, поэтому справка - только --help.
    """
    parser = argparse.ArgumentParser(
        prog="sstc",
        description="SSTC - System Service Table Composer",
        epilog="Note: Default output format is Markdown if not specified otherwise",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-d", "--dir", nargs="?", const="", default=None, metavar="PATH",
                        help='Specify tables directory to combine, default value "tables"')

    formats = parser.add_mutually_exclusive_group()
    formats.add_argument("-h", "--html", dest="output_format", action="store_const", const="html",
                         help="Output result as HTML table")
    formats.add_argument("-c", "--csv", dest="output_format", action="store_const", const="csv",
                         help="Output result as CSV file")
    formats.add_argument("-j", "--json", dest="output_format", action="store_const", const="json",
                         help="Output result as JSON file")
    formats.add_argument("-x", "--xlsx", dest="output_format", action="store_const", const="xlsx",
                         help="Output result as Excel workbook")

    table_types = parser.add_mutually_exclusive_group()
    table_types.add_argument("-w", "--win32k", dest="table_type", action="store_const", const="win32k",
                             help="Combine win32k syscalls, default is ntos")
    table_types.add_argument("-ium", "--ium", dest="table_type", action="store_const", const="ium",
                             help="Combine ium syscalls")

    parser.add_argument("-o", "--output", metavar="PATH", help="Output file (default depends on table type)")
    parser.add_argument("--config", metavar="PATH",
                        help=f"JSON config file (default: {DEFAULT_CONFIG_NAME} if present)")
    parser.add_argument("--init-config", action="store_true",
                        help="Create config file from template and exit")
    parser.add_argument("--validate", action="store_true",
                        help="Validate table files without generating output")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show detailed processing information")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    parser.set_defaults(output_format=None, table_type="ntos")
    return parser


def resolve_output_path(config: dict, table_type: str, output_format: str, output: Optional[str] = None) -> Path:
    """
    Путь к выходному файлу

    Examples:
        ntos + markdown -> ./syscalls.md
        win32k + html -> ./w32ksyscalls.html
    """
    if output:
        return Path(output)
    base_name = config["output_names"][table_type]
    return Path(config["output_dir"]) / f"{base_name}{OUTPUT_EXTENSIONS[output_format]}"


def main(argv: Optional[List[str]] = None) -> int:
    """
    Главная функция CLI

    Returns:
        Код возврата (см. описание модуля)
    """
    print("SSTC - System Service Table Composer")
    print(f"Version: {__version__}")

    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return EXIT_NO_INPUT

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # argparse: ошибка -> 2, --help/--version -> 0
        return exc.code if isinstance(exc.code, int) else EXIT_BAD_ARGUMENTS

    if args.init_config:
        config_path = args.config or DEFAULT_CONFIG_NAME
        try:
            if not initialize_config_from_template(config_path):
                print(f"Config already exists: {config_path}")
        except OSError as exc:
            print(f"[ERROR] Cannot create config '{config_path}': {exc}", file=sys.stderr)
            return EXIT_WRITE_ERROR
        return EXIT_OK

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return EXIT_BAD_ARGUMENTS

    tables_dir = args.dir
    if tables_dir == "":
        print("-d found but input tables directory is not specified, default will be used")
        tables_dir = None
    if tables_dir is None:
        tables_dir = config["tables_dir"]

    table_type = args.table_type
    output_format = args.output_format or config["default_format"]
    lookup_path = Path(tables_dir) / TABLE_SUBDIRS[table_type]

    try:
        table_files = find_table_files(lookup_path)
    except OSError as exc:
        print(f"Error accessing directory {lookup_path}: {exc}", file=sys.stderr)
        return EXIT_DIRECTORY_ERROR

    if not table_files:
        print(f"No table files found in {lookup_path}")
        return EXIT_NO_FILES

    composer = TableComposer(order_table_files(table_files), verbose=args.verbose)
    try:
        table = composer.process()
    except ComposerError as exc:
        print(str(exc), file=sys.stderr)
        print("Failed to process syscall tables.", file=sys.stderr)
        return EXIT_PROCESSING_ERROR

    if args.validate:
        stats = composer.stats
        print(f"[OK] {stats.files_processed} files, {len(table)} services, "
              f"{stats.lines_skipped} lines skipped")
        print("Table files validated successfully.")
        return EXIT_OK

    output_path = resolve_output_path(config, table_type, output_format, args.output)
    title = config["table_titles"][table_type]
    try:
        write_output(table, output_format, output_path, title=title)
    except OSError as exc:
        print(f"Error writing output file: {exc}", file=sys.stderr)
        return EXIT_WRITE_ERROR

    return EXIT_OK


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        sys.exit(1)
