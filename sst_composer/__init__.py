# -*- coding: utf-8 -*-
"""
SST Composer - объединение таблиц системных сервисов разных сборок

Модули:
- utils: порядок версий, поиск файлов таблиц, атомарная запись
- parsers: чтение таблиц (name<TAB>index) и обратное чтение CSV/JSON
- registry: упорядоченная таблица сервисов
- composer: сборка таблицы из версий, статистика, группировка
- writers: Markdown, CSV, JSON
- html_writer: интерактивная HTML страница
- excel_writer: запись в Excel с форматированием
- view_model: модель поведения HTML страницы (поиск, фильтр колонок)
- config_manager: конфигурационный файл
- main: главная функция CLI
"""

__version__ = "2.10.0"
__author__ = "SSTC authors"
