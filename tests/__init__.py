"""
Тесты для SST Composer

Структура тестов:
- test_parsers.py - тесты чтения таблиц
- test_registry.py - тесты упорядоченной таблицы сервисов
- test_composer.py - тесты сборки таблицы из версий
- test_writers.py - тесты Markdown/CSV/JSON и повторного чтения
- test_html_writer.py - тесты HTML страницы
- test_view_model.py - тесты логики поиска и выбора колонок
- test_page_script.py - тесты встроенного скрипта страницы (движок dukpy)
- test_excel_writer.py - тесты записи в Excel
- test_config.py - тесты конфигурационного файла
- test_integration.py - тесты CLI на файлах
"""
