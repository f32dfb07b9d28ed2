"""
Точка входа SSTC - System Service Table Composer

Использование:
    python sstc.py -d tables            # Markdown для ntos
    python sstc.py -d tables -w -h      # HTML для win32k
    python sstc.py --validate -v        # Только проверка таблиц
"""
import sys

# Исправление кодировки для корректного вывода в терминале
if sys.stdout.encoding and sys.stdout.encoding.lower() != 'utf-8':
    try:
        sys.stdout.reconfigure(encoding='utf-8')
        sys.stderr.reconfigure(encoding='utf-8')
    except AttributeError:
        # Потоки без reconfigure (подмененные обертки)
        import codecs
        sys.stdout = codecs.getwriter('utf-8')(sys.stdout.buffer, 'strict')
        sys.stderr = codecs.getwriter('utf-8')(sys.stderr.buffer, 'strict')

from sst_composer.main import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        sys.exit(1)
