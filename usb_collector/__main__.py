"""
Точка входа для запуска модуля.

Позволяет запускать утилиту как:
    python -m usb_collector [команда] [опции]

Примеры:
    python -m usb_collector usb
    python -m usb_collector usb list
"""

from .cli import main

if __name__ == "__main__":
    main()
