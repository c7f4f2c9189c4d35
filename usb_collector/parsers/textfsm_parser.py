"""
Парсинг текстового вывода по TextFSM шаблонам из templates/.

Пример использования:
    rows = parse_with_template(output, "linux_lsusb.textfsm")
    # [{"vendor_id": "046d", "product_id": "c52b", "description": "..."}]
"""

import logging
from io import StringIO
from pathlib import Path
from typing import List, Dict

import textfsm

logger = logging.getLogger(__name__)

# Путь к папке с шаблонами
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def parse_with_template(output: str, template_name: str) -> List[Dict[str, str]]:
    """
    Парсит вывод с помощью TextFSM шаблона.

    Args:
        output: Сырой вывод команды
        template_name: Имя файла шаблона в templates/

    Returns:
        List[Dict]: Записи с ключами в нижнем регистре
    """
    if not output or not output.strip():
        return []

    template_path = TEMPLATES_DIR / template_name
    # utf-8-sig убирает BOM если шаблон сохранён из Windows-редактора
    template_content = template_path.read_text(encoding="utf-8-sig")

    fsm = textfsm.TextFSM(StringIO(template_content))
    result = fsm.ParseText(output)

    headers = [h.lower() for h in fsm.header]
    parsed = [dict(zip(headers, row)) for row in result]
    logger.debug(f"{template_name}: распарсено записей {len(parsed)}")
    return parsed
