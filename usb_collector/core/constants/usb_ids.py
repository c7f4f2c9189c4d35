"""
Нормализация USB идентификаторов (VID/PID).

Каноническая форма: 4 hex-символа в нижнем регистре ("046d").
Вход бывает любым: число, десятичная строка, hex без префикса, "0x...".
"""

import re
from typing import Any, Optional, Tuple

# Ширина канонического идентификатора
USB_ID_WIDTH: int = 4

# Префикс явного hex
HEX_PREFIX: str = "0x"

# 4-значные чисто десятичные строки >= этого значения считаются hex
AMBIGUOUS_DECIMAL_THRESHOLD: int = 4096

# Разделитель в ключе устройства "vid:pid"
DEVICE_KEY_SEPARATOR: str = ":"

_CANONICAL_RE = re.compile(r"^[0-9a-f]{4}$")
_FOUR_DECIMAL_DIGITS_RE = re.compile(r"^[0-9]{4}$")
_HEX_DIGITS_ONLY_RE = re.compile(r"^[0-9a-f]+$")
_HEX_LETTER_RE = re.compile(r"[a-f]")
_LEADING_HEX_RE = re.compile(r"^[0-9a-f]+")
_LEADING_DECIMAL_RE = re.compile(r"^[+-]?[0-9]+")


def _parse_leading(text: str, base: int) -> Optional[int]:
    """
    Разбирает ведущие цифры строки (хвост игнорируется).

    system_profiler отдаёт "0x046d  (Logitech Inc.)", берём только "046d".

    Args:
        text: Строка без префикса 0x
        base: 10 или 16

    Returns:
        int или None если цифр нет
    """
    pattern = _LEADING_HEX_RE if base == 16 else _LEADING_DECIMAL_RE
    match = pattern.match(text)
    if not match:
        return None
    return int(match.group(0), base)


def normalize_usb_id(value: Any) -> Optional[str]:
    """
    Нормализует VID/PID в 4 hex-символа нижнего регистра.

    Правила для строк:
    - "0x...": hex
    - ровно 4 десятичные цифры: decimal, но если значение >= 4096,
      читается как hex ("1008" → "03f0", "5705" → "5705")
    - только hex-цифры с буквой a-f: hex
    - только десятичные цифры (не 4): decimal
    - остальное: decimal по ведущим цифрам

    Args:
        value: Идентификатор (None, int, str)

    Returns:
        str: "046d" или None если значение не распознано

    Examples:
        >>> normalize_usb_id(1133)
        '046d'
        >>> normalize_usb_id("0x046D")
        '046d'
        >>> normalize_usb_id("c52b")
        'c52b'
        >>> normalize_usb_id("vendor") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith(HEX_PREFIX):
            number = _parse_leading(text[len(HEX_PREFIX):], 16)
        elif _FOUR_DECIMAL_DIGITS_RE.match(text):
            as_decimal = int(text, 10)
            if as_decimal >= AMBIGUOUS_DECIMAL_THRESHOLD:
                number = int(text, 16)
            else:
                number = as_decimal
        elif _HEX_DIGITS_ONLY_RE.match(text):
            if _HEX_LETTER_RE.search(text):
                number = int(text, 16)
            else:
                number = int(text, 10)
        else:
            number = _parse_leading(text, 10)
    else:
        return None

    if number is None or number < 0:
        return None

    return format(number, f"0{USB_ID_WIDTH}x")[-USB_ID_WIDTH:]


def canonical_usb_id(value: Any) -> Optional[str]:
    """
    Повторная нормализация значения, которое уже может быть каноническим.

    Строка ровно из 4 hex-символов нижнего регистра возвращается как есть,
    иначе "1008" (VID 0x1008) превратился бы в "03f0" при каждом проходе.
    Всё остальное идёт через normalize_usb_id.

    Args:
        value: Идентификатор

    Returns:
        str или None
    """
    if isinstance(value, str) and _CANONICAL_RE.match(value):
        return value
    return normalize_usb_id(value)


def make_device_key(vendor_id: str, product_id: str) -> str:
    """
    Собирает ключ устройства "vid:pid".

    Args:
        vendor_id: Канонический VID
        product_id: Канонический PID

    Returns:
        str: Ключ ("046d:c52b")
    """
    return f"{vendor_id}{DEVICE_KEY_SEPARATOR}{product_id}"


def split_device_key(key: str) -> Optional[Tuple[str, str]]:
    """
    Разбирает ключ "vid:pid" с повторной нормализацией обеих частей.

    Args:
        key: Ключ устройства

    Returns:
        Tuple[vendor_id, product_id] или None если ключ невалиден
    """
    if not key or DEVICE_KEY_SEPARATOR not in key:
        return None
    vendor_part, product_part = key.split(DEVICE_KEY_SEPARATOR, 1)
    vendor_id = canonical_usb_id(vendor_part)
    product_id = canonical_usb_id(product_part)
    if not vendor_id or not product_id:
        return None
    return vendor_id, product_id
