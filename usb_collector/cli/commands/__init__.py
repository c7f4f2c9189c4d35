"""
CLI команды.

- usb.py: usb add, usb list
"""

from .usb import cmd_usb_add, cmd_usb_list

__all__ = [
    "cmd_usb_add",
    "cmd_usb_list",
]
