# src/security/password.py — v1
"""Interactive password entry with confirmation."""

from __future__ import annotations

import getpass
from collections.abc import Callable

from sympass.core.errors import PasswordMismatch

Prompt = Callable[[str], str]


def prompt_password(prompt: Prompt = getpass.getpass) -> str:
    """Ask for the password twice on the controlling terminal.

    ``getpass`` reads from /dev/tty, not from redirected stdin.

    Raises:
        PasswordMismatch: If the two entries differ.
    """
    first = prompt("Enter Password: ")
    second = prompt("Confirm Password: ")
    if first != second:
        raise PasswordMismatch()
    return first
